"""Identity dependencies for FastAPI routes.

Credential verification happens upstream (API gateway / auth service). By
the time a request reaches this service the verified identity is forwarded
in ``X-User-Id`` and ``X-User-Role`` headers; these dependencies only read
and enforce it.
"""

from dataclasses import dataclass

from fastapi import Header, HTTPException

ADMIN_ROLE = "admin"


@dataclass(frozen=True)
class Identity:
    """The authenticated caller of a request."""

    user_id: str
    role: str = "user"

    @property
    def is_admin(self) -> bool:
        return self.role == ADMIN_ROLE


def optional_identity(
    x_user_id: str | None = Header(default=None),
    x_user_role: str | None = Header(default=None),
) -> Identity | None:
    if not x_user_id:
        return None
    return Identity(user_id=x_user_id, role=(x_user_role or "user").lower())


def require_sign_in(
    x_user_id: str | None = Header(default=None),
    x_user_role: str | None = Header(default=None),
) -> Identity:
    identity = optional_identity(x_user_id, x_user_role)
    if identity is None:
        raise HTTPException(status_code=401, detail="Authentication required")
    return identity


def require_admin(
    x_user_id: str | None = Header(default=None),
    x_user_role: str | None = Header(default=None),
) -> Identity:
    identity = require_sign_in(x_user_id, x_user_role)
    if not identity.is_admin:
        raise HTTPException(status_code=401, detail="Admin access required")
    return identity

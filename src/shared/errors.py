"""Application error taxonomy shared by the storefront bounded contexts.

Input validation and missing records reuse protean's own exceptions
(``ValidationError`` and ``ObjectNotFoundError``). The classes below cover
the remaining kinds that the HTTP layer maps to distinct status codes.
"""


class StorefrontError(Exception):
    """Base class for storefront-specific failures."""

    kind = "ServerError"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ConflictError(StorefrontError):
    """A write would violate a uniqueness or referential-integrity rule."""

    kind = "Conflict"


class MissingIdentityError(StorefrontError):
    """An authenticated code path was reached without a buyer identity."""

    kind = "ServerError"


class PaymentDeclinedError(StorefrontError):
    """The payment gateway answered, but refused the charge."""

    kind = "PaymentDeclined"


class GatewayUnavailableError(StorefrontError):
    """The payment gateway did not answer within the allowed attempts."""

    kind = "GatewayUnavailable"


class PartialFailureError(StorefrontError):
    """Money moved at the gateway but the matching order could not be recorded."""

    kind = "PartialFailure"

    def __init__(self, message: str, transaction_id: str | None = None) -> None:
        super().__init__(message)
        self.transaction_id = transaction_id

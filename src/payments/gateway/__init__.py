"""Payment gateway factory.

Provides get_gateway() / set_gateway() to swap implementations. The adapter
is picked from ``PAYMENT_GATEWAY``:
- ``fake`` (default): FakeGateway for development and testing
- ``braintree``: BraintreeGateway, configured from ``BRAINTREE_*`` variables

Either way it is wrapped in a ResilientGateway using
``PAYMENT_GATEWAY_TIMEOUT`` and ``PAYMENT_GATEWAY_MAX_ATTEMPTS``.
"""

import os

from payments.gateway.fake_adapter import FakeGateway
from payments.gateway.port import PaymentGateway
from payments.gateway.resilience import ResilientGateway

_current_gateway: PaymentGateway | None = None


def build_gateway() -> PaymentGateway:
    """Build the gateway described by the environment."""
    kind = os.getenv("PAYMENT_GATEWAY", "fake").lower()
    timeout = float(os.getenv("PAYMENT_GATEWAY_TIMEOUT", "10"))
    max_attempts = int(os.getenv("PAYMENT_GATEWAY_MAX_ATTEMPTS", "2"))

    if kind == "braintree":
        from payments.gateway.braintree_adapter import BraintreeGateway

        inner = BraintreeGateway(
            merchant_id=os.environ["BRAINTREE_MERCHANT_ID"],
            public_key=os.environ["BRAINTREE_PUBLIC_KEY"],
            private_key=os.environ["BRAINTREE_PRIVATE_KEY"],
            environment=os.getenv("BRAINTREE_ENVIRONMENT", "sandbox").lower(),
            timeout=timeout,
        )
    elif kind == "fake":
        inner = FakeGateway()
    else:
        raise ValueError(f"Unknown payment gateway: {kind}")

    return ResilientGateway(inner, timeout=timeout, max_attempts=max_attempts)


def get_gateway() -> PaymentGateway:
    """Return the current payment gateway, building it on first use."""
    global _current_gateway
    if _current_gateway is None:
        _current_gateway = build_gateway()
    return _current_gateway


def set_gateway(gateway: PaymentGateway) -> None:
    """Override the active payment gateway (useful for tests)."""
    global _current_gateway
    _current_gateway = gateway


def reset_gateway() -> None:
    """Reset to default gateway."""
    global _current_gateway
    _current_gateway = None

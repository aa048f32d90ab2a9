import pytest
from payments.gateway import reset_gateway


@pytest.fixture(autouse=True)
def _fresh_gateway(monkeypatch):
    """Every test starts from an unbuilt gateway and a clean environment."""
    for name in (
        "PAYMENT_GATEWAY",
        "PAYMENT_GATEWAY_TIMEOUT",
        "PAYMENT_GATEWAY_MAX_ATTEMPTS",
        "BRAINTREE_ENVIRONMENT",
        "BRAINTREE_MERCHANT_ID",
        "BRAINTREE_PUBLIC_KEY",
        "BRAINTREE_PRIVATE_KEY",
    ):
        monkeypatch.delenv(name, raising=False)
    reset_gateway()

    yield

    reset_gateway()

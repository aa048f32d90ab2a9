"""Payment gateway port (abstract interface).

Defines the contract the checkout flow relies on. Adapters wrap a concrete
gateway SDK (Braintree) or simulate one (FakeGateway) without any change to
the ordering code.
"""

from abc import ABC, abstractmethod
from dataclasses import asdict, dataclass


class GatewayTransientError(Exception):
    """The gateway could not be reached or asked us to retry later."""


@dataclass(frozen=True)
class SaleResult:
    """Outcome of a sale (charge) request."""

    success: bool
    transaction_id: str | None = None
    status: str | None = None
    amount: float | None = None
    message: str | None = None

    def as_dict(self) -> dict:
        return asdict(self)


class PaymentGateway(ABC):
    """Abstract payment gateway interface."""

    @abstractmethod
    def generate_client_token(self) -> str:
        """Token the client-side drop-in uses to tokenize a payment method."""
        ...

    @abstractmethod
    def create_sale(
        self,
        amount: float,
        payment_method_nonce: str,
        submit_for_settlement: bool = True,
    ) -> SaleResult:
        """Charge ``amount`` against the payment method behind the nonce.

        A declined charge is a normal ``SaleResult(success=False)``. Network
        trouble and gateway-side outages raise ``GatewayTransientError``.
        """
        ...

    @abstractmethod
    def void_sale(self, transaction_id: str) -> bool:
        """Cancel a sale that has not settled yet. True when the gateway voided it."""
        ...

"""Configurable fake payment gateway for development and testing.

Simulates the gateway without external calls. Tests configure it to
decline, to fail transiently a number of times, or to respond slowly.
"""

import time
from uuid import uuid4

from payments.gateway.port import GatewayTransientError, PaymentGateway, SaleResult


class FakeGateway(PaymentGateway):
    """Configurable fake payment gateway."""

    def __init__(self) -> None:
        self.should_succeed: bool = True
        self.failure_reason: str = "Card declined"
        self.transient_failures: int = 0
        self.delay: float = 0.0
        self.calls: list[dict] = []
        self.voided: list[str] = []

    def configure(
        self,
        should_succeed: bool = True,
        failure_reason: str = "Card declined",
        transient_failures: int = 0,
        delay: float = 0.0,
    ) -> None:
        """Configure gateway behavior at runtime."""
        self.should_succeed = should_succeed
        self.failure_reason = failure_reason
        self.transient_failures = transient_failures
        self.delay = delay

    def generate_client_token(self) -> str:
        self.calls.append({"method": "generate_client_token"})
        return f"fake_client_token_{uuid4().hex[:16]}"

    def create_sale(
        self,
        amount: float,
        payment_method_nonce: str,
        submit_for_settlement: bool = True,
    ) -> SaleResult:
        self.calls.append(
            {
                "method": "create_sale",
                "amount": amount,
                "payment_method_nonce": payment_method_nonce,
                "submit_for_settlement": submit_for_settlement,
            }
        )

        if self.delay:
            time.sleep(self.delay)
        if self.transient_failures > 0:
            self.transient_failures -= 1
            raise GatewayTransientError("Gateway temporarily unavailable")

        if self.should_succeed:
            return SaleResult(
                success=True,
                transaction_id=f"fake_txn_{uuid4().hex[:12]}",
                status="submitted_for_settlement" if submit_for_settlement else "authorized",
                amount=amount,
            )
        return SaleResult(
            success=False,
            status="processor_declined",
            amount=amount,
            message=self.failure_reason,
        )

    def void_sale(self, transaction_id: str) -> bool:
        self.calls.append({"method": "void_sale", "transaction_id": transaction_id})
        self.voided.append(transaction_id)
        return True

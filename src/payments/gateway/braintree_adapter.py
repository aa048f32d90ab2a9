"""Braintree payment gateway adapter.

Talks to Braintree through the official ``braintree`` SDK. SDK errors that
mean "try again" are surfaced as ``GatewayTransientError``; every other SDK
error propagates unchanged.
"""

import braintree
from braintree.exceptions import ServerError, ServiceUnavailableError, TooManyRequestsError

from payments.gateway.port import GatewayTransientError, PaymentGateway, SaleResult

_ENVIRONMENTS = {
    "sandbox": braintree.Environment.Sandbox,
    "production": braintree.Environment.Production,
}

_TRANSIENT_ERRORS = (ServerError, ServiceUnavailableError, TooManyRequestsError)


class BraintreeGateway(PaymentGateway):
    def __init__(
        self,
        merchant_id: str,
        public_key: str,
        private_key: str,
        environment: str = "sandbox",
        timeout: float = 10.0,
        client=None,
    ) -> None:
        if client is None:
            if environment not in _ENVIRONMENTS:
                raise ValueError(f"Unknown Braintree environment: {environment}")
            client = braintree.BraintreeGateway(
                braintree.Configuration(
                    environment=_ENVIRONMENTS[environment],
                    merchant_id=merchant_id,
                    public_key=public_key,
                    private_key=private_key,
                    timeout=timeout,
                )
            )
        self.client = client

    def generate_client_token(self) -> str:
        try:
            return self.client.client_token.generate()
        except _TRANSIENT_ERRORS as exc:
            raise GatewayTransientError(str(exc) or type(exc).__name__) from exc

    def create_sale(
        self,
        amount: float,
        payment_method_nonce: str,
        submit_for_settlement: bool = True,
    ) -> SaleResult:
        try:
            result = self.client.transaction.sale(
                {
                    "amount": f"{amount:.2f}",
                    "payment_method_nonce": payment_method_nonce,
                    "options": {"submit_for_settlement": submit_for_settlement},
                }
            )
        except _TRANSIENT_ERRORS as exc:
            raise GatewayTransientError(str(exc) or type(exc).__name__) from exc

        # Processor declines still carry the transaction; validation errors do not
        transaction = getattr(result, "transaction", None)
        return SaleResult(
            success=bool(result.is_success),
            transaction_id=getattr(transaction, "id", None),
            status=getattr(transaction, "status", None),
            amount=float(transaction.amount) if getattr(transaction, "amount", None) is not None else amount,
            message=None if result.is_success else getattr(result, "message", None),
        )

    def void_sale(self, transaction_id: str) -> bool:
        try:
            result = self.client.transaction.void(transaction_id)
        except _TRANSIENT_ERRORS as exc:
            raise GatewayTransientError(str(exc) or type(exc).__name__) from exc
        return bool(result.is_success)

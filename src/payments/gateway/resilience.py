"""Timeout and bounded retry around a payment gateway.

A hung or flaky gateway must not hold a request indefinitely. Each call
runs in a worker thread and is abandoned after ``timeout`` seconds.
``GatewayTransientError`` is raised before the gateway accepts the request,
so those failures are retried until ``max_attempts`` is reached.

A timed out sale is never retried: the abandoned call may still settle at
the gateway, and a second sale would charge the buyer twice. When such a
sale completes late and succeeds, it is voided.
"""

from concurrent.futures import ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeoutError

import structlog

from payments.gateway.port import GatewayTransientError, PaymentGateway, SaleResult
from shared.errors import GatewayUnavailableError

logger = structlog.get_logger(__name__)


class ResilientGateway(PaymentGateway):
    def __init__(self, inner: PaymentGateway, timeout: float = 10.0, max_attempts: int = 2) -> None:
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self.inner = inner
        self.timeout = timeout
        self.max_attempts = max_attempts
        self._executor = ThreadPoolExecutor(max_workers=4, thread_name_prefix="payment-gateway")

    def _call(self, operation: str, fn, *args, retry_on_timeout=True, on_abandoned=None, **kwargs):
        for attempt in range(1, self.max_attempts + 1):
            future = self._executor.submit(fn, *args, **kwargs)
            try:
                return future.result(timeout=self.timeout)
            except FutureTimeoutError:
                reason = f"timed out after {self.timeout}s"
                if on_abandoned is not None:
                    future.add_done_callback(on_abandoned)
                if not retry_on_timeout:
                    logger.error("payment_gateway_timeout", operation=operation, attempt=attempt, reason=reason)
                    break
            except GatewayTransientError as exc:
                reason = str(exc)

            logger.warning(
                "payment_gateway_retry",
                operation=operation,
                attempt=attempt,
                max_attempts=self.max_attempts,
                reason=reason,
            )

        raise GatewayUnavailableError(f"Payment gateway unavailable: {reason}")

    def _void_late_sale(self, future) -> None:
        if future.exception() is not None:
            logger.warning("payment_sale_failed_after_timeout", reason=str(future.exception()))
            return

        result = future.result()
        if not result.success:
            return

        logger.error(
            "payment_sale_completed_after_timeout",
            error="PartialFailure",
            transaction_id=result.transaction_id,
            amount=result.amount,
        )
        try:
            voided = self.inner.void_sale(result.transaction_id)
        except GatewayTransientError as exc:
            logger.error("payment_void_failed", transaction_id=result.transaction_id, reason=str(exc))
            return
        logger.info("payment_sale_voided", transaction_id=result.transaction_id, voided=voided)

    def close(self, wait: bool = True) -> None:
        """Stop the worker pool; ``wait`` lets abandoned calls finish first."""
        self._executor.shutdown(wait=wait)

    def generate_client_token(self) -> str:
        return self._call("generate_client_token", self.inner.generate_client_token)

    def create_sale(
        self,
        amount: float,
        payment_method_nonce: str,
        submit_for_settlement: bool = True,
    ) -> SaleResult:
        return self._call(
            "create_sale",
            self.inner.create_sale,
            amount,
            payment_method_nonce,
            submit_for_settlement=submit_for_settlement,
            retry_on_timeout=False,
            on_abandoned=self._void_late_sale,
        )

    def void_sale(self, transaction_id: str) -> bool:
        return self._call("void_sale", self.inner.void_sale, transaction_id)

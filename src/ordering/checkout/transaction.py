"""Checkout: charge the buyer, then record the order.

The steps run in a fixed order so that nothing reaches the gateway unless
the cart and the buyer are valid:

1. parse and validate the cart;
2. require a buyer identity and a payment nonce;
3. charge the cart total through the payment gateway;
4. record the order.

Once the charge has gone through the order write must not be lost. It is
retried a few times through the idempotent ``PlaceOrder`` command; if it
still fails, ``PartialFailureError`` carries the transaction id so the
charge can be reconciled.
"""

import json
from dataclasses import dataclass

from protean.exceptions import ValidationError
from protean.utils.globals import current_domain

from ordering.checkout.cart import Cart, parse_cart
from ordering.domain import logger
from ordering.order.placement import PlaceOrder
from payments.gateway.port import PaymentGateway, SaleResult
from shared.errors import MissingIdentityError, PartialFailureError, PaymentDeclinedError

PERSIST_ATTEMPTS = 3


@dataclass(frozen=True)
class CheckoutReceipt:
    order_id: str
    transaction_id: str
    amount: float


class CheckoutTransaction:
    def __init__(self, gateway: PaymentGateway, persist_attempts: int = PERSIST_ATTEMPTS) -> None:
        self.gateway = gateway
        self.persist_attempts = persist_attempts

    def run(self, cart, nonce, buyer_id) -> CheckoutReceipt:
        parsed = parse_cart(cart)
        if not buyer_id:
            raise MissingIdentityError("Buyer identity is missing")
        if not nonce:
            raise ValidationError({"nonce": ["Payment nonce is required"]})

        sale = self.gateway.create_sale(
            amount=parsed.total,
            payment_method_nonce=nonce,
            submit_for_settlement=True,
        )
        if not sale.success:
            logger.info("payment_declined", buyer_id=str(buyer_id), amount=parsed.total, reason=sale.message)
            raise PaymentDeclinedError(sale.message or "Payment declined")

        order_id = self._record_order(parsed, sale, buyer_id)
        return CheckoutReceipt(order_id=order_id, transaction_id=sale.transaction_id, amount=parsed.total)

    def _record_order(self, cart: Cart, sale: SaleResult, buyer_id) -> str:
        command = PlaceOrder(
            buyer_id=buyer_id,
            products=json.dumps(cart.product_ids),
            items=json.dumps(cart.grouped_items()),
            payment=json.dumps(sale.as_dict()),
            payment_transaction_id=sale.transaction_id,
            amount=cart.total,
        )

        for attempt in range(1, self.persist_attempts + 1):
            try:
                return current_domain.process(command, asynchronous=False)
            except Exception as exc:
                logger.warning(
                    "order_persist_retry",
                    transaction_id=sale.transaction_id,
                    attempt=attempt,
                    max_attempts=self.persist_attempts,
                    error=type(exc).__name__,
                )
                last_error = exc

        logger.error("order_persist_failed", transaction_id=sale.transaction_id, buyer_id=str(buyer_id))
        raise PartialFailureError(
            "Payment was captured but the order could not be recorded",
            transaction_id=sale.transaction_id,
        ) from last_error

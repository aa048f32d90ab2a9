"""Order placement: command and handler.

Placement is idempotent on the gateway transaction id: re-sending the same
command after a lost acknowledgement returns the order already recorded
instead of writing a second one.
"""

import json

from protean import handle
from protean.fields import Float, Identifier, String, Text
from protean.utils.globals import current_domain

from ordering.domain import logger, ordering
from ordering.order.order import Order


@ordering.command(part_of="Order")
class PlaceOrder:
    buyer_id = Identifier(required=True)
    products = Text(required=True)  # JSON: list of product ids
    items = Text(required=True)  # JSON: list of item dicts
    payment = Text(required=True)  # JSON: gateway sale result
    payment_transaction_id = String(required=True, max_length=255)
    amount = Float(required=True)


@ordering.command_handler(part_of=Order)
class PlaceOrderHandler:
    @handle(PlaceOrder)
    def place_order(self, command):
        repo = current_domain.repository_for(Order)

        existing = repo.find_by_transaction(command.payment_transaction_id)
        if existing is not None:
            logger.info(
                "order_already_placed",
                order_id=str(existing.id),
                transaction_id=command.payment_transaction_id,
            )
            return str(existing.id)

        order = Order.place(
            buyer_id=command.buyer_id,
            product_ids=json.loads(command.products),
            items_data=json.loads(command.items),
            payment=json.loads(command.payment),
            amount=command.amount,
        )
        repo.add(order)

        logger.info("order_placed", order_id=str(order.id), buyer_id=str(command.buyer_id), amount=command.amount)
        return str(order.id)

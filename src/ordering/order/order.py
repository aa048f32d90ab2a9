"""Order aggregate, the record of a paid checkout.

An order is written once, when the gateway confirms the charge, and from
then on only its status moves:

    Pending → Processing → Shipped → Delivered
    Canceled (from any state)

Administrators may set any of the five statuses regardless of the current
one; the flow above is the expected path, not an enforced state machine.
"""

import json
from datetime import UTC, datetime
from enum import Enum

from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, HasMany, Identifier, Integer, String, Text

from ordering.domain import ordering
from ordering.order.events import OrderPlaced, OrderStatusChanged


class OrderStatus(Enum):
    PENDING = "Pending"
    PROCESSING = "Processing"
    SHIPPED = "Shipped"
    DELIVERED = "Delivered"
    CANCELED = "Canceled"


@ordering.entity(part_of="Order")
class OrderItem:
    """One product line of an order, priced as it was in the cart."""

    product_id = Identifier(required=True)
    name = String(max_length=255)
    unit_price = Float(required=True, min_value=0.0)
    quantity = Integer(required=True, min_value=1)


@ordering.aggregate
class Order:
    buyer_id = Identifier(required=True)
    products = Text(required=True)  # JSON: product ids in cart order, one entry per unit
    items = HasMany(OrderItem)
    payment = Text(required=True)  # JSON: gateway sale result
    payment_transaction_id = String(required=True, max_length=255, unique=True)
    amount = Float(required=True, min_value=0.0)
    status = String(choices=OrderStatus, default=OrderStatus.PENDING.value)
    created_at = DateTime()
    updated_at = DateTime()

    @classmethod
    def place(cls, buyer_id, product_ids, items_data, payment, amount):
        """Record a checkout whose charge has already succeeded.

        Args:
            buyer_id: The signed-in buyer.
            product_ids: Product ids exactly as submitted, repeats included.
            items_data: List of dicts with product_id, name, unit_price, quantity.
            payment: Gateway sale result as a dict; must carry ``transaction_id``.
            amount: Charged total.
        """
        now = datetime.now(UTC)
        order = cls(
            buyer_id=buyer_id,
            products=json.dumps([str(product_id) for product_id in product_ids]),
            items=[OrderItem(**item) for item in items_data],
            payment=json.dumps(payment),
            payment_transaction_id=payment["transaction_id"],
            amount=amount,
            status=OrderStatus.PENDING.value,
            created_at=now,
            updated_at=now,
        )
        order.raise_(
            OrderPlaced(
                order_id=str(order.id),
                buyer_id=str(buyer_id),
                amount=amount,
                payment_transaction_id=order.payment_transaction_id,
                placed_at=now,
            )
        )
        return order

    @property
    def product_ids(self) -> list[str]:
        return json.loads(self.products) if self.products else []

    @property
    def payment_details(self) -> dict:
        return json.loads(self.payment) if self.payment else {}

    def change_status(self, status):
        try:
            new_status = OrderStatus(status)
        except ValueError:
            allowed = ", ".join(member.value for member in OrderStatus)
            raise ValidationError({"status": [f"Invalid status. Must be one of: {allowed}"]}) from None

        previous = self.status
        now = datetime.now(UTC)
        self.status = new_status.value
        self.updated_at = now

        self.raise_(
            OrderStatusChanged(
                order_id=str(self.id),
                previous_status=previous,
                status=new_status.value,
                changed_at=now,
            )
        )

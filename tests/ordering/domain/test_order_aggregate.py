import pytest
from ordering.order.events import OrderPlaced, OrderStatusChanged
from ordering.order.order import Order, OrderStatus
from protean.exceptions import ValidationError


def _order():
    return Order.place(
        buyer_id="buyer-1",
        product_ids=["p1", "p1", "p2"],
        items_data=[
            {"product_id": "p1", "name": "Lamp", "unit_price": 10.0, "quantity": 2},
            {"product_id": "p2", "name": "Bulb", "unit_price": 2.5, "quantity": 1},
        ],
        payment={"success": True, "transaction_id": "txn-1", "status": "submitted_for_settlement"},
        amount=22.5,
    )


class TestOrderPlacement:
    def test_new_order_is_pending(self):
        order = _order()
        assert order.status == OrderStatus.PENDING.value
        assert order.product_ids == ["p1", "p1", "p2"]
        assert order.payment_transaction_id == "txn-1"
        assert order.payment_details["status"] == "submitted_for_settlement"
        assert len(order.items) == 2

    def test_placement_raises_event(self):
        order = _order()
        event = order._events[0]
        assert isinstance(event, OrderPlaced)
        assert event.amount == 22.5
        assert event.payment_transaction_id == "txn-1"


class TestOrderStatus:
    @pytest.mark.parametrize("status", ["Processing", "Shipped", "Delivered", "Canceled", "Pending"])
    def test_any_known_status_can_be_set(self, status):
        order = _order()
        order.change_status(status)
        assert order.status == status

    def test_transitions_are_not_constrained(self):
        order = _order()
        order.change_status("Delivered")
        order.change_status("Pending")
        assert order.status == "Pending"

    def test_status_change_raises_event(self):
        order = _order()
        order.change_status("Shipped")
        event = order._events[-1]
        assert isinstance(event, OrderStatusChanged)
        assert event.previous_status == "Pending"
        assert event.status == "Shipped"

    @pytest.mark.parametrize("status", ["Lost", "shipped", ""])
    def test_unknown_status_rejected(self, status):
        order = _order()
        with pytest.raises(ValidationError):
            order.change_status(status)
        assert order.status == "Pending"

"""FastAPI routes for the Ordering domain: checkout and orders."""

from fastapi import APIRouter, Depends
from protean.utils.globals import current_domain

from ordering.api.schemas import (
    CheckoutRequest,
    CheckoutResponse,
    ClientTokenResponse,
    OrderEnvelope,
    OrderItemSchema,
    OrderListResponse,
    OrderSchema,
    UpdateOrderStatusRequest,
)
from ordering.checkout.transaction import CheckoutTransaction
from ordering.order.order import Order
from ordering.order.status import UpdateOrderStatus
from payments.gateway import get_gateway
from shared.auth import Identity, require_admin, require_sign_in

payment_router = APIRouter(prefix="/product/braintree", tags=["checkout"])
order_router = APIRouter(prefix="/order", tags=["orders"])


def _order_schema(order: Order) -> OrderSchema:
    return OrderSchema(
        id=str(order.id),
        buyer_id=str(order.buyer_id),
        products=order.product_ids,
        items=[
            OrderItemSchema(
                product_id=str(item.product_id),
                name=item.name,
                unit_price=item.unit_price,
                quantity=item.quantity,
            )
            for item in order.items
        ],
        payment=order.payment_details,
        amount=order.amount,
        status=order.status,
        created_at=order.created_at,
        updated_at=order.updated_at,
    )


# ---------------------------------------------------------------------------
# Checkout
#
# Plain functions: gateway calls block, so FastAPI runs them in its threadpool.
# ---------------------------------------------------------------------------
@payment_router.get("/token", response_model=ClientTokenResponse)
def client_token() -> ClientTokenResponse:
    return ClientTokenResponse(client_token=get_gateway().generate_client_token())


@payment_router.post("/payment", response_model=CheckoutResponse)
def checkout(body: CheckoutRequest, identity: Identity = Depends(require_sign_in)) -> CheckoutResponse:
    receipt = CheckoutTransaction(get_gateway()).run(cart=body.cart, nonce=body.nonce, buyer_id=identity.user_id)
    return CheckoutResponse(
        message="Payment completed",
        order_id=receipt.order_id,
        transaction_id=receipt.transaction_id,
        amount=receipt.amount,
    )


# ---------------------------------------------------------------------------
# Orders
# ---------------------------------------------------------------------------
@order_router.get("/orders", response_model=OrderListResponse)
async def my_orders(identity: Identity = Depends(require_sign_in)) -> OrderListResponse:
    orders = current_domain.repository_for(Order).for_buyer(identity.user_id)
    return OrderListResponse(orders=[_order_schema(order) for order in orders])


@order_router.get("/all-orders", response_model=OrderListResponse)
async def all_orders(_: Identity = Depends(require_admin)) -> OrderListResponse:
    orders = current_domain.repository_for(Order).find_all()
    return OrderListResponse(orders=[_order_schema(order) for order in orders])


@order_router.put("/order-status/{order_id}", response_model=OrderEnvelope)
async def update_order_status(
    order_id: str, body: UpdateOrderStatusRequest, _: Identity = Depends(require_admin)
) -> OrderEnvelope:
    current_domain.process(UpdateOrderStatus(order_id=order_id, status=body.status), asynchronous=False)
    order = current_domain.repository_for(Order).get(order_id)
    return OrderEnvelope(message="Order status updated", order=_order_schema(order))

"""FastAPI routes for the Ordering domain: cart and orders."""

from fastapi import APIRouter, Depends

from ordering.api.schemas import (
    AddToCartRequest,
    CartLineSchema,
    CartResponse,
    OrderIdResponse,
    OrderResponse,
)
from ordering.cart.items import add_line, clear, remove_line
from ordering.cart.view import view
from ordering.checkout.coordinator import confirm_payment, create_order
from ordering.order.cancellation import cancel_order
from ordering.order.history import get_order, list_orders
from shared.api import StatusResponse, current_actor
from shared.auth import Actor
from shared.utils.db import unit_of_work

# ---------------------------------------------------------------------------
# Cart Router
# ---------------------------------------------------------------------------
cart_router = APIRouter(prefix="/cart", tags=["cart"])


@cart_router.get("", response_model=CartResponse)
def show_cart(actor: Actor | None = Depends(current_actor)) -> CartResponse:
    with unit_of_work() as session:
        cart = view(session, actor)
        return CartResponse(
            lines=[CartLineSchema.model_validate(line) for line in cart.lines],
            total=cart.total,
        )


@cart_router.post("/items", status_code=201, response_model=StatusResponse)
def add_cart_item(body: AddToCartRequest, actor: Actor | None = Depends(current_actor)) -> StatusResponse:
    with unit_of_work() as session:
        add_line(session, actor, body.product_id, body.quantity)
    return StatusResponse()


@cart_router.delete("/items/{line_id}", response_model=StatusResponse)
def remove_cart_item(line_id: int, actor: Actor | None = Depends(current_actor)) -> StatusResponse:
    with unit_of_work() as session:
        remove_line(session, actor, line_id)
    return StatusResponse()


@cart_router.delete("", response_model=StatusResponse)
def clear_cart(actor: Actor | None = Depends(current_actor)) -> StatusResponse:
    with unit_of_work() as session:
        clear(session, actor)
    return StatusResponse()


# ---------------------------------------------------------------------------
# Order Router
# ---------------------------------------------------------------------------
order_router = APIRouter(prefix="/orders", tags=["orders"])


@order_router.get("", response_model=list[OrderResponse])
def order_history(actor: Actor | None = Depends(current_actor)) -> list[OrderResponse]:
    with unit_of_work() as session:
        return [OrderResponse.model_validate(order) for order in list_orders(session, actor)]


@order_router.post("", status_code=201, response_model=OrderIdResponse)
def checkout(actor: Actor | None = Depends(current_actor)) -> OrderIdResponse:
    """Convert the cart into a pending order.

    The order, its lines and the cart clear are committed together.
    """
    with unit_of_work() as session:
        order = create_order(session, actor)
        return OrderIdResponse(order_id=order.id)


@order_router.get("/{order_id}", response_model=OrderResponse)
def order_detail(order_id: int, actor: Actor | None = Depends(current_actor)) -> OrderResponse:
    with unit_of_work() as session:
        return OrderResponse.model_validate(get_order(session, actor, order_id))


@order_router.post("/{order_id}/confirm", response_model=OrderResponse)
def confirm(order_id: int, actor: Actor | None = Depends(current_actor)) -> OrderResponse:
    with unit_of_work() as session:
        return OrderResponse.model_validate(confirm_payment(session, actor, order_id))


@order_router.post("/{order_id}/cancel", response_model=OrderResponse)
def cancel(order_id: int, actor: Actor | None = Depends(current_actor)) -> OrderResponse:
    with unit_of_work() as session:
        return OrderResponse.model_validate(cancel_order(session, actor, order_id))

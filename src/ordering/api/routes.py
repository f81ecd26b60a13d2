"""FastAPI routes for the Ordering domain — carts and orders."""

import json

from fastapi import APIRouter

from ordering.address import address_to_dict
from ordering.api.schemas import (
    AddItemRequest,
    AddressSchema,
    CartResponse,
    EmailRequest,
    OrderIdResponse,
    OrderResponse,
    StatusResponse,
    UpdateQuantityRequest,
)
from ordering.cart.cart import Cart
from ordering.cart.items import RemoveFromCart, UpdateCartQuantity, add_to_cart
from ordering.cart.management import ClearCart, SetBillingAddress, SetShippingAddress, UpdateEmail
from ordering.cart.management import get_cart as load_cart
from ordering.checkout.checkout import checkout
from ordering.domain import cart_locks, order_locks
from ordering.order.cancellation import CancelOrder
from ordering.order.lookup import get_order as load_order
from ordering.order.modification import (
    RemoveOrderItem,
    UpdateOrderBillingAddress,
    UpdateOrderEmail,
    UpdateOrderItemQuantity,
    UpdateOrderShippingAddress,
    add_order_item,
)
from ordering.order.order import Order
from ordering.order.shipping import ShipOrder


def _address_json(body: AddressSchema) -> str:
    return json.dumps(body.model_dump(exclude_none=True))


def _line_items(aggregate) -> list[dict]:
    return [
        {
            "product_id": str(item.product_id),
            "product_name": item.product_name,
            "product_brand": item.product_brand or "",
            "price": item.price,
            "quantity": item.quantity,
        }
        for item in aggregate.items
    ]


def _cart_response(cart: Cart) -> CartResponse:
    return CartResponse(
        user_id=str(cart.user_id),
        email=cart.email,
        items=_line_items(cart),
        billing_address=address_to_dict(cart.billing_address),
        shipping_address=address_to_dict(cart.shipping_address),
        total=cart.total,
        currency=cart.currency,
        previous_order_ids=cart.order_history(),
        created_at=cart.created_at,
        updated_at=cart.updated_at,
    )


def _order_response(order: Order) -> OrderResponse:
    return OrderResponse(
        order_id=str(order.order_id),
        user_id=str(order.user_id),
        email=order.email,
        status=order.status,
        items=_line_items(order),
        billing_address=address_to_dict(order.billing_address),
        shipping_address=address_to_dict(order.shipping_address),
        total=order.total,
        currency=order.currency,
        created_at=order.created_at,
        updated_at=order.updated_at,
    )


# ---------------------------------------------------------------------------
# Cart Router
# ---------------------------------------------------------------------------
cart_router = APIRouter(prefix="/carts", tags=["carts"])


@cart_router.get("/{user_id}", response_model=CartResponse)
async def get_cart(user_id: str) -> CartResponse:
    return _cart_response(load_cart(user_id))


@cart_router.post("/{user_id}/items/{product_id}", response_model=StatusResponse)
async def add_cart_item(user_id: str, product_id: str, body: AddItemRequest) -> StatusResponse:
    await add_to_cart(user_id, product_id, body.quantity)
    return StatusResponse()


@cart_router.put("/{user_id}/items/{product_id}", response_model=StatusResponse)
async def update_cart_item_quantity(user_id: str, product_id: str, body: UpdateQuantityRequest) -> StatusResponse:
    await cart_locks.process(
        user_id, UpdateCartQuantity(user_id=user_id, product_id=product_id, quantity=body.quantity)
    )
    return StatusResponse()


@cart_router.delete("/{user_id}/items/{product_id}", response_model=StatusResponse)
async def remove_cart_item(user_id: str, product_id: str) -> StatusResponse:
    await cart_locks.process(user_id, RemoveFromCart(user_id=user_id, product_id=product_id))
    return StatusResponse()


@cart_router.put("/{user_id}/billing-address", response_model=StatusResponse)
async def set_cart_billing_address(user_id: str, body: AddressSchema) -> StatusResponse:
    await cart_locks.process(user_id, SetBillingAddress(user_id=user_id, address=_address_json(body)))
    return StatusResponse()


@cart_router.put("/{user_id}/shipping-address", response_model=StatusResponse)
async def set_cart_shipping_address(user_id: str, body: AddressSchema) -> StatusResponse:
    await cart_locks.process(user_id, SetShippingAddress(user_id=user_id, address=_address_json(body)))
    return StatusResponse()


@cart_router.put("/{user_id}/email", response_model=StatusResponse)
async def update_cart_email(user_id: str, body: EmailRequest) -> StatusResponse:
    await cart_locks.process(user_id, UpdateEmail(user_id=user_id, email=body.email))
    return StatusResponse()


@cart_router.delete("/{user_id}", response_model=StatusResponse)
async def clear_cart(user_id: str) -> StatusResponse:
    await cart_locks.process(user_id, ClearCart(user_id=user_id))
    return StatusResponse()


@cart_router.post("/{user_id}/checkout", status_code=201, response_model=OrderIdResponse)
async def checkout_cart(user_id: str) -> OrderIdResponse:
    """Convert the cart into a new order and return its id."""
    order_id = await checkout(user_id)
    return OrderIdResponse(order_id=order_id)


# ---------------------------------------------------------------------------
# Order Router
# ---------------------------------------------------------------------------
order_router = APIRouter(prefix="/orders", tags=["orders"])


@order_router.get("/{order_id}", response_model=OrderResponse)
async def get_order(order_id: str) -> OrderResponse:
    return _order_response(load_order(order_id))


@order_router.put("/{order_id}/email", response_model=StatusResponse)
async def update_order_email(order_id: str, body: EmailRequest) -> StatusResponse:
    await order_locks.process(order_id, UpdateOrderEmail(order_id=order_id, email=body.email))
    return StatusResponse()


@order_router.put("/{order_id}/billing-address", response_model=StatusResponse)
async def update_order_billing_address(order_id: str, body: AddressSchema) -> StatusResponse:
    await order_locks.process(order_id, UpdateOrderBillingAddress(order_id=order_id, address=_address_json(body)))
    return StatusResponse()


@order_router.put("/{order_id}/shipping-address", response_model=StatusResponse)
async def update_order_shipping_address(order_id: str, body: AddressSchema) -> StatusResponse:
    await order_locks.process(order_id, UpdateOrderShippingAddress(order_id=order_id, address=_address_json(body)))
    return StatusResponse()


@order_router.post("/{order_id}/items/{product_id}", response_model=StatusResponse)
async def add_order_item_route(order_id: str, product_id: str, body: AddItemRequest) -> StatusResponse:
    await add_order_item(order_id, product_id, body.quantity)
    return StatusResponse()


@order_router.put("/{order_id}/items/{product_id}", response_model=StatusResponse)
async def update_order_item_quantity(order_id: str, product_id: str, body: UpdateQuantityRequest) -> StatusResponse:
    await order_locks.process(
        order_id, UpdateOrderItemQuantity(order_id=order_id, product_id=product_id, quantity=body.quantity)
    )
    return StatusResponse()


@order_router.delete("/{order_id}/items/{product_id}", response_model=StatusResponse)
async def remove_order_item(order_id: str, product_id: str) -> StatusResponse:
    await order_locks.process(order_id, RemoveOrderItem(order_id=order_id, product_id=product_id))
    return StatusResponse()


@order_router.post("/{order_id}/ship", response_model=StatusResponse)
async def ship_order(order_id: str) -> StatusResponse:
    await order_locks.process(order_id, ShipOrder(order_id=order_id))
    return StatusResponse()


@order_router.post("/{order_id}/cancel", response_model=StatusResponse)
async def cancel_order(order_id: str) -> StatusResponse:
    await order_locks.process(order_id, CancelOrder(order_id=order_id))
    return StatusResponse()

"""FastAPI endpoints for the storefront."""

from fastapi import APIRouter
from protean.utils.globals import current_domain

from storefront.api.schemas import (
    AddCartItemRequest,
    CartLineResponse,
    CartResponse,
    CheckoutCartRequest,
    CreateCartRequest,
    CreateOrderRequest,
    CreateProductRequest,
    CreateUserRequest,
    OrderItemResponse,
    OrderResponse,
    ProductResponse,
    SetCartQuantityRequest,
    UserResponse,
)
from storefront.catalogue.lookup import get_product, list_products
from storefront.catalogue.registration import AddProduct
from storefront.identity.lookup import get_user, list_users
from storefront.identity.registration import RegisterUser
from storefront.ordering.cart.items import AddToCart, ClearCart, RemoveFromCart, SetCartQuantity
from storefront.ordering.cart.lookup import get_cart
from storefront.ordering.cart.management import CheckoutCart, CreateCart
from storefront.ordering.order.lifecycle import OrderLifecycle
from storefront.ordering.order.request import RequestedItem

product_router = APIRouter(prefix="/products", tags=["products"])
user_router = APIRouter(prefix="/users", tags=["users"])
order_router = APIRouter(prefix="/orders", tags=["orders"])
cart_router = APIRouter(prefix="/carts", tags=["carts"])

lifecycle = OrderLifecycle()


def _product_response(product) -> ProductResponse:
    return ProductResponse(
        id=str(product.id),
        name=product.name,
        price=product.price,
        stock=product.stock,
        created_at=product.created_at,
    )


def _user_response(user) -> UserResponse:
    return UserResponse(
        id=str(user.id),
        name=user.name,
        email=user.email,
        created_at=user.created_at,
    )


def _order_response(order) -> OrderResponse:
    return OrderResponse(
        id=str(order.id),
        user_id=str(order.user_id),
        user_name=order.user_name,
        status=order.status,
        total=order.total,
        items=[
            OrderItemResponse(
                product_id=str(item.product_id),
                product_name=item.product_name,
                quantity=item.quantity,
                unit_price=item.unit_price,
                subtotal=round(item.subtotal(), 2),
            )
            for item in order.items
        ],
        created_at=order.created_at,
        updated_at=order.updated_at,
    )


def _cart_response(cart) -> CartResponse:
    return CartResponse(
        id=str(cart.id),
        user_id=str(cart.user_id) if cart.user_id else None,
        status=cart.status,
        order_id=str(cart.order_id) if cart.order_id else None,
        lines=[
            CartLineResponse(
                product_id=line.product_id,
                unit_price=line.unit_price,
                quantity=line.quantity,
                subtotal=round(line.subtotal(), 2),
            )
            for line in cart.lines()
        ],
        total=cart.total(),
    )


# --- Product endpoints ---


@product_router.get("", response_model=list[ProductResponse])
async def read_products() -> list[ProductResponse]:
    return [_product_response(product) for product in list_products()]


@product_router.get("/{product_id}", response_model=ProductResponse)
async def read_product(product_id: str) -> ProductResponse:
    return _product_response(get_product(product_id))


@product_router.post("", status_code=201, response_model=ProductResponse)
async def create_product(body: CreateProductRequest) -> ProductResponse:
    command = AddProduct(name=body.name, price=body.price, stock=body.stock)
    product_id = current_domain.process(command, asynchronous=False)
    return _product_response(get_product(product_id))


# --- User endpoints ---


@user_router.get("", response_model=list[UserResponse])
async def read_users() -> list[UserResponse]:
    return [_user_response(user) for user in list_users()]


@user_router.get("/{user_id}", response_model=UserResponse)
async def read_user(user_id: str) -> UserResponse:
    return _user_response(get_user(user_id))


@user_router.post("", status_code=201, response_model=UserResponse)
async def create_user(body: CreateUserRequest) -> UserResponse:
    command = RegisterUser(name=body.name, email=body.email)
    user_id = current_domain.process(command, asynchronous=False)
    return _user_response(get_user(user_id))


# --- Order endpoints ---


@order_router.get("", response_model=list[OrderResponse])
async def read_orders(user_id: str | None = None) -> list[OrderResponse]:
    return [_order_response(order) for order in lifecycle.list_orders(user_id=user_id)]


@order_router.get("/user/{user_id}", response_model=list[OrderResponse])
async def read_user_orders(user_id: str) -> list[OrderResponse]:
    return [_order_response(order) for order in lifecycle.list_orders(user_id=user_id)]


@order_router.get("/{order_id}", response_model=OrderResponse)
async def read_order(order_id: str) -> OrderResponse:
    return _order_response(lifecycle.get_order(order_id))


@order_router.post("", status_code=201, response_model=OrderResponse)
async def create_order(body: CreateOrderRequest) -> OrderResponse:
    items = [RequestedItem(product_id=item.product_id, quantity=item.quantity) for item in body.items]
    return _order_response(lifecycle.create_order(body.user_id, items))


@order_router.patch("/{order_id}/confirm", response_model=OrderResponse)
async def confirm_order(order_id: str) -> OrderResponse:
    return _order_response(lifecycle.confirm_order(order_id))


@order_router.patch("/{order_id}/ship", response_model=OrderResponse)
async def ship_order(order_id: str) -> OrderResponse:
    return _order_response(lifecycle.ship_order(order_id))


@order_router.patch("/{order_id}/cancel", response_model=OrderResponse)
async def cancel_order(order_id: str) -> OrderResponse:
    return _order_response(lifecycle.cancel_order(order_id))


# --- Cart endpoints ---


@cart_router.post("", status_code=201, response_model=CartResponse)
async def create_cart(body: CreateCartRequest) -> CartResponse:
    cart_id = current_domain.process(CreateCart(user_id=body.user_id), asynchronous=False)
    return _cart_response(get_cart(cart_id))


@cart_router.get("/{cart_id}", response_model=CartResponse)
async def read_cart(cart_id: str) -> CartResponse:
    return _cart_response(get_cart(cart_id))


@cart_router.post("/{cart_id}/items", response_model=CartResponse)
async def add_cart_item(cart_id: str, body: AddCartItemRequest) -> CartResponse:
    command = AddToCart(cart_id=cart_id, product_id=body.product_id, quantity=body.quantity)
    current_domain.process(command, asynchronous=False)
    return _cart_response(get_cart(cart_id))


@cart_router.put("/{cart_id}/items/{product_id}", response_model=CartResponse)
async def set_cart_item_quantity(cart_id: str, product_id: str, body: SetCartQuantityRequest) -> CartResponse:
    command = SetCartQuantity(cart_id=cart_id, product_id=product_id, quantity=body.quantity)
    current_domain.process(command, asynchronous=False)
    return _cart_response(get_cart(cart_id))


@cart_router.delete("/{cart_id}/items/{product_id}", response_model=CartResponse)
async def remove_cart_item(cart_id: str, product_id: str) -> CartResponse:
    current_domain.process(RemoveFromCart(cart_id=cart_id, product_id=product_id), asynchronous=False)
    return _cart_response(get_cart(cart_id))


@cart_router.delete("/{cart_id}/items", response_model=CartResponse)
async def clear_cart(cart_id: str) -> CartResponse:
    current_domain.process(ClearCart(cart_id=cart_id), asynchronous=False)
    return _cart_response(get_cart(cart_id))


@cart_router.post("/{cart_id}/checkout", status_code=201, response_model=OrderResponse)
async def checkout_cart(cart_id: str, body: CheckoutCartRequest) -> OrderResponse:
    command = CheckoutCart(cart_id=cart_id, user_id=body.user_id)
    order_id = current_domain.process(command, asynchronous=False)
    return _order_response(lifecycle.get_order(order_id))

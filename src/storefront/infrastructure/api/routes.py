"""FastAPI routes for the storefront.

Each route translates between the Pydantic schemas (external contract)
and an application handler.  Domain exceptions are not caught here; the
application-level handler in ``app.py`` renders them.
"""

from __future__ import annotations

from dataclasses import asdict

from fastapi import APIRouter, Depends, Query, Response

from storefront.application.add_product import AddProductHandler
from storefront.application.add_to_cart import AddToCartHandler
from storefront.application.checkout import CheckoutHandler
from storefront.application.delete_product import DeleteProductHandler
from storefront.application.delete_review import DeleteReviewHandler
from storefront.application.dto import CartDTO, CheckoutRequest
from storefront.application.edit_review import EditReviewHandler
from storefront.application.list_reviews import (
    ListReviewsHandler,
    MarkReviewHelpfulHandler,
    ShowReviewHandler,
)
from storefront.application.notifications import NotificationDispatcher
from storefront.application.register_user import RegisterUserHandler
from storefront.application.remove_from_cart import ClearCartHandler, RemoveFromCartHandler
from storefront.application.show_cart import ShowCartHandler
from storefront.application.show_order import (
    ListAllOrdersHandler,
    ListOrdersHandler,
    ShowOrderHandler,
)
from storefront.application.show_product import (
    ListProductsHandler,
    ListTopProductsHandler,
    ShowProductHandler,
)
from storefront.application.submit_review import SubmitReviewHandler
from storefront.application.update_cart_item import UpdateCartItemHandler
from storefront.application.update_order_status import (
    UpdateOrderStatusHandler,
    UpdatePaymentStatusHandler,
)
from storefront.application.update_product import UpdateProductHandler
from storefront.domain.model.user import User
from storefront.domain.repository.unit_of_work import UnitOfWork
from storefront.infrastructure.api.dependencies import (
    current_admin,
    current_user,
    get_notifications,
    get_uow,
)
from storefront.infrastructure.api.schemas import (
    AddCartItemRequest,
    CheckoutRequestSchema,
    CreateProductRequest,
    EditReviewRequest,
    RegisterUserRequest,
    SubmitReviewRequest,
    UpdateCartItemRequest,
    UpdateOrderStatusRequest,
    UpdatePaymentStatusRequest,
    UpdateProductRequest,
    UserResponse,
)

checkout_router = APIRouter(prefix="/checkout", tags=["checkout"])
cart_router = APIRouter(prefix="/cart", tags=["cart"])
order_router = APIRouter(prefix="/orders", tags=["orders"])
product_router = APIRouter(prefix="/products", tags=["products"])
review_router = APIRouter(prefix="/reviews", tags=["reviews"])
user_router = APIRouter(prefix="/users", tags=["users"])

MAX_PAGE_SIZE = 100


def _cart_payload(dto: CartDTO) -> dict:
    return {**asdict(dto), "item_count": dto.item_count}


# --- Checkout ---


@checkout_router.post("", status_code=201)
def checkout(
    body: CheckoutRequestSchema,
    user: User = Depends(current_user),
    uow: UnitOfWork = Depends(get_uow),
    notifications: NotificationDispatcher = Depends(get_notifications),
):
    """Convert the caller's cart into an order."""
    request = CheckoutRequest(buyer_id=user.id, **body.model_dump())
    order = CheckoutHandler(uow, notifications).handle(request)
    return asdict(order)


# --- Cart ---


@cart_router.get("")
def show_cart(user: User = Depends(current_user), uow: UnitOfWork = Depends(get_uow)):
    return _cart_payload(ShowCartHandler(uow).handle(user.id))


@cart_router.post("/items", status_code=201)
def add_cart_item(
    body: AddCartItemRequest,
    user: User = Depends(current_user),
    uow: UnitOfWork = Depends(get_uow),
):
    cart = AddToCartHandler(uow).handle(user.id, body.product_id, body.quantity)
    return _cart_payload(cart)


@cart_router.put("/items/{product_id}")
def update_cart_item(
    product_id: str,
    body: UpdateCartItemRequest,
    user: User = Depends(current_user),
    uow: UnitOfWork = Depends(get_uow),
):
    cart = UpdateCartItemHandler(uow).handle(user.id, product_id, body.quantity)
    return _cart_payload(cart)


@cart_router.delete("/items/{product_id}", status_code=204)
def remove_cart_item(
    product_id: str,
    user: User = Depends(current_user),
    uow: UnitOfWork = Depends(get_uow),
):
    RemoveFromCartHandler(uow).handle(user.id, product_id)
    return Response(status_code=204)


@cart_router.delete("", status_code=204)
def clear_cart(user: User = Depends(current_user), uow: UnitOfWork = Depends(get_uow)):
    ClearCartHandler(uow).handle(user.id)
    return Response(status_code=204)


# --- Orders ---


@order_router.get("")
def list_orders(
    page: int = Query(1, ge=1),
    limit: int | None = Query(None, ge=1, le=MAX_PAGE_SIZE),
    user: User = Depends(current_user),
    uow: UnitOfWork = Depends(get_uow),
):
    return [asdict(o) for o in ListOrdersHandler(uow).handle(user.id, page, limit)]


@order_router.get("/all")
def list_all_orders(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=MAX_PAGE_SIZE),
    admin: User = Depends(current_admin),
    uow: UnitOfWork = Depends(get_uow),
):
    return [asdict(o) for o in ListAllOrdersHandler(uow).handle(admin.id, page, limit)]


@order_router.get("/{order_id}")
def show_order(
    order_id: int,
    user: User = Depends(current_user),
    uow: UnitOfWork = Depends(get_uow),
):
    return asdict(ShowOrderHandler(uow).handle(user.id, order_id))


@order_router.put("/{order_id}/status")
def update_order_status(
    order_id: int,
    body: UpdateOrderStatusRequest,
    admin: User = Depends(current_admin),
    uow: UnitOfWork = Depends(get_uow),
):
    return asdict(UpdateOrderStatusHandler(uow).handle(admin.id, order_id, body.status))


@order_router.put("/{order_id}/payment")
def update_payment_status(
    order_id: int,
    body: UpdatePaymentStatusRequest,
    admin: User = Depends(current_admin),
    uow: UnitOfWork = Depends(get_uow),
):
    order = UpdatePaymentStatusHandler(uow).handle(admin.id, order_id, body.payment_status)
    return asdict(order)


# --- Products ---


@product_router.get("")
def list_products(
    page: int = Query(1, ge=1),
    limit: int | None = Query(None, ge=1, le=MAX_PAGE_SIZE),
    uow: UnitOfWork = Depends(get_uow),
):
    return [asdict(p) for p in ListProductsHandler(uow).handle(page, limit)]


@product_router.get("/top")
def list_top_products(
    limit: int = Query(5, ge=1, le=MAX_PAGE_SIZE),
    uow: UnitOfWork = Depends(get_uow),
):
    """Products rated 4 or better, best first."""
    return [asdict(p) for p in ListTopProductsHandler(uow).handle(limit)]


@product_router.get("/{product_id}")
def show_product(product_id: str, uow: UnitOfWork = Depends(get_uow)):
    return asdict(ShowProductHandler(uow).handle(product_id))


@product_router.post("", status_code=201)
def create_product(
    body: CreateProductRequest,
    admin: User = Depends(current_admin),
    uow: UnitOfWork = Depends(get_uow),
):
    product = AddProductHandler(uow).handle(
        name=body.name, price=str(body.price), stock=body.stock
    )
    return asdict(product)


@product_router.put("/{product_id}")
def update_product(
    product_id: str,
    body: UpdateProductRequest,
    admin: User = Depends(current_admin),
    uow: UnitOfWork = Depends(get_uow),
):
    product = UpdateProductHandler(uow).handle(
        product_id=product_id,
        new_price=str(body.price) if body.price is not None else None,
        stock=body.stock,
    )
    return asdict(product)


@product_router.delete("/{product_id}", status_code=204)
def delete_product(
    product_id: str,
    admin: User = Depends(current_admin),
    uow: UnitOfWork = Depends(get_uow),
):
    DeleteProductHandler(uow).handle(product_id)
    return Response(status_code=204)


# --- Reviews ---


@product_router.get("/{product_id}/reviews")
def list_reviews(
    product_id: str,
    user_id: str | None = None,
    page: int = Query(1, ge=1),
    limit: int | None = Query(None, ge=1, le=MAX_PAGE_SIZE),
    uow: UnitOfWork = Depends(get_uow),
):
    reviews = ListReviewsHandler(uow).handle(product_id, user_id, page, limit)
    return [asdict(r) for r in reviews]


@product_router.post("/{product_id}/reviews", status_code=201)
def submit_review(
    product_id: str,
    body: SubmitReviewRequest,
    user: User = Depends(current_user),
    uow: UnitOfWork = Depends(get_uow),
):
    review = SubmitReviewHandler(uow).handle(
        user_id=user.id,
        product_id=product_id,
        rating=body.rating,
        title=body.title,
        content=body.content,
    )
    return asdict(review)


@review_router.get("/{review_id}")
def show_review(review_id: int, uow: UnitOfWork = Depends(get_uow)):
    return asdict(ShowReviewHandler(uow).handle(review_id))


@review_router.put("/{review_id}")
def edit_review(
    review_id: int,
    body: EditReviewRequest,
    user: User = Depends(current_user),
    uow: UnitOfWork = Depends(get_uow),
):
    review = EditReviewHandler(uow).handle(
        user_id=user.id,
        review_id=review_id,
        rating=body.rating,
        title=body.title,
        content=body.content,
    )
    return asdict(review)


@review_router.delete("/{review_id}", status_code=204)
def delete_review(
    review_id: int,
    user: User = Depends(current_user),
    uow: UnitOfWork = Depends(get_uow),
):
    DeleteReviewHandler(uow).handle(user.id, review_id)
    return Response(status_code=204)


@review_router.post("/{review_id}/helpful")
def mark_review_helpful(
    review_id: int,
    user: User = Depends(current_user),
    uow: UnitOfWork = Depends(get_uow),
):
    return asdict(MarkReviewHelpfulHandler(uow).handle(review_id))


# --- Users ---


@user_router.post("", status_code=201, response_model=UserResponse)
def register_user(
    body: RegisterUserRequest,
    uow: UnitOfWork = Depends(get_uow),
    notifications: NotificationDispatcher = Depends(get_notifications),
) -> UserResponse:
    user = RegisterUserHandler(uow, notifications).handle(name=body.name, email=body.email)
    return UserResponse(id=user.id, name=user.name, email=user.email, role=user.role.value)

"""Pydantic request schemas for the storefront API.

These are the external contract; handlers receive plain values, never
these models.  Range checks on quantities and ratings are left to the
domain so that every rule is enforced in one place.
"""

from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel


# ---------------------------------------------------------------------------
# Request Schemas
# ---------------------------------------------------------------------------
class CheckoutRequestSchema(BaseModel):
    shipping_address_id: str | None = None
    billing_address_id: str | None = None
    payment_method_id: str | None = None
    shipping_method: str | None = None
    notes: str | None = None


class AddCartItemRequest(BaseModel):
    product_id: str
    quantity: int = 1


class UpdateCartItemRequest(BaseModel):
    quantity: int


class SubmitReviewRequest(BaseModel):
    rating: int
    title: str | None = None
    content: str | None = None


class EditReviewRequest(BaseModel):
    rating: int | None = None
    title: str | None = None
    content: str | None = None


class UpdateOrderStatusRequest(BaseModel):
    status: str


class UpdatePaymentStatusRequest(BaseModel):
    payment_status: str


class CreateProductRequest(BaseModel):
    name: str
    price: Decimal
    stock: int = 0


class UpdateProductRequest(BaseModel):
    price: Decimal | None = None
    stock: int | None = None


class RegisterUserRequest(BaseModel):
    name: str
    email: str


# ---------------------------------------------------------------------------
# Response Schemas
# ---------------------------------------------------------------------------
class UserResponse(BaseModel):
    id: str
    name: str
    email: str
    role: str


class MessageResponse(BaseModel):
    message: str

"""Data Transfer Objects: plain containers that cross layer boundaries.

DTOs carry data between the CLI/HTTP and application layers without
exposing domain internals to the outside world.
"""

from __future__ import annotations

from dataclasses import dataclass

from storefront.domain.model.order import Order
from storefront.domain.model.product import Product
from storefront.domain.model.review import Review
from storefront.domain.model.value_objects import Money
from storefront.domain.service.cart_snapshot_reader import CartLine


@dataclass(frozen=True)
class CheckoutRequest:
    """Input: what the buyer submitted at checkout."""

    buyer_id: str
    shipping_address_id: str | None = None
    billing_address_id: str | None = None
    payment_method_id: str | None = None
    shipping_method: str | None = None
    notes: str | None = None


@dataclass(frozen=True)
class OrderItemDTO:
    product_id: str
    product_name: str
    quantity: int
    unit_price: str  # formatted, e.g. "$15.00"
    line_total: str


@dataclass(frozen=True)
class OrderDTO:
    """Output: a complete order as displayed to the user."""

    id: int
    buyer_id: str
    status: str
    payment_status: str
    items: list[OrderItemDTO]
    total: str
    shipping_address_id: str | None
    billing_address_id: str | None
    payment_method_id: str | None
    shipping_method: str | None
    notes: str | None
    created_at: str

    @staticmethod
    def from_domain(order: Order) -> OrderDTO:
        return OrderDTO(
            id=order.id,  # type: ignore[arg-type]
            buyer_id=order.buyer_id,
            status=order.status.value,
            payment_status=order.payment_status.value,
            items=[
                OrderItemDTO(
                    product_id=item.product_id,
                    product_name=item.product_name,
                    quantity=item.quantity.value,
                    unit_price=str(item.unit_price),
                    line_total=str(item.line_total),
                )
                for item in order.items
            ],
            total=str(order.total),
            shipping_address_id=order.shipping_address_id,
            billing_address_id=order.billing_address_id,
            payment_method_id=order.payment_method_id,
            shipping_method=order.shipping_method,
            notes=order.notes,
            created_at=order.created_at.strftime("%Y-%m-%d %H:%M UTC"),
        )


@dataclass(frozen=True)
class CartLineDTO:
    product_id: str
    product_name: str
    quantity: int
    unit_price: str
    line_total: str
    in_stock: bool


@dataclass(frozen=True)
class CartDTO:
    buyer_id: str
    lines: list[CartLineDTO]
    total: str

    @property
    def item_count(self) -> int:
        return sum(line.quantity for line in self.lines)

    @staticmethod
    def from_lines(buyer_id: str, lines: list[CartLine]) -> CartDTO:
        total = Money.zero()
        for line in lines:
            total = total + line.line_total
        return CartDTO(
            buyer_id=buyer_id,
            lines=[
                CartLineDTO(
                    product_id=line.product.id,
                    product_name=line.product.name,
                    quantity=line.quantity,
                    unit_price=str(line.product.price),
                    line_total=str(line.line_total),
                    in_stock=line.in_stock,
                )
                for line in lines
            ],
            total=str(total),
        )


@dataclass(frozen=True)
class ProductDTO:
    id: str
    name: str
    price: str
    stock: int
    rating: str
    review_count: int

    @staticmethod
    def from_domain(product: Product) -> ProductDTO:
        return ProductDTO(
            id=product.id,
            name=product.name,
            price=str(product.price),
            stock=product.stock,
            rating=f"{product.rating:.2f}",
            review_count=product.review_count,
        )


@dataclass(frozen=True)
class ReviewDTO:
    id: int
    user_id: str
    product_id: str
    rating: int
    title: str | None
    content: str | None
    helpful: int
    created_at: str

    @staticmethod
    def from_domain(review: Review) -> ReviewDTO:
        return ReviewDTO(
            id=review.id,  # type: ignore[arg-type]
            user_id=review.user_id,
            product_id=review.product_id,
            rating=review.rating.value,
            title=review.title,
            content=review.content,
            helpful=review.helpful,
            created_at=review.created_at.strftime("%Y-%m-%d %H:%M UTC"),
        )

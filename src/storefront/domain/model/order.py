"""Order aggregate: the record of a completed checkout.

The Order is an aggregate root that owns its line items.  Once placed,
only its two status fields can change, and only by explicit
administrative transition.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import TYPE_CHECKING

from storefront.domain.exceptions import EmptyCartError, ValidationError
from storefront.domain.model.value_objects import Money, Quantity

if TYPE_CHECKING:
    from storefront.domain.service.cart_snapshot_reader import CartLine


class OrderStatus(Enum):
    PENDING = "PENDING"
    PROCESSING = "PROCESSING"
    SHIPPED = "SHIPPED"
    DELIVERED = "DELIVERED"
    CANCELLED = "CANCELLED"
    RETURNED = "RETURNED"


class PaymentStatus(Enum):
    PENDING = "PENDING"
    PAID = "PAID"
    FAILED = "FAILED"
    REFUNDED = "REFUNDED"


@dataclass(frozen=True)
class OrderItem:
    """Frozen copy of a product's name and price at purchase time.

    Never a live reference to the product: later price changes or
    renames must not show up here.
    """

    product_id: str
    product_name: str
    quantity: Quantity
    unit_price: Money

    @property
    def line_total(self) -> Money:
        return self.unit_price * self.quantity.value


@dataclass
class Order:
    """Aggregate root for purchase orders.

    Use the ``Order.place()`` factory for new orders.  The ``__init__`` is
    intentionally simple so the repository can reconstitute persisted
    orders without re-validating or re-pricing them.
    """

    id: int | None
    buyer_id: str
    items: list[OrderItem]
    total: Money
    shipping_address_id: str | None = None
    billing_address_id: str | None = None
    payment_method_id: str | None = None
    shipping_method: str | None = None
    notes: str | None = None
    status: OrderStatus = OrderStatus.PENDING
    payment_status: PaymentStatus = PaymentStatus.PENDING
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    # --- Factory (used for NEW orders only) -----------------------------------

    @staticmethod
    def place(
        buyer_id: str,
        lines: list[CartLine],
        shipping_address_id: str | None = None,
        billing_address_id: str | None = None,
        payment_method_id: str | None = None,
        shipping_method: str | None = None,
        notes: str | None = None,
    ) -> Order:
        """Price a validated cart snapshot into a new PENDING order.

        The total and each item's unit price come from the snapshot the
        caller validated, not from a later re-read of the products.
        """
        if not lines:
            raise EmptyCartError("No items in cart")

        items = [
            OrderItem(
                product_id=line.product.id,
                product_name=line.product.name,
                quantity=Quantity(line.quantity),
                unit_price=line.product.price,  # <-- price snapshot
            )
            for line in lines
        ]

        total = Money.zero(items[0].unit_price.currency)
        for item in items:
            total = total + item.line_total

        return Order(
            id=None,
            buyer_id=buyer_id,
            items=items,
            total=total,
            shipping_address_id=shipping_address_id,
            billing_address_id=billing_address_id,
            payment_method_id=payment_method_id,
            shipping_method=shipping_method,
            notes=notes,
        )

    # --- Administrative transitions -------------------------------------------

    def transition_to(self, status: OrderStatus | str) -> None:
        self.status = _parse(OrderStatus, status, "Invalid status")

    def record_payment_status(self, payment_status: PaymentStatus | str) -> None:
        self.payment_status = _parse(PaymentStatus, payment_status, "Invalid payment status")

    # --- Queries --------------------------------------------------------------

    def is_owned_by(self, user_id: str) -> bool:
        return self.buyer_id == user_id

    @property
    def item_count(self) -> int:
        return sum(item.quantity.value for item in self.items)


def _parse(enum_cls, value, message: str):
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(str(value).upper())
    except ValueError as exc:
        raise ValidationError(f"{message}: {value!r}") from exc

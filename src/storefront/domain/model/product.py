"""Product aggregate.

Products live independently of carts, orders and reviews. They have their
own lifecycle: prices change, stock is replenished, and products are added
to and removed from the catalog.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.value_objects import Money


@dataclass
class Product:
    """A product in the catalog.

    ``stock`` is only ever decreased through the inventory ledger, which
    performs an atomic conditional decrement in storage.  ``rating`` and
    ``review_count`` are derived fields owned by the rating aggregator.
    """

    id: str
    name: str
    price: Money
    stock: int = 0
    rating: Decimal = field(default_factory=lambda: Decimal("0.00"))
    review_count: int = 0

    def __post_init__(self) -> None:
        if not self.name or not self.name.strip():
            raise ValidationError("Product name is required")
        if self.stock < 0:
            raise ValidationError("Product stock cannot be negative")

    def can_supply(self, quantity: int) -> bool:
        return self.stock >= quantity

    def update_price(self, new_price: Money) -> None:
        """Change the product price.

        This does NOT affect any existing orders because orders
        capture a price snapshot at creation time.
        """
        self.price = new_price

    def set_stock(self, stock: int) -> None:
        if stock < 0:
            raise ValidationError("Product stock cannot be negative")
        self.stock = stock

    def restock(self, quantity: int) -> None:
        if quantity <= 0:
            raise ValidationError("Restock quantity must be positive")
        self.stock += quantity

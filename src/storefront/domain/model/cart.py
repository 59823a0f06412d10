"""Cart aggregate: a buyer's mutable pre-purchase selection.

One cart per buyer, created lazily on first access.  The cart owns its
items; each product appears on at most one line.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from storefront.domain.exceptions import EntityNotFoundError
from storefront.domain.model.value_objects import Quantity


@dataclass
class CartItem:
    product_id: str
    quantity: Quantity


@dataclass
class Cart:
    """Aggregate root for a buyer's cart.

    Invariants:
    - at most one line per product
    - every line has a positive quantity
    """

    id: int | None
    buyer_id: str
    items: list[CartItem] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.items

    def quantity_of(self, product_id: str) -> int:
        item = self._find(product_id)
        return item.quantity.value if item is not None else 0

    def add(self, product_id: str, quantity: int) -> CartItem:
        """Add *quantity* units, merging into an existing line if present."""
        added = Quantity(quantity)
        item = self._find(product_id)
        if item is None:
            item = CartItem(product_id=product_id, quantity=added)
            self.items.append(item)
        else:
            item.quantity = Quantity(item.quantity.value + added.value)
        return item

    def change_quantity(self, product_id: str, quantity: int) -> CartItem:
        item = self._require(product_id)
        item.quantity = Quantity(quantity)
        return item

    def remove(self, product_id: str) -> None:
        item = self._require(product_id)
        self.items.remove(item)

    def clear(self) -> None:
        self.items.clear()

    # --- Internal helpers -----------------------------------------------------

    def _find(self, product_id: str) -> CartItem | None:
        for item in self.items:
            if item.product_id == product_id:
                return item
        return None

    def _require(self, product_id: str) -> CartItem:
        item = self._find(product_id)
        if item is None:
            raise EntityNotFoundError(f"Product '{product_id}' is not in the cart")
        return item

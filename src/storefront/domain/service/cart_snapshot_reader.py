"""Domain service: Cart Snapshot Reader.

Assembles a buyer's cart into priced, quantified lines for checkout.
Read-only with respect to products and stock.
"""

from __future__ import annotations

from dataclasses import dataclass

from storefront.domain.exceptions import EntityNotFoundError
from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import Money
from storefront.domain.repository.cart_repository import CartRepository
from storefront.domain.repository.product_repository import ProductRepository


@dataclass(frozen=True)
class CartLine:
    """A cart item joined with the product as it stood when read."""

    product: Product
    quantity: int

    @property
    def line_total(self) -> Money:
        return self.product.price * self.quantity

    @property
    def in_stock(self) -> bool:
        return self.product.can_supply(self.quantity)


class CartSnapshotReader:

    def __init__(self, cart_repo: CartRepository, product_repo: ProductRepository) -> None:
        self._cart_repo = cart_repo
        self._product_repo = product_repo

    def snapshot(self, buyer_id: str) -> list[CartLine]:
        """Return the buyer's cart lines in the order they were added.

        Creates an empty cart on first access.
        """
        cart = self._cart_repo.get_or_create(buyer_id)

        lines: list[CartLine] = []
        for item in cart.items:
            product = self._product_repo.get_by_id(item.product_id)
            if product is None:
                raise EntityNotFoundError(
                    f"Product '{item.product_id}' in cart no longer exists"
                )
            lines.append(CartLine(product=product, quantity=item.quantity.value))
        return lines

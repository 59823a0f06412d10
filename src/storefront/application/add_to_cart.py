"""Application service: Add To Cart use case.

Adding a product that is already in the cart increases that line's
quantity rather than creating a second line.
"""

from __future__ import annotations

from storefront.application.authorization import require_user
from storefront.application.dto import CartDTO
from storefront.domain.exceptions import EntityNotFoundError, InsufficientStockError
from storefront.domain.repository.unit_of_work import UnitOfWork
from storefront.domain.service.cart_snapshot_reader import CartSnapshotReader


class AddToCartHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, buyer_id: str, product_id: str, quantity: int = 1) -> CartDTO:
        with self._uow as uow:
            require_user(uow.users, buyer_id)

            product = uow.products.get_by_id(product_id)
            if product is None:
                raise EntityNotFoundError(f"Product with ID '{product_id}' not found")

            cart = uow.carts.get_or_create(buyer_id)
            wanted = cart.quantity_of(product_id) + quantity
            if not product.can_supply(wanted):
                raise InsufficientStockError(product.name)

            cart.add(product_id, quantity)
            uow.carts.save(cart)

            lines = CartSnapshotReader(uow.carts, uow.products).snapshot(buyer_id)
            uow.commit()
        return CartDTO.from_lines(buyer_id, lines)

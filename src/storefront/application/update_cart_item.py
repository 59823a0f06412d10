"""Application service: Update Cart Item use case."""

from __future__ import annotations

from storefront.application.authorization import require_user
from storefront.application.dto import CartDTO
from storefront.domain.exceptions import (
    EntityNotFoundError,
    InsufficientStockError,
    ValidationError,
)
from storefront.domain.repository.unit_of_work import UnitOfWork
from storefront.domain.service.cart_snapshot_reader import CartSnapshotReader


class UpdateCartItemHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, buyer_id: str, product_id: str, quantity: int) -> CartDTO:
        """Set the quantity of an existing cart line."""
        if quantity < 1:
            raise ValidationError("Quantity must be at least 1")

        with self._uow as uow:
            require_user(uow.users, buyer_id)

            product = uow.products.get_by_id(product_id)
            if product is None:
                raise EntityNotFoundError(f"Product with ID '{product_id}' not found")
            if not product.can_supply(quantity):
                raise InsufficientStockError(product.name)

            cart = uow.carts.get_or_create(buyer_id)
            cart.change_quantity(product_id, quantity)
            uow.carts.save(cart)

            lines = CartSnapshotReader(uow.carts, uow.products).snapshot(buyer_id)
            uow.commit()
        return CartDTO.from_lines(buyer_id, lines)

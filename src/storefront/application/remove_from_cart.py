"""Application services: Remove From Cart and Clear Cart use cases."""

from __future__ import annotations

from storefront.application.authorization import require_user
from storefront.domain.repository.unit_of_work import UnitOfWork


class RemoveFromCartHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, buyer_id: str, product_id: str) -> None:
        with self._uow as uow:
            require_user(uow.users, buyer_id)

            cart = uow.carts.get_or_create(buyer_id)
            cart.remove(product_id)
            uow.carts.save(cart)
            uow.commit()


class ClearCartHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, buyer_id: str) -> None:
        with self._uow as uow:
            require_user(uow.users, buyer_id)

            cart = uow.carts.get_or_create(buyer_id)
            cart.clear()
            uow.carts.save(cart)
            uow.commit()

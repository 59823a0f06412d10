"""Application service: Show Cart use case (query).

The cart is created on first access, so even this query commits.
"""

from __future__ import annotations

from storefront.application.authorization import require_user
from storefront.application.dto import CartDTO
from storefront.domain.repository.unit_of_work import UnitOfWork
from storefront.domain.service.cart_snapshot_reader import CartSnapshotReader


class ShowCartHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, buyer_id: str) -> CartDTO:
        with self._uow as uow:
            require_user(uow.users, buyer_id)

            lines = CartSnapshotReader(uow.carts, uow.products).snapshot(buyer_id)
            uow.commit()
        return CartDTO.from_lines(buyer_id, lines)

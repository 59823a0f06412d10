"""SQLAlchemy-backed implementation of CartRepository."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from storefront.domain.exceptions import DuplicateCartLineError
from storefront.domain.model.cart import Cart, CartItem
from storefront.domain.model.value_objects import Quantity
from storefront.domain.repository.cart_repository import CartRepository
from storefront.infrastructure.persistence._integrity import is_unique_violation
from storefront.infrastructure.persistence.orm import CartItemRecord, CartRecord


class SqlCartRepository(CartRepository):

    def __init__(self, session: Session) -> None:
        self._session = session

    # --- CartRepository interface ---------------------------------------------

    def get_or_create(self, buyer_id: str) -> Cart:
        record = self._find(buyer_id)
        if record is None:
            try:
                with self._session.begin_nested():
                    record = CartRecord(user_id=buyer_id)
                    self._session.add(record)
            except IntegrityError as exc:
                if not is_unique_violation(exc, "carts_user_id_key", ("carts.user_id",)):
                    raise
                # A concurrent first access for this buyer created it
                record = self._find(buyer_id)
        return self._to_domain(record)

    def save(self, cart: Cart) -> None:
        record = self._session.get(CartRecord, cart.id)
        if record is None:
            record = CartRecord(user_id=cart.buyer_id)
            self._session.add(record)

        wanted = {item.product_id: item.quantity.value for item in cart.items}

        # Upsert lines: drop removed ones, update changed ones, append new ones
        for line in list(record.items):
            if line.product_id not in wanted:
                record.items.remove(line)
            else:
                line.quantity = wanted.pop(line.product_id)
        for item in cart.items:
            if item.product_id in wanted:
                record.items.append(
                    CartItemRecord(product_id=item.product_id, quantity=item.quantity.value)
                )

        try:
            self._session.flush()
        except IntegrityError as exc:
            if is_unique_violation(
                exc, "uq_cart_items_cart_product", ("cart_items.cart_id", "cart_items.product_id")
            ):
                raise DuplicateCartLineError("Product is already in the cart") from exc
            raise
        cart.id = record.id

    def _find(self, buyer_id: str) -> CartRecord | None:
        return self._session.scalars(
            select(CartRecord)
            .where(CartRecord.user_id == buyer_id)
            .execution_options(populate_existing=True)
        ).first()

    # --- Mapping --------------------------------------------------------------

    @staticmethod
    def _to_domain(record: CartRecord) -> Cart:
        return Cart(
            id=record.id,
            buyer_id=record.user_id,
            items=[
                CartItem(product_id=line.product_id, quantity=Quantity(line.quantity))
                for line in record.items
            ],
        )

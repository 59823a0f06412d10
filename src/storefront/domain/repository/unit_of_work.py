"""Unit of Work: one storage transaction spanning several repositories.

Every multi-entity write (checkout, review mutation + rating recompute)
runs inside a single unit of work:

    with uow:
        ...
        uow.commit()

Leaving the block without ``commit()`` (including by an exception) rolls
back every write made through the repositories.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from storefront.domain.repository.cart_repository import CartRepository
from storefront.domain.repository.order_repository import OrderRepository
from storefront.domain.repository.product_repository import ProductRepository
from storefront.domain.repository.review_repository import ReviewRepository
from storefront.domain.repository.user_repository import UserRepository


class UnitOfWork(ABC):

    products: ProductRepository
    carts: CartRepository
    orders: OrderRepository
    reviews: ReviewRepository
    users: UserRepository

    def __enter__(self) -> UnitOfWork:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.rollback()

    @abstractmethod
    def commit(self) -> None:
        """Make every write in this unit durable."""

    @abstractmethod
    def rollback(self) -> None:
        """Discard uncommitted writes. A no-op after ``commit()``."""

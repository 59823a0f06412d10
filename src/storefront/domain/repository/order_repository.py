"""Abstract repository for Order aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod

from storefront.domain.model.order import Order
from storefront.domain.model.value_objects import PageRequest


class OrderRepository(ABC):

    @abstractmethod
    def get_by_id(self, order_id: int) -> Order | None:
        """Return an order by its ID, or None if not found."""

    @abstractmethod
    def list_for_buyer(self, buyer_id: str, page: PageRequest | None = None) -> list[Order]:
        """Return a buyer's orders, newest first."""

    @abstractmethod
    def list_all(self, page: PageRequest | None = None) -> list[Order]:
        """Return every order, newest first."""

    @abstractmethod
    def references_product(self, product_id: str) -> bool:
        """True if any order item was bought from this product."""

    @abstractmethod
    def save(self, order: Order) -> None:
        """Persist a new order (assigning its ID) or its status fields."""

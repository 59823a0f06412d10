"""Abstract repository for Cart aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod

from storefront.domain.model.cart import Cart


class CartRepository(ABC):

    @abstractmethod
    def get_or_create(self, buyer_id: str) -> Cart:
        """Return the buyer's cart, creating an empty one on first access."""

    @abstractmethod
    def save(self, cart: Cart) -> None:
        """Persist the cart's current set of lines."""

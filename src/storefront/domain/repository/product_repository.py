"""Abstract repository for Product aggregate.

Defined in the domain layer so the domain never depends on
infrastructure. Concrete implementations (SQL, in-memory) live in the
infrastructure layer and in the test fakes.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from decimal import Decimal

from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import PageRequest, RatingSummary


class ProductRepository(ABC):

    @abstractmethod
    def next_id(self) -> str:
        """Generate the next unique product ID."""

    @abstractmethod
    def get_by_id(self, product_id: str) -> Product | None:
        """Return a product by its ID, or None if not found."""

    @abstractmethod
    def get_for_update(self, product_id: str) -> Product | None:
        """Like ``get_by_id`` but locks the row until the transaction ends."""

    @abstractmethod
    def get_by_name(self, name: str) -> Product | None:
        """Return a product by its exact name, or None if not found."""

    @abstractmethod
    def list_all(self, page: PageRequest | None = None) -> list[Product]:
        """Return the catalog ordered by name, optionally one page of it."""

    @abstractmethod
    def list_top_rated(self, min_rating: Decimal, limit: int) -> list[Product]:
        """Return up to *limit* products rated at least *min_rating*.

        Best rated first; ties go to the product with more reviews.
        """

    @abstractmethod
    def save(self, product: Product) -> None:
        """Persist a new or updated product."""

    @abstractmethod
    def delete(self, product_id: str) -> None:
        """Remove a product together with its cart lines and reviews."""

    @abstractmethod
    def decrement_stock(self, product_id: str, quantity: int) -> bool:
        """Atomically subtract *quantity* from stock if enough remains.

        The comparison and the write are a single storage operation
        evaluated against the current persisted stock.  Returns False,
        leaving stock untouched, when the decrement would go negative.
        """

    @abstractmethod
    def update_rating(self, product_id: str, summary: RatingSummary) -> None:
        """Write ``rating`` and ``review_count`` together, nothing else."""

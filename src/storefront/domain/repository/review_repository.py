"""Abstract repository for Review entity."""

from __future__ import annotations

from abc import ABC, abstractmethod

from storefront.domain.model.review import Review
from storefront.domain.model.value_objects import PageRequest


class ReviewRepository(ABC):

    @abstractmethod
    def get_by_id(self, review_id: int) -> Review | None:
        """Return a review by its ID, or None if not found."""

    @abstractmethod
    def get_by_user_and_product(self, user_id: str, product_id: str) -> Review | None:
        """Return the user's review of a product, or None."""

    @abstractmethod
    def list_for_product(
        self,
        product_id: str,
        user_id: str | None = None,
        page: PageRequest | None = None,
    ) -> list[Review]:
        """Return a product's reviews, newest first, optionally only one user's."""

    @abstractmethod
    def ratings_for_product(self, product_id: str) -> list[int]:
        """Return every current rating value recorded for a product."""

    @abstractmethod
    def save(self, review: Review) -> None:
        """Persist a new review (assigning its ID) or an edited one.

        Raises AlreadyReviewedError if a new review collides with an
        existing one for the same (user, product).
        """

    @abstractmethod
    def delete(self, review_id: int) -> None:
        """Remove a review."""

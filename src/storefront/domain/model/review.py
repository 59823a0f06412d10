"""Review entity: one buyer's rating of one product."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone

from storefront.domain.model.value_objects import Rating


@dataclass
class Review:
    """A buyer's review of a product.

    At most one review exists per (user, product); the repository and
    the storage layer both enforce this.
    """

    id: int | None
    user_id: str
    product_id: str
    rating: Rating
    title: str | None = None
    content: str | None = None
    helpful: int = 0
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def edit(
        self,
        rating: Rating | None = None,
        title: str | None = None,
        content: str | None = None,
    ) -> bool:
        """Apply the given changes; return True if the rating changed."""
        rating_changed = rating is not None and rating != self.rating
        if rating is not None:
            self.rating = rating
        if title is not None:
            self.title = title
        if content:
            self.content = content
        return rating_changed

    def mark_helpful(self) -> None:
        self.helpful += 1

    def is_owned_by(self, user_id: str) -> bool:
        return self.user_id == user_id

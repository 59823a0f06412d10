"""Domain service: Rating Aggregator.

Keeps ``Product.rating`` and ``Product.review_count`` consistent with the
product's reviews.  Always recomputed from the full current review set,
inside the same unit of work as the review mutation that triggered it;
an incremental running average could not recover from a delete or a
concurrent edit without re-scanning anyway.
"""

from __future__ import annotations

import structlog

from storefront.domain.exceptions import EntityNotFoundError
from storefront.domain.model.value_objects import RatingSummary
from storefront.domain.repository.product_repository import ProductRepository
from storefront.domain.repository.review_repository import ReviewRepository

logger = structlog.get_logger(__name__)


class RatingAggregator:

    def __init__(
        self,
        product_repo: ProductRepository,
        review_repo: ReviewRepository,
    ) -> None:
        self._product_repo = product_repo
        self._review_repo = review_repo

    def recompute(self, product_id: str) -> RatingSummary:
        # Lock the product row so concurrent review writers queue up
        # behind this recompute instead of interleaving with it.
        product = self._product_repo.get_for_update(product_id)
        if product is None:
            raise EntityNotFoundError(f"Product with ID '{product_id}' not found")

        summary = RatingSummary.from_ratings(
            self._review_repo.ratings_for_product(product_id)
        )
        self._product_repo.update_rating(product_id, summary)

        logger.info(
            "Product rating recomputed",
            product_id=product_id,
            rating=str(summary.average),
            review_count=summary.count,
        )
        return summary

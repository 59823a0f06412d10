"""Application service: Submit Review use case.

Creates the review and recomputes the product's rating in the same unit
of work, so the product aggregate is consistent the moment this returns.
"""

from __future__ import annotations

import structlog

from storefront.application.authorization import require_user
from storefront.application.dto import ReviewDTO
from storefront.domain.exceptions import AlreadyReviewedError, EntityNotFoundError
from storefront.domain.model.review import Review
from storefront.domain.model.value_objects import Rating
from storefront.domain.repository.unit_of_work import UnitOfWork
from storefront.domain.service.rating_aggregator import RatingAggregator

logger = structlog.get_logger(__name__)


class SubmitReviewHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(
        self,
        user_id: str,
        product_id: str,
        rating: int | str,
        title: str | None = None,
        content: str | None = None,
    ) -> ReviewDTO:
        score = Rating.of(rating)

        with self._uow as uow:
            require_user(uow.users, user_id)

            if uow.products.get_by_id(product_id) is None:
                raise EntityNotFoundError(f"Product with ID '{product_id}' not found")

            if uow.reviews.get_by_user_and_product(user_id, product_id) is not None:
                raise AlreadyReviewedError("Product already reviewed")

            review = Review(
                id=None,
                user_id=user_id,
                product_id=product_id,
                rating=score,
                title=title,
                content=content,
            )
            uow.reviews.save(review)

            RatingAggregator(uow.products, uow.reviews).recompute(product_id)
            uow.commit()

        logger.info(
            "Review submitted",
            review_id=review.id,
            product_id=product_id,
            user_id=user_id,
            rating=score.value,
        )
        return ReviewDTO.from_domain(review)

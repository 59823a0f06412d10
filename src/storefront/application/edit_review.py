"""Application service: Edit Review use case."""

from __future__ import annotations

from storefront.application.authorization import require_user
from storefront.application.dto import ReviewDTO
from storefront.domain.exceptions import AuthorizationError, EntityNotFoundError
from storefront.domain.model.value_objects import Rating
from storefront.domain.repository.unit_of_work import UnitOfWork
from storefront.domain.service.rating_aggregator import RatingAggregator


class EditReviewHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(
        self,
        user_id: str,
        review_id: int,
        rating: int | str | None = None,
        title: str | None = None,
        content: str | None = None,
    ) -> ReviewDTO:
        """Edit a review owned by the user (or any review, for admins).

        The product rating is recomputed only when the score changed.
        """
        score = Rating.of(rating) if rating is not None else None

        with self._uow as uow:
            actor = require_user(uow.users, user_id)

            review = uow.reviews.get_by_id(review_id)
            if review is None:
                raise EntityNotFoundError("Review not found")
            if not review.is_owned_by(actor.id) and not actor.is_admin:
                raise AuthorizationError("Not authorized to update this review")

            rating_changed = review.edit(rating=score, title=title, content=content)
            uow.reviews.save(review)

            if rating_changed:
                RatingAggregator(uow.products, uow.reviews).recompute(review.product_id)
            uow.commit()

        return ReviewDTO.from_domain(review)

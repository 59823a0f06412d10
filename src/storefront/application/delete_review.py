"""Application service: Delete Review use case."""

from __future__ import annotations

from storefront.application.authorization import require_user
from storefront.domain.exceptions import AuthorizationError, EntityNotFoundError
from storefront.domain.repository.unit_of_work import UnitOfWork
from storefront.domain.service.rating_aggregator import RatingAggregator


class DeleteReviewHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, user_id: str, review_id: int) -> None:
        with self._uow as uow:
            actor = require_user(uow.users, user_id)

            review = uow.reviews.get_by_id(review_id)
            if review is None:
                raise EntityNotFoundError("Review not found")
            if not review.is_owned_by(actor.id) and not actor.is_admin:
                raise AuthorizationError("Not authorized to delete this review")

            uow.reviews.delete(review_id)
            RatingAggregator(uow.products, uow.reviews).recompute(review.product_id)
            uow.commit()

"""Application services: review queries and the helpful counter."""

from __future__ import annotations

from storefront.application.dto import ReviewDTO
from storefront.domain.exceptions import EntityNotFoundError
from storefront.domain.model.value_objects import PageRequest
from storefront.domain.repository.unit_of_work import UnitOfWork


class ListReviewsHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(
        self,
        product_id: str,
        user_id: str | None = None,
        page: int = 1,
        limit: int | None = None,
    ) -> list[ReviewDTO]:
        request = PageRequest(page, limit)
        with self._uow as uow:
            if uow.products.get_by_id(product_id) is None:
                raise EntityNotFoundError(f"Product with ID '{product_id}' not found")
            reviews = uow.reviews.list_for_product(product_id, user_id, request)
        return [ReviewDTO.from_domain(r) for r in reviews]


class ShowReviewHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, review_id: int) -> ReviewDTO:
        with self._uow as uow:
            review = uow.reviews.get_by_id(review_id)
        if review is None:
            raise EntityNotFoundError("Review not found")
        return ReviewDTO.from_domain(review)


class MarkReviewHelpfulHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, review_id: int) -> ReviewDTO:
        with self._uow as uow:
            review = uow.reviews.get_by_id(review_id)
            if review is None:
                raise EntityNotFoundError("Review not found")
            review.mark_helpful()
            uow.reviews.save(review)
            uow.commit()
        return ReviewDTO.from_domain(review)

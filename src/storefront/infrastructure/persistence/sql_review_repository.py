"""SQLAlchemy-backed implementation of ReviewRepository."""

from __future__ import annotations

from datetime import timezone

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from storefront.domain.exceptions import AlreadyReviewedError
from storefront.domain.model.review import Review
from storefront.domain.model.value_objects import PageRequest, Rating
from storefront.domain.repository.review_repository import ReviewRepository
from storefront.infrastructure.persistence._integrity import is_unique_violation
from storefront.infrastructure.persistence._paging import paginate
from storefront.infrastructure.persistence.orm import ReviewRecord


class SqlReviewRepository(ReviewRepository):

    def __init__(self, session: Session) -> None:
        self._session = session

    # --- ReviewRepository interface -------------------------------------------

    def get_by_id(self, review_id: int) -> Review | None:
        record = self._session.get(ReviewRecord, review_id)
        return self._to_domain(record) if record is not None else None

    def get_by_user_and_product(self, user_id: str, product_id: str) -> Review | None:
        record = self._session.scalars(
            select(ReviewRecord).where(
                ReviewRecord.user_id == user_id,
                ReviewRecord.product_id == product_id,
            )
        ).first()
        return self._to_domain(record) if record is not None else None

    def list_for_product(
        self,
        product_id: str,
        user_id: str | None = None,
        page: PageRequest | None = None,
    ) -> list[Review]:
        stmt = (
            select(ReviewRecord)
            .where(ReviewRecord.product_id == product_id)
            .order_by(ReviewRecord.created_at.desc(), ReviewRecord.id.desc())
        )
        if user_id is not None:
            stmt = stmt.where(ReviewRecord.user_id == user_id)
        records = self._session.scalars(paginate(stmt, page))
        return [self._to_domain(r) for r in records]

    def ratings_for_product(self, product_id: str) -> list[int]:
        return list(
            self._session.scalars(
                select(ReviewRecord.rating).where(ReviewRecord.product_id == product_id)
            )
        )

    def save(self, review: Review) -> None:
        if review.id is None:
            record = ReviewRecord(
                user_id=review.user_id,
                product_id=review.product_id,
                created_at=review.created_at,
            )
            self._session.add(record)
        else:
            record = self._session.get(ReviewRecord, review.id)
        record.rating = review.rating.value
        record.title = review.title
        record.content = review.content
        record.helpful = review.helpful

        try:
            self._session.flush()
        except IntegrityError as exc:
            if is_unique_violation(
                exc, "uq_reviews_user_product", ("reviews.user_id", "reviews.product_id")
            ):
                raise AlreadyReviewedError("Product already reviewed") from exc
            raise
        review.id = record.id

    def delete(self, review_id: int) -> None:
        self._session.execute(delete(ReviewRecord).where(ReviewRecord.id == review_id))
        self._session.flush()

    # --- Mapping --------------------------------------------------------------

    @staticmethod
    def _to_domain(record: ReviewRecord) -> Review:
        created_at = record.created_at
        if created_at.tzinfo is None:
            created_at = created_at.replace(tzinfo=timezone.utc)
        return Review(
            id=record.id,
            user_id=record.user_id,
            product_id=record.product_id,
            rating=Rating(record.rating),
            title=record.title,
            content=record.content,
            helpful=record.helpful,
            created_at=created_at,
        )

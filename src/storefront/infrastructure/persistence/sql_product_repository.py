"""SQLAlchemy-backed implementation of ProductRepository."""

from __future__ import annotations

from decimal import Decimal

from sqlalchemy import delete, func, insert, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from storefront.domain.exceptions import ProductInUseError
from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import Money, PageRequest, RatingSummary
from storefront.domain.repository.product_repository import ProductRepository
from storefront.infrastructure.persistence._paging import paginate
from storefront.infrastructure.persistence.orm import (
    CartItemRecord,
    ProductRecord,
    ReviewRecord,
    SequenceRecord,
)

_products = ProductRecord.__table__
_sequences = SequenceRecord.__table__
_SEQUENCE = "products"


class SqlProductRepository(ProductRepository):

    def __init__(self, session: Session) -> None:
        self._session = session

    # --- ProductRepository interface ------------------------------------------

    def next_id(self) -> str:
        # The UPDATE row-locks the counter until commit, so concurrent
        # callers are handed distinct values
        bump = (
            update(_sequences)
            .where(_sequences.c.name == _SEQUENCE)
            .values(value=_sequences.c.value + 1)
        )
        if self._session.execute(bump).rowcount == 0:
            try:
                with self._session.begin_nested():
                    self._session.execute(insert(_sequences).values(name=_SEQUENCE, value=1))
                return "1"
            except IntegrityError:
                # Another transaction created the counter first
                self._session.execute(bump)
        value = self._session.scalar(
            select(_sequences.c.value).where(_sequences.c.name == _SEQUENCE)
        )
        return str(value)

    def get_by_id(self, product_id: str) -> Product | None:
        record = self._session.get(ProductRecord, product_id, populate_existing=True)
        return self._to_domain(record) if record is not None else None

    def get_for_update(self, product_id: str) -> Product | None:
        record = self._session.get(
            ProductRecord, product_id, populate_existing=True, with_for_update=True
        )
        return self._to_domain(record) if record is not None else None

    def get_by_name(self, name: str) -> Product | None:
        record = self._session.scalars(
            select(ProductRecord).where(func.lower(ProductRecord.name) == name.lower())
        ).first()
        return self._to_domain(record) if record is not None else None

    def list_all(self, page: PageRequest | None = None) -> list[Product]:
        stmt = select(ProductRecord).order_by(ProductRecord.name)
        return [self._to_domain(r) for r in self._session.scalars(paginate(stmt, page))]

    def list_top_rated(self, min_rating: Decimal, limit: int) -> list[Product]:
        records = self._session.scalars(
            select(ProductRecord)
            .where(ProductRecord.rating >= min_rating)
            .order_by(
                ProductRecord.rating.desc(),
                ProductRecord.review_count.desc(),
                ProductRecord.name,
            )
            .limit(limit)
        )
        return [self._to_domain(r) for r in records]

    def save(self, product: Product) -> None:
        record = self._session.get(ProductRecord, product.id)
        if record is None:
            record = ProductRecord(id=product.id)
            self._session.add(record)
        record.name = product.name
        record.price = product.price.amount
        record.currency = product.price.currency
        record.stock = product.stock
        record.rating = product.rating
        record.review_count = product.review_count
        self._session.flush()

    def delete(self, product_id: str) -> None:
        self._session.execute(
            delete(CartItemRecord).where(CartItemRecord.product_id == product_id)
        )
        self._session.execute(
            delete(ReviewRecord).where(ReviewRecord.product_id == product_id)
        )
        try:
            self._session.execute(delete(_products).where(_products.c.id == product_id))
            self._session.flush()
        except IntegrityError as exc:
            # order_items.product_id is ON DELETE RESTRICT
            raise ProductInUseError(
                f"Product '{product_id}' has purchase history and cannot be deleted"
            ) from exc

    def decrement_stock(self, product_id: str, quantity: int) -> bool:
        result = self._session.execute(
            update(_products)
            .where(_products.c.id == product_id, _products.c.stock >= quantity)
            .values(stock=_products.c.stock - quantity)
        )
        return result.rowcount == 1

    def update_rating(self, product_id: str, summary: RatingSummary) -> None:
        self._session.execute(
            update(_products)
            .where(_products.c.id == product_id)
            .values(rating=summary.average, review_count=summary.count)
        )

    # --- Mapping --------------------------------------------------------------

    @staticmethod
    def _to_domain(record: ProductRecord) -> Product:
        return Product(
            id=record.id,
            name=record.name,
            price=Money(Decimal(str(record.price)), record.currency),
            stock=record.stock,
            rating=Decimal(str(record.rating)).quantize(Decimal("0.01")),
            review_count=record.review_count,
        )

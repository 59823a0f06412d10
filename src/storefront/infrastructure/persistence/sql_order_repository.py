"""SQLAlchemy-backed implementation of OrderRepository."""

from __future__ import annotations

from datetime import timezone
from decimal import Decimal

from sqlalchemy import Select, exists, select
from sqlalchemy.orm import Session

from storefront.domain.model.order import Order, OrderItem, OrderStatus, PaymentStatus
from storefront.domain.model.value_objects import Money, PageRequest, Quantity
from storefront.domain.repository.order_repository import OrderRepository
from storefront.infrastructure.persistence._paging import paginate
from storefront.infrastructure.persistence.orm import OrderItemRecord, OrderRecord


class SqlOrderRepository(OrderRepository):

    def __init__(self, session: Session) -> None:
        self._session = session

    # --- OrderRepository interface --------------------------------------------

    def get_by_id(self, order_id: int) -> Order | None:
        record = self._session.get(OrderRecord, order_id)
        return self._to_domain(record) if record is not None else None

    def list_for_buyer(self, buyer_id: str, page: PageRequest | None = None) -> list[Order]:
        return self._list(select(OrderRecord).where(OrderRecord.user_id == buyer_id), page)

    def list_all(self, page: PageRequest | None = None) -> list[Order]:
        return self._list(select(OrderRecord), page)

    def references_product(self, product_id: str) -> bool:
        return bool(
            self._session.scalar(
                select(exists().where(OrderItemRecord.product_id == product_id))
            )
        )

    def save(self, order: Order) -> None:
        if order.id is None:
            record = self._to_record(order)
            self._session.add(record)
            self._session.flush()
            order.id = record.id
            return

        # Only the two status fields are mutable after placement
        record = self._session.get(OrderRecord, order.id)
        record.status = order.status.value
        record.payment_status = order.payment_status.value
        self._session.flush()

    def _list(self, stmt: Select, page: PageRequest | None) -> list[Order]:
        stmt = stmt.order_by(OrderRecord.created_at.desc(), OrderRecord.id.desc())
        return [self._to_domain(r) for r in self._session.scalars(paginate(stmt, page))]

    # --- Mapping --------------------------------------------------------------

    @staticmethod
    def _to_record(order: Order) -> OrderRecord:
        return OrderRecord(
            user_id=order.buyer_id,
            total=order.total.amount,
            currency=order.total.currency,
            shipping_address_id=order.shipping_address_id,
            billing_address_id=order.billing_address_id,
            payment_method_id=order.payment_method_id,
            shipping_method=order.shipping_method,
            notes=order.notes,
            status=order.status.value,
            payment_status=order.payment_status.value,
            created_at=order.created_at,
            items=[
                OrderItemRecord(
                    product_id=item.product_id,
                    name=item.product_name,
                    price=item.unit_price.amount,
                    quantity=item.quantity.value,
                )
                for item in order.items
            ],
        )

    @staticmethod
    def _to_domain(record: OrderRecord) -> Order:
        created_at = record.created_at
        if created_at.tzinfo is None:
            # SQLite hands back naive timestamps
            created_at = created_at.replace(tzinfo=timezone.utc)
        return Order(
            id=record.id,
            buyer_id=record.user_id,
            items=[
                OrderItem(
                    product_id=i.product_id,
                    product_name=i.name,
                    quantity=Quantity(i.quantity),
                    unit_price=Money(Decimal(str(i.price)), record.currency),
                )
                for i in record.items
            ],
            total=Money(Decimal(str(record.total)), record.currency),
            shipping_address_id=record.shipping_address_id,
            billing_address_id=record.billing_address_id,
            payment_method_id=record.payment_method_id,
            shipping_method=record.shipping_method,
            notes=record.notes,
            status=OrderStatus(record.status),
            payment_status=PaymentStatus(record.payment_status),
            created_at=created_at,
        )

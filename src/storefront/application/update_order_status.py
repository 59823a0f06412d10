"""Application services: administrative order transitions.

``status`` (fulfillment lifecycle) and ``payment_status`` (payment
lifecycle) are independent and change only through these handlers.
Checkout never touches either after creating the order.
"""

from __future__ import annotations

import structlog

from storefront.application.authorization import require_admin
from storefront.application.dto import OrderDTO
from storefront.domain.exceptions import EntityNotFoundError
from storefront.domain.model.order import Order, OrderStatus, PaymentStatus
from storefront.domain.repository.unit_of_work import UnitOfWork

logger = structlog.get_logger(__name__)


class UpdateOrderStatusHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, admin_id: str, order_id: int, status: OrderStatus | str) -> OrderDTO:
        with self._uow as uow:
            require_admin(uow.users, admin_id)
            order = _load(uow, order_id)
            order.transition_to(status)
            uow.orders.save(order)
            uow.commit()

        logger.info("Order status updated", order_id=order_id, status=order.status.value)
        return OrderDTO.from_domain(order)


class UpdatePaymentStatusHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(
        self, admin_id: str, order_id: int, payment_status: PaymentStatus | str
    ) -> OrderDTO:
        with self._uow as uow:
            require_admin(uow.users, admin_id)
            order = _load(uow, order_id)
            order.record_payment_status(payment_status)
            uow.orders.save(order)
            uow.commit()

        logger.info(
            "Order payment status updated",
            order_id=order_id,
            payment_status=order.payment_status.value,
        )
        return OrderDTO.from_domain(order)


def _load(uow: UnitOfWork, order_id: int) -> Order:
    order = uow.orders.get_by_id(order_id)
    if order is None:
        raise EntityNotFoundError(f"Order #{order_id} not found")
    return order

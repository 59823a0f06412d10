"""Application services: Show Order and List Orders use cases (queries)."""

from __future__ import annotations

from storefront.application.authorization import require_admin, require_user
from storefront.application.dto import OrderDTO
from storefront.domain.exceptions import AuthorizationError, EntityNotFoundError
from storefront.domain.model.value_objects import PageRequest
from storefront.domain.repository.unit_of_work import UnitOfWork


class ShowOrderHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, user_id: str, order_id: int) -> OrderDTO:
        with self._uow as uow:
            actor = require_user(uow.users, user_id)
            order = uow.orders.get_by_id(order_id)
            if order is None:
                raise EntityNotFoundError(f"Order #{order_id} not found")
            if not order.is_owned_by(actor.id) and not actor.is_admin:
                raise AuthorizationError("Not authorized to access this order")
        return OrderDTO.from_domain(order)


class ListOrdersHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, user_id: str, page: int = 1, limit: int | None = None) -> list[OrderDTO]:
        request = PageRequest(page, limit)
        with self._uow as uow:
            orders = uow.orders.list_for_buyer(user_id, request)
        return [OrderDTO.from_domain(o) for o in orders]


class ListAllOrdersHandler:
    """Every buyer's orders, newest first.  Administrators only."""

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, admin_id: str, page: int = 1, limit: int | None = 10) -> list[OrderDTO]:
        request = PageRequest(page, limit)
        with self._uow as uow:
            require_admin(uow.users, admin_id)
            orders = uow.orders.list_all(request)
        return [OrderDTO.from_domain(o) for o in orders]

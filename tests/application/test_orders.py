"""Integration tests for order queries and administrative transitions."""

import pytest

from storefront.application.add_to_cart import AddToCartHandler
from storefront.application.checkout import CheckoutHandler
from storefront.application.dto import CheckoutRequest
from storefront.application.notifications import NotificationDispatcher
from storefront.application.show_order import (
    ListAllOrdersHandler,
    ListOrdersHandler,
    ShowOrderHandler,
)
from storefront.application.update_order_status import (
    UpdateOrderStatusHandler,
    UpdatePaymentStatusHandler,
)
from storefront.domain.exceptions import (
    AuthorizationError,
    EntityNotFoundError,
    ValidationError,
)
from storefront.domain.model.product import Product
from storefront.domain.model.user import Role, User
from storefront.domain.model.value_objects import Money
from tests.fakes import FakeEmailAdapter, FakeUnitOfWork


def _setup() -> tuple[FakeUnitOfWork, int]:
    """Store with one placed order (#id returned) belonging to u1."""
    uow = FakeUnitOfWork(
        products=[Product(id="A", name="Widget", price=Money.of("10.00"), stock=10)],
        users=[
            User(id="u1", name="Alice", email="alice@example.com"),
            User(id="u2", name="Bob", email="bob@example.com"),
            User(id="admin", name="Root", email="root@example.com", role=Role.ADMIN),
        ],
    )
    AddToCartHandler(uow).handle("u1", "A", 2)
    dto = CheckoutHandler(uow, NotificationDispatcher(FakeEmailAdapter())).handle(
        CheckoutRequest(buyer_id="u1")
    )
    return uow, dto.id


class TestShowOrder:

    def test_owner_sees_order(self):
        uow, order_id = _setup()
        dto = ShowOrderHandler(uow).handle("u1", order_id)
        assert dto.total == "$20.00"
        assert dto.items[0].line_total == "$20.00"

    def test_admin_sees_any_order(self):
        uow, order_id = _setup()
        assert ShowOrderHandler(uow).handle("admin", order_id).id == order_id

    def test_other_buyer_rejected(self):
        uow, order_id = _setup()
        with pytest.raises(AuthorizationError, match="Not authorized to access this order"):
            ShowOrderHandler(uow).handle("u2", order_id)

    def test_missing_order(self):
        uow, _ = _setup()
        with pytest.raises(EntityNotFoundError):
            ShowOrderHandler(uow).handle("u1", 999)


class TestListOrders:

    def test_lists_only_own_orders(self):
        uow, order_id = _setup()
        assert [o.id for o in ListOrdersHandler(uow).handle("u1")] == [order_id]
        assert ListOrdersHandler(uow).handle("u2") == []

    def test_newest_first(self):
        uow, first_id = _setup()
        AddToCartHandler(uow).handle("u1", "A", 1)
        second = CheckoutHandler(uow, NotificationDispatcher(FakeEmailAdapter())).handle(
            CheckoutRequest(buyer_id="u1")
        )
        assert [o.id for o in ListOrdersHandler(uow).handle("u1")] == [second.id, first_id]

    def test_one_page(self):
        uow, first_id = _setup()
        AddToCartHandler(uow).handle("u1", "A", 1)
        CheckoutHandler(uow, NotificationDispatcher(FakeEmailAdapter())).handle(
            CheckoutRequest(buyer_id="u1")
        )
        assert [o.id for o in ListOrdersHandler(uow).handle("u1", page=2, limit=1)] == [first_id]


class TestListAllOrders:

    def test_admin_sees_every_buyer_newest_first(self):
        uow, first_id = _setup()
        AddToCartHandler(uow).handle("u2", "A", 1)
        second = CheckoutHandler(uow, NotificationDispatcher(FakeEmailAdapter())).handle(
            CheckoutRequest(buyer_id="u2")
        )

        orders = ListAllOrdersHandler(uow).handle("admin")

        assert [(o.id, o.buyer_id) for o in orders] == [(second.id, "u2"), (first_id, "u1")]
        assert len(ListAllOrdersHandler(uow).handle("admin", limit=1)) == 1

    def test_customer_rejected(self):
        uow, _ = _setup()
        with pytest.raises(AuthorizationError):
            ListAllOrdersHandler(uow).handle("u1")


class TestStatusTransitions:

    def test_admin_updates_status(self):
        uow, order_id = _setup()
        dto = UpdateOrderStatusHandler(uow).handle("admin", order_id, "SHIPPED")
        assert dto.status == "SHIPPED"
        assert dto.payment_status == "PENDING"
        assert uow.orders.get_by_id(order_id).status.value == "SHIPPED"

    def test_admin_updates_payment_status(self):
        uow, order_id = _setup()
        dto = UpdatePaymentStatusHandler(uow).handle("admin", order_id, "paid")
        assert dto.payment_status == "PAID"
        assert dto.status == "PENDING"

    def test_customer_cannot_update(self):
        uow, order_id = _setup()
        with pytest.raises(AuthorizationError, match="Administrator access required"):
            UpdateOrderStatusHandler(uow).handle("u1", order_id, "CANCELLED")
        assert uow.orders.get_by_id(order_id).status.value == "PENDING"

    def test_invalid_status(self):
        uow, order_id = _setup()
        with pytest.raises(ValidationError, match="Invalid status"):
            UpdateOrderStatusHandler(uow).handle("admin", order_id, "TELEPORTED")

    def test_invalid_payment_status(self):
        uow, order_id = _setup()
        with pytest.raises(ValidationError, match="Invalid payment status"):
            UpdatePaymentStatusHandler(uow).handle("admin", order_id, "MAYBE")

    def test_missing_order(self):
        uow, _ = _setup()
        with pytest.raises(EntityNotFoundError):
            UpdateOrderStatusHandler(uow).handle("admin", 999, "SHIPPED")

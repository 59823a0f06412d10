"""Shared fixtures for tests that run against a real SQLite database."""

from __future__ import annotations

import pytest

from storefront.domain.model.product import Product
from storefront.domain.model.user import Role, User
from storefront.domain.model.value_objects import Money
from storefront.infrastructure.persistence.database import (
    build_engine,
    build_session_factory,
    create_schema,
)
from storefront.infrastructure.persistence.sql_unit_of_work import SqlUnitOfWork


@pytest.fixture()
def engine():
    eng = build_engine("sqlite://")
    create_schema(eng)
    yield eng
    eng.dispose()


@pytest.fixture()
def session_factory(engine):
    return build_session_factory(engine)


@pytest.fixture()
def uow_factory(session_factory):
    return lambda: SqlUnitOfWork(session_factory)


@pytest.fixture()
def seeded(uow_factory):
    """Three users and three products; returns the uow factory."""
    with uow_factory() as uow:
        uow.users.save(User(id="u1", name="Alice", email="alice@example.com"))
        uow.users.save(User(id="u2", name="Bob", email="bob@example.com"))
        uow.users.save(
            User(id="admin", name="Root", email="root@example.com", role=Role.ADMIN)
        )
        uow.products.save(Product(id="A", name="Widget", price=Money.of("10.00"), stock=2))
        uow.products.save(Product(id="B", name="Gadget", price=Money.of("5.00"), stock=1))
        uow.products.save(Product(id="C", name="Gizmo", price=Money.of("7.00"), stock=0))
        uow.commit()
    return uow_factory

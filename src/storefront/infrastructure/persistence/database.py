"""Engine and session construction.

SQLite gets two adjustments so it behaves like a transactional store:
foreign keys are switched on for every connection, and every transaction
starts with ``BEGIN IMMEDIATE``.  The latter takes the database write
lock up front, so concurrent units of work are linearized by SQLite
instead of failing with a lock upgrade deadlock; waiters block for up to
the configured timeout.
"""

from __future__ import annotations

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from storefront.infrastructure.persistence.orm import Base


def build_engine(database_url: str, timeout: float = 30.0, echo: bool = False) -> Engine:
    if not database_url.startswith("sqlite"):
        return create_engine(database_url, echo=echo, pool_pre_ping=True)

    kwargs: dict = {
        "echo": echo,
        "connect_args": {"timeout": timeout, "check_same_thread": False},
    }
    if database_url in ("sqlite://", "sqlite:///:memory:"):
        # One shared connection, otherwise each checkout sees its own empty database
        kwargs["poolclass"] = StaticPool

    engine = create_engine(database_url, **kwargs)
    _install_sqlite_transaction_hooks(engine)
    return engine


def _install_sqlite_transaction_hooks(engine: Engine) -> None:

    @event.listens_for(engine, "connect")
    def _on_connect(dbapi_connection, connection_record):
        # Let SQLAlchemy emit BEGIN itself instead of pysqlite's implicit one
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    @event.listens_for(engine, "begin")
    def _on_begin(conn):
        conn.exec_driver_sql("BEGIN IMMEDIATE")


def build_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(bind=engine, expire_on_commit=False)


def create_schema(engine: Engine) -> None:
    Base.metadata.create_all(engine)


def drop_schema(engine: Engine) -> None:
    Base.metadata.drop_all(engine)

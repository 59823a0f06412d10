"""Composition root: wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

from functools import lru_cache

from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from storefront.application.notifications import EmailPort, NotificationDispatcher
from storefront.infrastructure.config import Settings
from storefront.infrastructure.notifications.log_email import LogEmailAdapter
from storefront.infrastructure.notifications.smtp_email import SmtpEmailAdapter
from storefront.infrastructure.persistence.database import (
    build_engine,
    build_session_factory,
    create_schema,
)
from storefront.infrastructure.persistence.sql_unit_of_work import SqlUnitOfWork


@lru_cache(maxsize=None)
def settings() -> Settings:
    return Settings.from_env()


@lru_cache(maxsize=None)
def engine() -> Engine:
    cfg = settings()
    if cfg.database_url.startswith("sqlite:///"):
        from pathlib import Path

        Path(cfg.database_url.removeprefix("sqlite:///")).parent.mkdir(
            parents=True, exist_ok=True
        )
    eng = build_engine(cfg.database_url, timeout=cfg.db_timeout)
    create_schema(eng)
    return eng


@lru_cache(maxsize=None)
def session_factory() -> sessionmaker:
    return build_session_factory(engine())


def unit_of_work() -> SqlUnitOfWork:
    return SqlUnitOfWork(session_factory())


def email_adapter(cfg: Settings | None = None) -> EmailPort:
    cfg = cfg or settings()
    if cfg.email_backend == "smtp":
        return SmtpEmailAdapter(
            host=cfg.smtp_host,
            port=cfg.smtp_port,
            sender=cfg.email_from,
            username=cfg.smtp_user,
            password=cfg.smtp_password,
        )
    return LogEmailAdapter()


def notification_dispatcher() -> NotificationDispatcher:
    return NotificationDispatcher(email_adapter())

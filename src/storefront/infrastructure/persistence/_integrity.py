"""Helpers for interpreting storage constraint violations."""

from __future__ import annotations

from sqlalchemy.exc import IntegrityError


def is_unique_violation(exc: IntegrityError, constraint: str, columns: tuple[str, ...]) -> bool:
    """True if *exc* was raised by the given unique constraint.

    PostgreSQL names the constraint in its message.  SQLite only reports
    the qualified column list, e.g. ``reviews.user_id, reviews.product_id``.
    """
    message = str(exc.orig)
    if constraint in message:
        return True
    return f"UNIQUE constraint failed: {', '.join(columns)}" in message

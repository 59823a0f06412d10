"""Apply a PageRequest to a SELECT."""

from __future__ import annotations

from sqlalchemy import Select

from storefront.domain.model.value_objects import PageRequest


def paginate(stmt: Select, page: PageRequest | None) -> Select:
    if page is None or page.limit is None:
        return stmt
    return stmt.offset(page.offset).limit(page.limit)

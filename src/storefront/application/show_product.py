"""Application services: catalog queries."""

from __future__ import annotations

from decimal import Decimal

from storefront.application.dto import ProductDTO
from storefront.domain.exceptions import EntityNotFoundError, ValidationError
from storefront.domain.model.value_objects import PageRequest
from storefront.domain.repository.unit_of_work import UnitOfWork

TOP_RATED_MIN_RATING = Decimal("4")


class ShowProductHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, product_id: str) -> ProductDTO:
        with self._uow as uow:
            product = uow.products.get_by_id(product_id)
        if product is None:
            raise EntityNotFoundError(f"Product with ID '{product_id}' not found")
        return ProductDTO.from_domain(product)


class ListProductsHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, page: int = 1, limit: int | None = None) -> list[ProductDTO]:
        request = PageRequest(page, limit)
        with self._uow as uow:
            products = uow.products.list_all(request)
        return [ProductDTO.from_domain(p) for p in products]


class ListTopProductsHandler:
    """Best-rated products, read straight from the stored rating aggregate."""

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, limit: int = 5) -> list[ProductDTO]:
        if limit < 1:
            raise ValidationError("Limit must be 1 or greater")
        with self._uow as uow:
            products = uow.products.list_top_rated(TOP_RATED_MIN_RATING, limit)
        return [ProductDTO.from_domain(p) for p in products]

"""Application service: Add Product use case."""

from __future__ import annotations

from storefront.application.dto import ProductDTO
from storefront.domain.exceptions import ValidationError
from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import Money
from storefront.domain.repository.unit_of_work import UnitOfWork


class AddProductHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, name: str, price: str, stock: int = 0) -> ProductDTO:
        """Add a new product to the catalog."""
        if not name or not name.strip():
            raise ValidationError("Product name is required")

        with self._uow as uow:
            existing = uow.products.get_by_name(name.strip())
            if existing is not None:
                raise ValidationError(f"Product '{name}' already exists")

            product = Product(
                id=uow.products.next_id(),
                name=name.strip(),
                price=Money.of(price),
                stock=stock,
            )
            uow.products.save(product)
            uow.commit()

        return ProductDTO.from_domain(product)

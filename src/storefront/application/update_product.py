"""Application services: Update Product and Restock Product use cases."""

from __future__ import annotations

from storefront.application.dto import ProductDTO
from storefront.domain.exceptions import EntityNotFoundError
from storefront.domain.model.value_objects import Money
from storefront.domain.repository.unit_of_work import UnitOfWork


class UpdateProductHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(
        self,
        product_id: str,
        new_price: str | None = None,
        stock: int | None = None,
    ) -> ProductDTO:
        """Update a product's price and/or stock level.

        A price change does NOT affect any existing orders; they
        captured a price snapshot at creation time.
        """
        with self._uow as uow:
            product = uow.products.get_for_update(product_id)
            if product is None:
                raise EntityNotFoundError(f"Product with ID '{product_id}' not found")

            if new_price is not None:
                product.update_price(Money.of(new_price))
            if stock is not None:
                product.set_stock(stock)

            uow.products.save(product)
            uow.commit()

        return ProductDTO.from_domain(product)


class RestockProductHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, product_id: str, quantity: int) -> ProductDTO:
        with self._uow as uow:
            product = uow.products.get_for_update(product_id)
            if product is None:
                raise EntityNotFoundError(f"Product with ID '{product_id}' not found")

            product.restock(quantity)
            uow.products.save(product)
            uow.commit()

        return ProductDTO.from_domain(product)

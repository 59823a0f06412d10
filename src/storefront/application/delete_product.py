"""Application service: Delete Product use case.

Order items keep a frozen copy of the product's name and price, but the
product row is still the anchor of that purchase history, so a product
that has ever been ordered cannot be deleted.  Unordered products are
removed together with their cart lines and reviews.
"""

from __future__ import annotations

import structlog

from storefront.domain.exceptions import EntityNotFoundError, ProductInUseError
from storefront.domain.repository.unit_of_work import UnitOfWork

logger = structlog.get_logger(__name__)


class DeleteProductHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, product_id: str) -> None:
        with self._uow as uow:
            product = uow.products.get_for_update(product_id)
            if product is None:
                raise EntityNotFoundError(f"Product with ID '{product_id}' not found")

            if uow.orders.references_product(product_id):
                raise ProductInUseError(
                    f"Product '{product.name}' has purchase history and cannot be deleted"
                )

            uow.products.delete(product_id)
            uow.commit()

        logger.info("Product deleted", product_id=product_id)

"""Domain service: Inventory Ledger.

The ledger is the only path by which checkout changes stock.  It never
reads stock and writes it back; it asks storage for a single conditional
decrement so two concurrent checkouts cannot both pass a stale check.
"""

from __future__ import annotations

import structlog

from storefront.domain.exceptions import InsufficientStockError, ValidationError
from storefront.domain.repository.product_repository import ProductRepository

logger = structlog.get_logger(__name__)


class InventoryLedger:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def reserve(self, product_id: str, product_name: str, quantity: int) -> None:
        """Commit *quantity* units of a product to the enclosing transaction.

        Raises InsufficientStockError if the current persisted stock
        cannot cover the quantity.  Nothing is written in that case; the
        caller is expected to abandon its unit of work.
        """
        if quantity <= 0:
            raise ValidationError("Reservation quantity must be positive")

        if not self._product_repo.decrement_stock(product_id, quantity):
            logger.warning(
                "Stock decrement rejected",
                product_id=product_id,
                product_name=product_name,
                quantity=quantity,
            )
            raise InsufficientStockError(product_name)

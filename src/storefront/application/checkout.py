"""Application service: Checkout use case.

Converts a buyer's cart into an order.  Everything between reading the
cart and clearing it happens in one unit of work:

1. Snapshot the cart with each product's current price and stock.
2. Validate every line against stock.  Fails fast before any write.
3. Price the order from the snapshot that passed validation.
4. Create the order and its frozen items.
5. Decrement stock per line through the inventory ledger.
6. Empty the cart (the cart itself is kept).

If any step fails, including a ledger rejection caused by a concurrent
checkout that drained stock after step 2, the unit of work rolls back and
nothing is left behind.  The confirmation email goes out only after the
commit and cannot fail the checkout.
"""

from __future__ import annotations

import structlog

from storefront.application.dto import CheckoutRequest, OrderDTO
from storefront.application.notifications import NotificationDispatcher
from storefront.domain.exceptions import (
    EmptyCartError,
    EntityNotFoundError,
    InsufficientStockError,
)
from storefront.domain.model.order import Order
from storefront.domain.repository.unit_of_work import UnitOfWork
from storefront.domain.service.cart_snapshot_reader import CartSnapshotReader
from storefront.domain.service.inventory_ledger import InventoryLedger

logger = structlog.get_logger(__name__)


class CheckoutHandler:

    def __init__(
        self,
        uow: UnitOfWork,
        notifications: NotificationDispatcher,
    ) -> None:
        self._uow = uow
        self._notifications = notifications

    def handle(self, request: CheckoutRequest) -> OrderDTO:
        try:
            with self._uow as uow:
                buyer = uow.users.get_by_id(request.buyer_id)
                if buyer is None:
                    raise EntityNotFoundError(f"User '{request.buyer_id}' not found")

                cart = uow.carts.get_or_create(request.buyer_id)
                lines = CartSnapshotReader(uow.carts, uow.products).snapshot(
                    request.buyer_id
                )
                if not lines:
                    raise EmptyCartError("No items in cart")

                # Validate every line before touching anything
                for line in lines:
                    if not line.in_stock:
                        raise InsufficientStockError(line.product.name)

                order = Order.place(
                    buyer_id=request.buyer_id,
                    lines=lines,
                    shipping_address_id=request.shipping_address_id,
                    billing_address_id=request.billing_address_id,
                    payment_method_id=request.payment_method_id,
                    shipping_method=request.shipping_method,
                    notes=request.notes,
                )
                uow.orders.save(order)

                ledger = InventoryLedger(uow.products)
                for line in lines:
                    ledger.reserve(line.product.id, line.product.name, line.quantity)

                cart.clear()
                uow.carts.save(cart)

                uow.commit()
        except (EmptyCartError, InsufficientStockError) as exc:
            logger.info(
                "Checkout rejected",
                buyer_id=request.buyer_id,
                reason=str(exc),
            )
            raise

        logger.info(
            "Checkout completed",
            order_id=order.id,
            buyer_id=order.buyer_id,
            total=str(order.total),
            item_count=order.item_count,
        )

        # Post-commit, best effort
        self._notifications.order_confirmed(buyer, order)

        return OrderDTO.from_domain(order)

"""CLI commands for the Order aggregate."""

from __future__ import annotations

import click

from storefront.application.dto import OrderDTO
from storefront.application.show_order import ShowOrderHandler
from storefront.application.update_order_status import (
    UpdateOrderStatusHandler,
    UpdatePaymentStatusHandler,
)
from storefront.domain.exceptions import DomainException
from storefront.domain.model.order import OrderStatus, PaymentStatus
from storefront.infrastructure.bootstrap import unit_of_work


def display_order(dto: OrderDTO) -> None:
    """Shared formatting for displaying an order."""
    click.echo(f"Order #{dto.id}  (status={dto.status}, payment={dto.payment_status})")
    click.echo(f"Buyer:   {dto.buyer_id}")
    click.echo(f"Created: {dto.created_at}")
    click.echo()
    click.echo(f"  {'Product':<20} {'Qty':>5} {'Price':>10} {'Total':>10}")
    click.echo(f"  {'-'*47}")
    for item in dto.items:
        click.echo(
            f"  {item.product_name:<20} {item.quantity:>5} {item.unit_price:>10} {item.line_total:>10}"
        )
    click.echo(f"  {'-'*47}")
    click.echo(f"  {'Order Total':<27} {dto.total:>20}")


@click.command("show")
@click.option("--user", "user_id", required=True, help="Acting user ID.")
@click.option("--id", "order_id", required=True, type=int, help="Order ID to display.")
def order_show(user_id: str, order_id: int) -> None:
    """Show details of an existing order."""
    handler = ShowOrderHandler(uow=unit_of_work())

    try:
        dto = handler.handle(user_id, order_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    display_order(dto)


@click.command("status")
@click.option("--admin", "admin_id", required=True, help="Administrator user ID.")
@click.option("--id", "order_id", required=True, type=int, help="Order ID.")
@click.option(
    "--status",
    required=True,
    type=click.Choice([s.value for s in OrderStatus], case_sensitive=False),
)
def order_status(admin_id: str, order_id: int, status: str) -> None:
    """Move an order to a new fulfillment status."""
    handler = UpdateOrderStatusHandler(uow=unit_of_work())

    try:
        dto = handler.handle(admin_id, order_id, status)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order #{dto.id} status is now {dto.status}.")


@click.command("payment")
@click.option("--admin", "admin_id", required=True, help="Administrator user ID.")
@click.option("--id", "order_id", required=True, type=int, help="Order ID.")
@click.option(
    "--status",
    required=True,
    type=click.Choice([s.value for s in PaymentStatus], case_sensitive=False),
)
def order_payment(admin_id: str, order_id: int, status: str) -> None:
    """Record a new payment status for an order."""
    handler = UpdatePaymentStatusHandler(uow=unit_of_work())

    try:
        dto = handler.handle(admin_id, order_id, status)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order #{dto.id} payment status is now {dto.payment_status}.")

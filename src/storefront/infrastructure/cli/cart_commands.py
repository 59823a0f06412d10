"""CLI commands for the Cart aggregate and checkout."""

from __future__ import annotations

import click

from storefront.application.add_to_cart import AddToCartHandler
from storefront.application.checkout import CheckoutHandler
from storefront.application.dto import CartDTO, CheckoutRequest
from storefront.application.remove_from_cart import RemoveFromCartHandler
from storefront.application.show_cart import ShowCartHandler
from storefront.domain.exceptions import DomainException
from storefront.infrastructure.bootstrap import notification_dispatcher, unit_of_work
from storefront.infrastructure.cli.order_commands import display_order


def _display_cart(dto: CartDTO) -> None:
    if not dto.lines:
        click.echo("Cart is empty.")
        return

    click.echo(f"  {'Product':<20} {'Qty':>5} {'Price':>10} {'Total':>10}")
    click.echo(f"  {'-'*47}")
    for line in dto.lines:
        marker = "" if line.in_stock else "  (insufficient stock)"
        click.echo(
            f"  {line.product_name:<20} {line.quantity:>5} {line.unit_price:>10} "
            f"{line.line_total:>10}{marker}"
        )
    click.echo(f"  {'-'*47}")
    click.echo(f"  {'Cart Total':<27} {dto.total:>20}")


@click.command("add")
@click.option("--user", "user_id", required=True, help="Buyer ID.")
@click.option("--product", "product_id", required=True, help="Product ID.")
@click.option("--quantity", default=1, show_default=True, type=int, help="Units to add.")
def cart_add(user_id: str, product_id: str, quantity: int) -> None:
    """Add a product to the buyer's cart."""
    handler = AddToCartHandler(uow=unit_of_work())

    try:
        dto = handler.handle(buyer_id=user_id, product_id=product_id, quantity=quantity)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_cart(dto)


@click.command("show")
@click.option("--user", "user_id", required=True, help="Buyer ID.")
def cart_show(user_id: str) -> None:
    """Show the buyer's cart at current prices."""
    try:
        dto = ShowCartHandler(uow=unit_of_work()).handle(user_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_cart(dto)


@click.command("remove")
@click.option("--user", "user_id", required=True, help="Buyer ID.")
@click.option("--product", "product_id", required=True, help="Product ID.")
def cart_remove(user_id: str, product_id: str) -> None:
    """Remove a product from the buyer's cart."""
    try:
        RemoveFromCartHandler(uow=unit_of_work()).handle(user_id, product_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product #{product_id} removed from cart.")


@click.command("checkout")
@click.option("--user", "user_id", required=True, help="Buyer ID.")
@click.option("--shipping-address", default=None, help="Shipping address reference.")
@click.option("--billing-address", default=None, help="Billing address reference.")
@click.option("--payment-method", default=None, help="Payment method reference.")
@click.option("--shipping-method", default=None, help="Shipping method name.")
@click.option("--notes", default=None, help="Free-text order notes.")
def checkout(
    user_id: str,
    shipping_address: str | None,
    billing_address: str | None,
    payment_method: str | None,
    shipping_method: str | None,
    notes: str | None,
) -> None:
    """Turn the buyer's cart into an order."""
    handler = CheckoutHandler(uow=unit_of_work(), notifications=notification_dispatcher())
    request = CheckoutRequest(
        buyer_id=user_id,
        shipping_address_id=shipping_address,
        billing_address_id=billing_address,
        payment_method_id=payment_method,
        shipping_method=shipping_method,
        notes=notes,
    )

    try:
        dto = handler.handle(request)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order #{dto.id} placed.")
    display_order(dto)

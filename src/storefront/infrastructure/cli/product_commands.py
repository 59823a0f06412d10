"""CLI commands for the Product aggregate."""

from __future__ import annotations

import click

from storefront.application.add_product import AddProductHandler
from storefront.application.delete_product import DeleteProductHandler
from storefront.application.dto import ProductDTO
from storefront.application.show_product import ListProductsHandler, ListTopProductsHandler
from storefront.application.update_product import RestockProductHandler, UpdateProductHandler
from storefront.domain.exceptions import DomainException
from storefront.infrastructure.bootstrap import unit_of_work


@click.command("add")
@click.option("--name", required=True, help="Product name.")
@click.option("--price", required=True, help="Price (e.g. 15.00).")
@click.option("--stock", default=0, show_default=True, type=int, help="Units on hand.")
def product_add(name: str, price: str, stock: int) -> None:
    """Add a new product to the catalog."""
    handler = AddProductHandler(uow=unit_of_work())

    try:
        product = handler.handle(name=name, price=price, stock=stock)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(
        f"Product #{product.id} '{product.name}' added at {product.price} "
        f"({product.stock} in stock)"
    )


@click.command("list")
@click.option("--page", default=1, show_default=True, type=click.IntRange(min=1))
@click.option("--limit", default=None, type=click.IntRange(min=1), help="Products per page.")
def product_list(page: int, limit: int | None) -> None:
    """List all products in the catalog."""
    _print_products(ListProductsHandler(uow=unit_of_work()).handle(page, limit))


@click.command("top")
@click.option("--limit", default=5, show_default=True, type=click.IntRange(min=1))
def product_top(limit: int) -> None:
    """List the best-rated products (4 stars or more)."""
    _print_products(ListTopProductsHandler(uow=unit_of_work()).handle(limit))


def _print_products(products: list[ProductDTO]) -> None:
    if not products:
        click.echo("No products found.")
        return

    click.echo(f"{'ID':<6} {'Name':<20} {'Price':>10} {'Stock':>6} {'Rating':>7} {'Reviews':>8}")
    click.echo("-" * 62)
    for p in products:
        click.echo(
            f"{p.id:<6} {p.name:<20} {p.price:>10} {p.stock:>6} {p.rating:>7} {p.review_count:>8}"
        )


@click.command("update")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.option("--price", default=None, help="New price (e.g. 29.99).")
@click.option("--stock", default=None, type=int, help="New stock level.")
def product_update(product_id: str, price: str | None, stock: int | None) -> None:
    """Update a product's price and/or stock level."""
    if price is None and stock is None:
        raise click.ClickException("Nothing to update: pass --price and/or --stock")

    handler = UpdateProductHandler(uow=unit_of_work())

    try:
        product = handler.handle(product_id=product_id, new_price=price, stock=stock)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product #{product.id} updated: {product.price}, {product.stock} in stock")


@click.command("restock")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.option("--quantity", required=True, type=int, help="Units received.")
def product_restock(product_id: str, quantity: int) -> None:
    """Add received units to a product's stock."""
    handler = RestockProductHandler(uow=unit_of_work())

    try:
        product = handler.handle(product_id=product_id, quantity=quantity)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product #{product.id} restocked: {product.stock} in stock")


@click.command("delete")
@click.option("--id", "product_id", required=True, help="Product ID.")
def product_delete(product_id: str) -> None:
    """Remove a product that has never been ordered."""
    handler = DeleteProductHandler(uow=unit_of_work())

    try:
        handler.handle(product_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product #{product_id} deleted.")

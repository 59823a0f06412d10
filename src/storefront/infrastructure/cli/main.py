import click

from storefront.infrastructure import bootstrap
from storefront.infrastructure.cli.cart_commands import cart_add, cart_remove, cart_show, checkout
from storefront.infrastructure.cli.order_commands import order_payment, order_show, order_status
from storefront.infrastructure.cli.product_commands import (
    product_add,
    product_delete,
    product_list,
    product_restock,
    product_top,
    product_update,
)
from storefront.infrastructure.cli.review_commands import review_add, review_delete, review_edit
from storefront.infrastructure.cli.user_commands import user_add
from storefront.infrastructure.logging_config import configure_logging


@click.group()
def cli() -> None:
    """Storefront catalog, carts, checkout and reviews."""
    configure_logging(bootstrap.settings().env)


@cli.group()
def product() -> None:
    """Manage the product catalog."""


@cli.group()
def user() -> None:
    """Manage users."""


@cli.group()
def cart() -> None:
    """Manage shopping carts."""


@cli.group()
def order() -> None:
    """Manage orders."""


@cli.group()
def review() -> None:
    """Manage product reviews."""


@cli.group()
def db() -> None:
    """Database maintenance."""


@db.command("init")
def db_init() -> None:
    """Create the database schema if it does not exist."""
    bootstrap.engine()
    click.echo(f"Database ready at {bootstrap.settings().database_url}")


@cli.command("serve")
@click.option("--host", default="127.0.0.1", show_default=True)
@click.option("--port", default=8000, show_default=True, type=int)
def serve(host: str, port: int) -> None:
    """Run the HTTP API."""
    import uvicorn

    from storefront.infrastructure.api.app import create_app

    uvicorn.run(create_app(), host=host, port=port)


# Register subcommands
product.add_command(product_add)
product.add_command(product_delete)
product.add_command(product_list)
product.add_command(product_restock)
product.add_command(product_top)
product.add_command(product_update)
user.add_command(user_add)
cart.add_command(cart_add)
cart.add_command(cart_remove)
cart.add_command(cart_show)
cli.add_command(checkout)
order.add_command(order_payment)
order.add_command(order_show)
order.add_command(order_status)
review.add_command(review_add)
review.add_command(review_delete)
review.add_command(review_edit)

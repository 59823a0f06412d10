"""CLI commands for users."""

from __future__ import annotations

import click

from storefront.application.register_user import RegisterUserHandler
from storefront.domain.exceptions import DomainException
from storefront.infrastructure.bootstrap import notification_dispatcher, unit_of_work


@click.command("add")
@click.option("--name", required=True, help="Display name.")
@click.option("--email", required=True, help="Email address.")
@click.option("--admin", is_flag=True, default=False, help="Grant administrator role.")
def user_add(name: str, email: str, admin: bool) -> None:
    """Register a user."""
    handler = RegisterUserHandler(uow=unit_of_work(), notifications=notification_dispatcher())

    try:
        user = handler.handle(name=name, email=email, admin=admin)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"User {user.id} '{user.name}' <{user.email}> registered ({user.role.value})")

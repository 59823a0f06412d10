"""CLI commands for reviews."""

from __future__ import annotations

import click

from storefront.application.delete_review import DeleteReviewHandler
from storefront.application.edit_review import EditReviewHandler
from storefront.application.submit_review import SubmitReviewHandler
from storefront.domain.exceptions import DomainException
from storefront.infrastructure.bootstrap import unit_of_work


@click.command("add")
@click.option("--user", "user_id", required=True, help="Reviewer ID.")
@click.option("--product", "product_id", required=True, help="Product ID.")
@click.option("--rating", required=True, type=int, help="Stars, 1 to 5.")
@click.option("--title", default=None)
@click.option("--content", default=None)
def review_add(
    user_id: str, product_id: str, rating: int, title: str | None, content: str | None
) -> None:
    """Review a product."""
    handler = SubmitReviewHandler(uow=unit_of_work())

    try:
        review = handler.handle(
            user_id=user_id, product_id=product_id, rating=rating, title=title, content=content
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Review #{review.id} added ({review.rating}/5).")


@click.command("edit")
@click.option("--user", "user_id", required=True, help="Acting user ID.")
@click.option("--id", "review_id", required=True, type=int, help="Review ID.")
@click.option("--rating", default=None, type=int)
@click.option("--title", default=None)
@click.option("--content", default=None)
def review_edit(
    user_id: str,
    review_id: int,
    rating: int | None,
    title: str | None,
    content: str | None,
) -> None:
    """Edit a review."""
    handler = EditReviewHandler(uow=unit_of_work())

    try:
        review = handler.handle(
            user_id=user_id, review_id=review_id, rating=rating, title=title, content=content
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Review #{review.id} updated ({review.rating}/5).")


@click.command("delete")
@click.option("--user", "user_id", required=True, help="Acting user ID.")
@click.option("--id", "review_id", required=True, type=int, help="Review ID.")
def review_delete(user_id: str, review_id: int) -> None:
    """Delete a review."""
    try:
        DeleteReviewHandler(uow=unit_of_work()).handle(user_id, review_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Review #{review_id} deleted.")

"""CLI commands for product categories."""

from __future__ import annotations

import click

from ims.application.add_category import AddCategoryHandler
from ims.application.show_categories import ListCategoriesHandler, ShowCategoryHandler
from ims.domain.exceptions import DomainException
from ims.infrastructure.bootstrap import Container
from ims.infrastructure.cli.params import RECORD_ID


@click.command("add")
@click.option("--name", required=True, help="Category name (unique).")
@click.option("--description", default=None, help="Free-text description.")
@click.option("--parent-id", type=RECORD_ID, default=None, help="Parent category ID.")
@click.option(
    "--status",
    default="Active",
    show_default=True,
    type=click.Choice(["Active", "Inactive"], case_sensitive=False),
)
@click.pass_obj
def category_add(
    container: Container,
    name: str,
    description: str | None,
    parent_id: int | None,
    status: str,
) -> None:
    """Add a product category."""
    handler = AddCategoryHandler(container.uow_factory, retry_policy=container.retry_policy)

    try:
        dto = handler.handle(
            name=name, description=description, parent_id=parent_id, status=status
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Category #{dto.id} '{dto.name}' added")


@click.command("list")
@click.pass_obj
def category_list(container: Container) -> None:
    """List all categories."""
    categories = ListCategoriesHandler(container.uow_factory).handle()

    if not categories:
        click.echo("No categories found.")
        return

    click.echo(f"{'ID':<6} {'Name':<20} {'Parent':>6} {'Status':>9}")
    click.echo("-" * 44)
    for c in categories:
        parent = c.parent_id if c.parent_id is not None else "-"
        click.echo(f"{c.id:<6} {c.name:<20} {parent:>6} {c.status:>9}")


@click.command("show")
@click.option("--id", "category_id", required=True, type=RECORD_ID, help="Category ID.")
@click.pass_obj
def category_show(container: Container, category_id: int) -> None:
    """Show a single category."""
    try:
        c = ShowCategoryHandler(container.uow_factory).handle(category_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Category #{c.id}  (status={c.status})")
    click.echo(f"Name:        {c.name}")
    click.echo(f"Description: {c.description or '-'}")
    click.echo(f"Parent:      {c.parent_id or '-'}")

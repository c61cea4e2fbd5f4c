"""CLI commands for the Product aggregate."""

from __future__ import annotations

import click

from ims.application.add_product import AddProductHandler
from ims.application.show_products import ListProductsHandler, ShowProductHandler
from ims.application.update_product import UpdateProductHandler
from ims.domain.exceptions import DomainException
from ims.infrastructure.bootstrap import Container
from ims.infrastructure.cli.params import RECORD_ID


@click.command("add")
@click.option("--name", required=True, help="Product name.")
@click.option("--price", required=True, help="Unit price (e.g. 15.00).")
@click.option("--stock", default=0, show_default=True, type=int, help="Opening stock.")
@click.option("--category-id", type=RECORD_ID, default=None, help="Category ID.")
@click.option(
    "--status",
    default="Active",
    show_default=True,
    type=click.Choice(["Active", "Inactive"], case_sensitive=False),
)
@click.pass_obj
def product_add(
    container: Container,
    name: str,
    price: str,
    stock: int,
    category_id: int | None,
    status: str,
) -> None:
    """Add a new product to the catalog."""
    handler = AddProductHandler(container.uow_factory, retry_policy=container.retry_policy)

    try:
        dto = handler.handle(
            name=name, price=price, stock=stock, category_id=category_id, status=status
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(
        f"Product #{dto.id} '{dto.name}' added at ${dto.price} (stock={dto.stock})"
    )


@click.command("list")
@click.pass_obj
def product_list(container: Container) -> None:
    """List all products in the catalog."""
    products = ListProductsHandler(container.uow_factory).handle()

    if not products:
        click.echo("No products found.")
        return

    click.echo(f"{'ID':<6} {'Name':<20} {'Stock':>7} {'Price':>10} {'Status':>9}")
    click.echo("-" * 56)
    for p in products:
        click.echo(
            f"{p.id:<6} {p.name:<20} {p.stock:>7} {'$' + p.price:>10} {p.status:>9}"
        )


@click.command("show")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.pass_obj
def product_show(container: Container, product_id: str) -> None:
    """Show a single product."""
    try:
        p = ShowProductHandler(container.uow_factory).handle(product_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product #{p.id}  (status={p.status})")
    click.echo(f"Name:     {p.name}")
    click.echo(f"Category: {p.category_id or '-'}")
    click.echo(f"Price:    ${p.price}")
    click.echo(f"Stock:    {p.stock}")


@click.command("update")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.option("--price", default=None, help="New price (e.g. 29.99).")
@click.option("--name", default=None, help="New name.")
@click.option("--category-id", type=RECORD_ID, default=None, help="New category ID.")
@click.option(
    "--status",
    default=None,
    type=click.Choice(["Active", "Inactive"], case_sensitive=False),
)
@click.pass_obj
def product_update(
    container: Container,
    product_id: str,
    price: str | None,
    name: str | None,
    category_id: int | None,
    status: str | None,
) -> None:
    """Update a product's name, price, category or status (never its stock)."""
    handler = UpdateProductHandler(container.uow_factory)

    try:
        dto = handler.handle(
            product_id=product_id,
            price=price,
            status=status,
            name=name,
            category_id=category_id,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product #{dto.id} updated: '{dto.name}' ${dto.price} ({dto.status})")

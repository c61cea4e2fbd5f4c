"""CLI commands for recording and inspecting sales."""

from __future__ import annotations

import click

from ims.application.record_sale import RecordSaleHandler
from ims.application.show_sales import ListSalesHandler, ShowSaleHandler
from ims.domain.exceptions import DomainException, TransactionAbortedError
from ims.infrastructure.bootstrap import Container
from ims.infrastructure.cli.params import RECORD_ID


@click.command("record")
@click.option("--product", required=True, help="Product ID.")
@click.option("--quantity", required=True, help="Units sold (positive integer).")
@click.option("--price", required=True, help="Unit price charged (e.g. 5.00).")
@click.pass_obj
def sale_record(container: Container, product: str, quantity: str, price: str) -> None:
    """Record a sale and deduct the sold units from stock."""
    handler = RecordSaleHandler(
        container.uow_factory, retry_policy=container.retry_policy
    )

    try:
        dto = handler.handle({"product": product, "quantity": quantity, "price": price})
    except TransactionAbortedError as exc:
        raise click.ClickException(f"{exc} — nothing was recorded, try again.")
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(
        f"Sale #{dto.id} recorded: {dto.quantity} x ${dto.price} = ${dto.total}"
    )


def _sales_table(sales) -> None:
    click.echo(
        f"{'ID':<6} {'Date':<17} {'Product':<8} {'Qty':>5} {'Price':>10} {'Total':>10} {'Status':>10}"
    )
    click.echo("-" * 72)
    for s in sales:
        click.echo(
            f"{s.id:<6} {s.sale_date[:16].replace('T', ' '):<17} {s.product_id:<8} "
            f"{s.quantity:>5} {'$' + s.price:>10} {'$' + s.total:>10} {s.status:>10}"
        )


@click.command("list")
@click.pass_obj
def sale_list(container: Container) -> None:
    """List all recorded sales."""
    sales = ListSalesHandler(container.uow_factory).handle()
    if not sales:
        click.echo("No sales recorded.")
        return
    _sales_table(sales)


@click.command("show")
@click.option("--id", "sale_id", required=True, type=RECORD_ID, help="Sale ID.")
@click.pass_obj
def sale_show(container: Container, sale_id: int) -> None:
    """Show a single sale."""
    try:
        dto = ShowSaleHandler(container.uow_factory).handle(sale_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))
    _sales_table([dto])

"""CLI commands for purchase orders."""

from __future__ import annotations

import click

from ims.application.complete_purchase_order import CompletePurchaseOrderHandler
from ims.application.create_purchase_order import CreatePurchaseOrderHandler
from ims.application.show_purchase_orders import (
    ListPurchaseOrdersHandler,
    ShowPurchaseOrderHandler,
)
from ims.application.validation import parse_purchase_lines
from ims.domain.exceptions import DomainException
from ims.infrastructure.bootstrap import Container
from ims.infrastructure.cli.params import RECORD_ID


def _display_order(dto) -> None:
    click.echo(f"Purchase order #{dto.id}  (status={dto.status})")
    click.echo(f"Supplier: #{dto.supplier_id}")
    click.echo(f"Date:     {dto.order_date[:16].replace('T', ' ')}")
    click.echo()
    click.echo(f"  {'Product':<10} {'Qty':>5} {'Price':>10} {'Total':>10}")
    click.echo(f"  {'-'*38}")
    for line in dto.lines:
        click.echo(
            f"  {line.product_id:<10} {line.quantity:>5} "
            f"{'$' + line.price:>10} {'$' + line.line_total:>10}"
        )
    click.echo(f"  {'-'*38}")
    click.echo(f"  {'Order Total':<17} {'$' + dto.total:>21}")


@click.command("create")
@click.option("--supplier-id", required=True, type=RECORD_ID, help="Supplier ID.")
@click.option(
    "--items", required=True, help="Lines as 'ProductID:Qty:Price,ProductID:Qty:Price'."
)
@click.option(
    "--completed", is_flag=True, default=False, help="Receive the goods immediately."
)
@click.pass_obj
def purchase_create(
    container: Container, supplier_id: int, items: str, completed: bool
) -> None:
    """Create a purchase order (stock is added once it is completed)."""
    handler = CreatePurchaseOrderHandler(
        container.uow_factory, retry_policy=container.retry_policy
    )

    try:
        lines = parse_purchase_lines(items)
        dto = handler.handle(
            supplier_id=supplier_id,
            lines=lines,
            status="Completed" if completed else "Pending",
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_order(dto)


@click.command("complete")
@click.option("--id", "order_id", required=True, type=RECORD_ID, help="Purchase order ID.")
@click.pass_obj
def purchase_complete(container: Container, order_id: int) -> None:
    """Mark a purchase order completed and add its lines to stock."""
    handler = CompletePurchaseOrderHandler(
        container.uow_factory, retry_policy=container.retry_policy
    )

    try:
        handler.handle(order_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Purchase order #{order_id} completed — stock updated.")


@click.command("show")
@click.option("--id", "order_id", required=True, type=RECORD_ID, help="Purchase order ID.")
@click.pass_obj
def purchase_show(container: Container, order_id: int) -> None:
    """Show a purchase order."""
    try:
        dto = ShowPurchaseOrderHandler(container.uow_factory).handle(order_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))
    _display_order(dto)


@click.command("list")
@click.pass_obj
def purchase_list(container: Container) -> None:
    """List all purchase orders."""
    orders = ListPurchaseOrdersHandler(container.uow_factory).handle()
    if not orders:
        click.echo("No purchase orders found.")
        return

    click.echo(f"{'ID':<6} {'Supplier':>8} {'Lines':>6} {'Total':>12} {'Status':>10}")
    click.echo("-" * 58)
    for o in orders:
        click.echo(
            f"{o.id:<6} {o.supplier_id:>8} {len(o.lines):>6} {'$' + o.total:>12} {o.status:>10}"
        )

"""CLI commands for suppliers."""

from __future__ import annotations

import click

from ims.application.add_supplier import AddSupplierHandler
from ims.application.show_suppliers import ListSuppliersHandler, ShowSupplierHandler
from ims.domain.exceptions import DomainException
from ims.infrastructure.bootstrap import Container
from ims.infrastructure.cli.params import RECORD_ID


@click.command("add")
@click.option("--name", required=True, help="Supplier name.")
@click.option("--email", "contact_email", default=None, help="Contact e-mail.")
@click.option("--phone", default=None)
@click.option("--address", default=None)
@click.pass_obj
def supplier_add(
    container: Container,
    name: str,
    contact_email: str | None,
    phone: str | None,
    address: str | None,
) -> None:
    """Register a supplier."""
    handler = AddSupplierHandler(container.uow_factory, retry_policy=container.retry_policy)

    try:
        dto = handler.handle(
            name=name, contact_email=contact_email, phone=phone, address=address
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Supplier #{dto.id} '{dto.name}' added")


@click.command("list")
@click.pass_obj
def supplier_list(container: Container) -> None:
    """List all suppliers."""
    suppliers = ListSuppliersHandler(container.uow_factory).handle()

    if not suppliers:
        click.echo("No suppliers found.")
        return

    click.echo(f"{'ID':<6} {'Name':<24} {'Email':<28}")
    click.echo("-" * 60)
    for s in suppliers:
        click.echo(f"{s.id:<6} {s.name:<24} {s.contact_email or '-':<28}")


@click.command("show")
@click.option("--id", "supplier_id", required=True, type=RECORD_ID, help="Supplier ID.")
@click.pass_obj
def supplier_show(container: Container, supplier_id: int) -> None:
    """Show a single supplier."""
    try:
        s = ShowSupplierHandler(container.uow_factory).handle(supplier_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Supplier #{s.id}")
    click.echo(f"Name:    {s.name}")
    click.echo(f"Email:   {s.contact_email or '-'}")
    click.echo(f"Phone:   {s.phone or '-'}")
    click.echo(f"Address: {s.address or '-'}")

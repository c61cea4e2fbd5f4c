import click

from ims.infrastructure.bootstrap import build_container
from ims.infrastructure.cli.category_commands import (
    category_add,
    category_list,
    category_show,
)
from ims.infrastructure.cli.product_commands import (
    product_add,
    product_list,
    product_show,
    product_update,
)
from ims.infrastructure.cli.purchase_commands import (
    purchase_complete,
    purchase_create,
    purchase_list,
    purchase_show,
)
from ims.infrastructure.cli.report_commands import (
    report_daily,
    report_monthly,
    report_range,
)
from ims.infrastructure.cli.sale_commands import sale_list, sale_record, sale_show
from ims.infrastructure.cli.supplier_commands import (
    supplier_add,
    supplier_list,
    supplier_show,
)
from ims.infrastructure.config import ConfigurationError


@click.group()
@click.pass_context
def cli(ctx: click.Context) -> None:
    """IMS — Inventory Management System"""
    if ctx.obj is None:
        try:
            ctx.obj = build_container()
        except ConfigurationError as exc:
            raise click.ClickException(str(exc))


@cli.group()
def product() -> None:
    """Manage the product catalog."""


@cli.group()
def category() -> None:
    """Manage product categories."""


@cli.group()
def sale() -> None:
    """Record and inspect sales."""


@cli.group()
def supplier() -> None:
    """Manage suppliers."""


@cli.group()
def purchase() -> None:
    """Manage purchase orders."""


@cli.group()
def report() -> None:
    """Sales reports."""


@cli.group()
def db() -> None:
    """Database maintenance."""


@db.command("init")
@click.pass_obj
def db_init(container) -> None:
    """Create the database tables (idempotent)."""
    click.echo(f"Database ready at {container.engine.url.render_as_string(hide_password=True)}")


@cli.command("serve")
@click.option("--host", default="127.0.0.1", show_default=True)
@click.option("--port", default=5000, show_default=True, type=int)
@click.pass_obj
def serve(container, host: str, port: int) -> None:
    """Run the JSON API with the development server."""
    from ims.infrastructure.web.app import create_app

    create_app(container).run(host=host, port=port)


# Register subcommands
product.add_command(product_add)
product.add_command(product_list)
product.add_command(product_show)
product.add_command(product_update)
category.add_command(category_add)
category.add_command(category_list)
category.add_command(category_show)
supplier.add_command(supplier_add)
supplier.add_command(supplier_list)
supplier.add_command(supplier_show)
sale.add_command(sale_record)
sale.add_command(sale_list)
sale.add_command(sale_show)
purchase.add_command(purchase_create)
purchase.add_command(purchase_complete)
purchase.add_command(purchase_list)
purchase.add_command(purchase_show)
report.add_command(report_daily)
report.add_command(report_monthly)
report.add_command(report_range)

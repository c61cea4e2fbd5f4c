"""CLI commands for sales reports."""

from __future__ import annotations

import click

from ims.application.sales_report import SalesReportHandler
from ims.application.validation import parse_date
from ims.domain.exceptions import DomainException
from ims.infrastructure.bootstrap import Container


def _period_table(rows, label: str) -> None:
    if not rows:
        click.echo("No sales recorded.")
        return
    click.echo(f"{label:<12} {'Orders':>8} {'Total':>14}")
    click.echo("-" * 36)
    for row in rows:
        click.echo(f"{row.period:<12} {row.count:>8} {'$' + row.total:>14}")


@click.command("daily")
@click.pass_obj
def report_daily(container: Container) -> None:
    """Sales totals per day, newest first."""
    _period_table(SalesReportHandler(container.uow_factory).daily(), "Day")


@click.command("monthly")
@click.pass_obj
def report_monthly(container: Container) -> None:
    """Sales totals per month, newest first."""
    _period_table(SalesReportHandler(container.uow_factory).monthly(), "Month")


@click.command("range")
@click.option("--start", required=True, help="First day, YYYY-MM-DD.")
@click.option("--end", required=True, help="Last day (inclusive), YYYY-MM-DD.")
@click.pass_obj
def report_range(container: Container, start: str, end: str) -> None:
    """Individual sales between two dates."""
    try:
        report = SalesReportHandler(container.uow_factory).by_date_range(
            parse_date(start, "start"), parse_date(end, "end")
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Sales from {report.start} to {report.end}")
    click.echo()
    if not report.sales:
        click.echo("No sales in this range.")
        return
    click.echo(f"{'Date':<11} {'Product':<8} {'Qty':>5} {'Total':>10} {'Status':>10}")
    click.echo("-" * 48)
    for s in report.sales:
        click.echo(
            f"{s.sale_date[:10]:<11} {s.product_id:<8} {s.quantity:>5} "
            f"{'$' + s.total:>10} {s.status:>10}"
        )
    click.echo("-" * 48)
    click.echo(f"{'Total':<26} {'$' + report.total:>10}")

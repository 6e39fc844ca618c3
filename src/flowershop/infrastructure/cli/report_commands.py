"""CLI commands for reports (admin)."""

from __future__ import annotations

import click

from flowershop.application.sales_report import SalesReportHandler
from flowershop.infrastructure import bootstrap
from flowershop.infrastructure.cli.common import domain_errors


@click.command("sales")
@click.option("--from", "date_from", default=None, help="First day (YYYY-MM-DD).")
@click.option("--to", "date_to", default=None, help="Last day (YYYY-MM-DD).")
def report_sales(date_from: str | None, date_to: str | None) -> None:
    """Revenue, order count and best sellers."""
    handler = SalesReportHandler(bootstrap.unit_of_work)
    with domain_errors():
        report = handler.handle(date_from=date_from, date_to=date_to)

    click.echo(f"Orders:  {report.orders}")
    click.echo(f"Revenue: ${report.total_revenue}")
    if not report.top_flowers:
        return
    click.echo()
    click.echo(f"  {'Flower':<20} {'Qty':>5} {'Revenue':>10}")
    click.echo(f"  {'-'*37}")
    for row in report.top_flowers:
        name = row.name or f"#{row.flower_id}"
        click.echo(f"  {name:<20} {row.quantity:>5} {row.revenue:>10}")

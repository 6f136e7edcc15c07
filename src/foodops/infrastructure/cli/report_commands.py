"""CLI command for the sales analytics report."""

from __future__ import annotations

from pathlib import Path

import click

from foodops.domain.exceptions import DomainException
from foodops.domain.service.analytics import AnalyticsReport, ReportPeriod
from foodops.infrastructure.cli.order_commands import open_snapshot, snapshot_option


@click.command("report")
@snapshot_option
@click.option(
    "--period",
    type=click.Choice([p.value for p in ReportPeriod]),
    default=ReportPeriod.WEEK.value,
    show_default=True,
)
def report(snapshot: Path, period: str) -> None:
    """Print sales analytics for the window ending today."""
    container = open_snapshot(snapshot)

    try:
        result = container.generate_report().handle(period)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_report(result)


def _display_report(result: AnalyticsReport) -> None:
    click.echo(f"Period {result.period.value}: {result.total_orders} orders, "
               f"revenue {result.total_revenue}")
    click.echo()

    click.echo(f"{'Date':<12} {'Orders':>7} {'Revenue':>12} {'Customers':>10}")
    click.echo("-" * 44)
    for day in result.sales:
        click.echo(
            f"{day.date.isoformat():<12} {day.order_count:>7} "
            f"{day.revenue.amount:>12.2f} {day.unique_customers:>10}"
        )
    click.echo()

    click.echo(f"{'Category':<16} {'Lines':>7} {'Items':>7} {'Revenue':>12}")
    click.echo("-" * 45)
    for cat in result.categories:
        click.echo(
            f"{cat.name:<16} {cat.order_lines:>7} {cat.items:>7} {cat.revenue.amount:>12.2f}"
        )
    click.echo()

    if result.top_products:
        click.echo("Top dishes:")
        for rank, product in enumerate(result.top_products, start=1):
            click.echo(
                f"  {rank:>2}. {product.name:<24} {product.order_lines:>4} orders "
                f"{product.quantity:>4} pcs {product.revenue.amount:>10.2f}"
            )
        click.echo()

    customers = result.customers
    click.echo(
        f"Customers: {customers.total} total, {customers.new_customers} new, "
        f"{customers.returning_customers} returning, "
        f"{customers.average_orders:.2f} orders each"
    )
    if result.order_status_histogram:
        click.echo(
            "Statuses:  "
            + ", ".join(f"{h.status.value}={h.count}" for h in result.order_status_histogram)
        )

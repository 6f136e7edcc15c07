"""CLI commands for working with order snapshot files.

The live order log only exists inside a running server; these commands
load a JSON snapshot into a fresh in-memory log, run the use case, and
write the file back when the log changed.
"""

from __future__ import annotations

from pathlib import Path

import click

from foodops.application.dto import ALL_STATUSES, DEFAULT_LIST_LIMIT, OrderDTO, OrderFilter
from foodops.domain.exceptions import DomainException
from foodops.domain.model.status import OrderStatus
from foodops.infrastructure.bootstrap import Container, build_container, order_repository
from foodops.infrastructure.persistence.json_order_log import JsonOrderLog

_STATUS_CHOICES = [ALL_STATUSES] + [s.value for s in OrderStatus]

snapshot_option = click.option(
    "--file",
    "snapshot",
    required=True,
    type=click.Path(dir_okay=False, path_type=Path),
    help="Order snapshot JSON file.",
)


def open_snapshot(snapshot: Path) -> Container:
    try:
        return build_container(order_repo=order_repository(snapshot))
    except DomainException as exc:
        raise click.ClickException(str(exc))


def _display_order(dto: OrderDTO) -> None:
    """Shared formatting for displaying an order."""
    click.echo(f"Order #{dto.id}  (status={dto.status}, {dto.status_label})")
    click.echo(f"Customer: {dto.customer_name}  {dto.customer_phone}")
    click.echo(f"Address:  {dto.address}")
    click.echo(f"Payment:  {dto.payment_method}")
    click.echo(f"Created:  {dto.created_at:%Y-%m-%d %H:%M %Z}")
    click.echo(f"Updated:  {dto.updated_at:%Y-%m-%d %H:%M %Z}")
    if dto.comment:
        click.echo(f"Comment:  {dto.comment}")
    click.echo()

    click.echo(f"  {'Dish':<24} {'Qty':>5} {'Price':>10} {'Total':>10}")
    click.echo(f"  {'-'*51}")
    for item in dto.items:
        click.echo(
            f"  {item.product_name:<24} {item.quantity:>5} "
            f"{item.unit_price:>10.2f} {item.line_total:>10.2f}"
        )
    click.echo(f"  {'-'*51}")
    click.echo(f"  {'Subtotal':<31} {dto.subtotal:>20.2f}")
    click.echo(f"  {'Delivery':<31} {dto.delivery_fee:>20.2f}")
    click.echo(f"  {'Order Total':<31} {dto.total:>20.2f}")
    if dto.next_statuses:
        click.echo(f"Next:     {', '.join(dto.next_statuses)}")


@click.command("list")
@snapshot_option
@click.option(
    "--status", type=click.Choice(_STATUS_CHOICES), default=ALL_STATUSES, help="Status filter."
)
@click.option("--search", default=None, help="Match customer name, phone or order ID.")
@click.option("--limit", type=int, default=DEFAULT_LIST_LIMIT, show_default=True)
def order_list(snapshot: Path, status: str, search: str | None, limit: int) -> None:
    """List orders, most recent first."""
    container = open_snapshot(snapshot)
    order_filter = OrderFilter(
        status=status,
        search=search,
        limit=limit,
    )
    orders = container.list_orders().handle(order_filter)

    if not orders:
        click.echo("No orders found.")
        return

    click.echo(f"{'ID':<20} {'Created':<17} {'Customer':<20} {'Status':<12} {'Total':>10}")
    click.echo("-" * 83)
    for dto in orders:
        click.echo(
            f"{dto.id:<20} {dto.created_at:%Y-%m-%d %H:%M} {dto.customer_name:<20} "
            f"{dto.status:<12} {dto.total:>10.2f}"
        )


@click.command("show")
@snapshot_option
@click.option("--id", "order_id", required=True, help="Order ID to display.")
def order_show(snapshot: Path, order_id: str) -> None:
    """Show details of an existing order."""
    container = open_snapshot(snapshot)

    try:
        dto = container.show_order().handle(order_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_order(dto)


@click.command("status")
@snapshot_option
@click.option("--id", "order_id", required=True, help="Order ID to update.")
@click.option(
    "--to",
    "status",
    required=True,
    type=click.Choice([s.value for s in OrderStatus]),
    help="New status.",
)
def order_status(snapshot: Path, order_id: str, status: str) -> None:
    """Move an order to its next status and save the snapshot."""
    container = open_snapshot(snapshot)

    try:
        dto = container.update_order_status().handle(order_id, status)
        JsonOrderLog(snapshot).dump(container.order_repo.list_all())
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order #{dto.id} is now {dto.status} ({dto.status_label}).")

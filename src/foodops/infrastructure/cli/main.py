import click
import uvicorn

from foodops.infrastructure.cli.order_commands import order_list, order_show, order_status
from foodops.infrastructure.cli.report_commands import report
from foodops.infrastructure.config import get_settings
from foodops.infrastructure.logging import configure_logging


@click.group()
def cli() -> None:
    """FoodOps: order lifecycle and sales analytics"""
    settings = get_settings()
    configure_logging(settings.log_level, settings.log_format)


@cli.group()
def orders() -> None:
    """Inspect and update orders in a snapshot file."""


@cli.command()
@click.option("--host", default=None, help="Bind address (default from settings).")
@click.option("--port", type=int, default=None, help="Port (default from settings).")
def serve(host: str | None, port: int | None) -> None:
    """Run the HTTP API.  Orders are kept in memory until the process exits."""
    settings = get_settings()
    uvicorn.run(
        "foodops.infrastructure.api.app:create_app",
        factory=True,
        host=host or settings.host,
        port=port or settings.port,
        log_config=None,
    )


# Register subcommands
orders.add_command(order_list)
orders.add_command(order_show)
orders.add_command(order_status)
cli.add_command(report)

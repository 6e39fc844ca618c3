import click
import structlog

from flowershop.infrastructure import bootstrap
from flowershop.infrastructure.cli.customer_commands import (
    customer_add,
    customer_deactivate,
    customer_list,
    customer_orders,
    customer_show,
    customer_update,
)
from flowershop.infrastructure.cli.db_commands import db_init, db_seed
from flowershop.infrastructure.cli.flower_commands import (
    flower_add,
    flower_deactivate,
    flower_list,
    flower_restock,
    flower_show,
    flower_update,
)
from flowershop.infrastructure.cli.order_commands import (
    order_create,
    order_delete,
    order_list,
    order_show,
    order_status,
)
from flowershop.infrastructure.cli.report_commands import report_sales
from flowershop.infrastructure.cli.shop_commands import shop_orders, shop_place, shop_show
from flowershop.infrastructure.logging import configure_logging


@click.group()
def cli() -> None:
    """Flowershop: order engine and back office."""
    if not structlog.is_configured():
        cfg = bootstrap.settings()
        configure_logging(cfg.environment, cfg.log_level)


@cli.group()
def shop() -> None:
    """Place and view your own orders."""


@cli.group()
def order() -> None:
    """Manage orders."""


@cli.group()
def flower() -> None:
    """Manage the flower catalog."""


@cli.group()
def customer() -> None:
    """Manage customers."""


@cli.group()
def report() -> None:
    """Reports."""


@cli.group()
def db() -> None:
    """Database housekeeping."""


# Register subcommands
shop.add_command(shop_place)
shop.add_command(shop_orders)
shop.add_command(shop_show)
order.add_command(order_create)
order.add_command(order_show)
order.add_command(order_list)
order.add_command(order_status)
order.add_command(order_delete)
flower.add_command(flower_add)
flower.add_command(flower_list)
flower.add_command(flower_show)
flower.add_command(flower_update)
flower.add_command(flower_restock)
flower.add_command(flower_deactivate)
customer.add_command(customer_add)
customer.add_command(customer_list)
customer.add_command(customer_show)
customer.add_command(customer_update)
customer.add_command(customer_deactivate)
customer.add_command(customer_orders)
report.add_command(report_sales)
db.add_command(db_init)
db.add_command(db_seed)

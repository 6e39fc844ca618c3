"""Helpers shared by the CLI command modules."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

import click
import structlog

from flowershop.application.dto import CartLineSpec, OrderDTO
from flowershop.domain.exceptions import DomainException
from flowershop.domain.model.value_objects import MAX_INTEGER
from flowershop.infrastructure import bootstrap

logger = structlog.get_logger(__name__)

RECORD_ID = click.IntRange(1, MAX_INTEGER)
STOCK_UNITS = click.IntRange(-MAX_INTEGER, MAX_INTEGER)


@contextmanager
def domain_errors() -> Iterator[None]:
    """Turn handler failures into clean CLI errors.

    Domain errors carry a message meant for the user.  Anything else is
    logged in full and reported generically unless debugging is enabled.
    """
    try:
        yield
    except DomainException as exc:
        raise click.ClickException(str(exc)) from exc
    except click.ClickException:
        raise
    except Exception as exc:
        logger.exception("unexpected_error")
        if bootstrap.settings().debug:
            raise
        raise click.ClickException("Internal error") from exc


def parse_items(raw: str) -> list[CartLineSpec]:
    """Parse '7:2,3:1' (flowerId:quantity pairs) into CartLineSpec list."""
    specs: list[CartLineSpec] = []
    for pair in raw.split(","):
        pair = pair.strip()
        if ":" not in pair:
            raise click.BadParameter(
                f"Invalid item format '{pair}'. Expected 'FlowerId:Quantity'."
            )
        id_str, qty_str = pair.rsplit(":", 1)
        try:
            flower_id = int(id_str)
            qty = int(qty_str)
        except ValueError:
            raise click.BadParameter(
                f"Invalid item '{pair}'. Flower ID and quantity must be integers."
            )
        specs.append(CartLineSpec(flower_id=flower_id, quantity=qty))
    return specs


def display_order(dto: OrderDTO) -> None:
    """Shared formatting for displaying an order."""
    click.echo(f"Order #{dto.id}  (status={dto.status})")
    click.echo(f"Customer: #{dto.customer_id}")
    click.echo(f"Created:  {dto.created_at}")
    click.echo(f"Fulfilment: {dto.fulfilment_mode}  phone={dto.contact_phone}")
    if dto.delivery_address:
        click.echo(f"Deliver to: {dto.delivery_address}")
    if dto.delivery_date:
        click.echo(f"Delivery date: {dto.delivery_date}")
    if dto.gift_message:
        click.echo(f"Gift message: {dto.gift_message}")
    click.echo()
    click.echo(f"  {'Flower':<20} {'Qty':>5} {'Price':>10} {'Total':>10}")
    click.echo(f"  {'-'*47}")
    for item in dto.items:
        name = item.flower_name or f"#{item.flower_id}"
        click.echo(
            f"  {name:<20} {item.quantity:>5} {item.unit_price_at_sale:>10} {item.line_total:>10}"
        )
    click.echo(f"  {'-'*47}")
    click.echo(f"  {'Order Total':<27} {dto.total:>20}")


def display_order_list(orders: list[OrderDTO]) -> None:
    if not orders:
        click.echo("No orders found.")
        return
    click.echo(f"{'ID':<6} {'Customer':>8} {'Status':<10} {'Items':>5} {'Total':>10}  Created")
    click.echo("-" * 62)
    for o in orders:
        click.echo(
            f"{o.id:<6} {o.customer_id:>8} {o.status:<10} {len(o.items):>5} {o.total:>10}  {o.created_at}"
        )

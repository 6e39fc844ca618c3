"""CLI commands for the Flower aggregate (catalog)."""

from __future__ import annotations

import click

from flowershop.application.add_flower import AddFlowerHandler
from flowershop.application.browse_catalog import ListFlowersHandler, ShowFlowerHandler
from flowershop.application.deactivate_flower import DeactivateFlowerHandler
from flowershop.application.restock_flower import RestockFlowerHandler
from flowershop.application.update_flower import UpdateFlowerHandler
from flowershop.infrastructure import bootstrap
from flowershop.infrastructure.cli.common import RECORD_ID, STOCK_UNITS, domain_errors


@click.command("add")
@click.option("--name", required=True, help="Flower name.")
@click.option("--price", required=True, help="Price (e.g. 49.99).")
@click.option("--stock", default=0, show_default=True, type=STOCK_UNITS, help="Initial stock.")
@click.option("--category", default=None, help="Category (e.g. bouquet).")
@click.option("--description", default=None)
def flower_add(name: str, price: str, stock: int, category: str | None, description: str | None) -> None:
    """Add a new flower to the catalog."""
    handler = AddFlowerHandler(bootstrap.unit_of_work)
    with domain_errors():
        flower = handler.handle(
            name=name, price=price, stock=stock, category=category, description=description
        )
    click.echo(f"Flower #{flower.id} '{flower.name}' added at ${flower.price}")


@click.command("list")
@click.option("--q", "text", default=None, help="Name contains.")
@click.option("--category", default=None)
@click.option("--min-price", default=None)
@click.option("--max-price", default=None)
@click.option("--page", default=1, show_default=True, type=int)
@click.option("--page-size", default=20, show_default=True, type=int)
def flower_list(
    text: str | None,
    category: str | None,
    min_price: str | None,
    max_price: str | None,
    page: int,
    page_size: int,
) -> None:
    """List active flowers in the catalog."""
    handler = ListFlowersHandler(bootstrap.unit_of_work)
    with domain_errors():
        result = handler.handle(
            text=text,
            category=category,
            min_price=min_price,
            max_price=max_price,
            page=page,
            page_size=page_size,
        )

    if not result.items:
        click.echo("No flowers found.")
        return

    click.echo(f"{'ID':<6} {'Name':<20} {'Category':<12} {'Price':>10} {'Stock':>6}")
    click.echo("-" * 58)
    for f in result.items:
        click.echo(f"{f.id:<6} {f.name:<20} {f.category or '':<12} {f.price:>10} {f.stock:>6}")
    click.echo(f"Page {result.page} ({len(result.items)} of {result.total})")


@click.command("show")
@click.option("--id", "flower_id", required=True, type=RECORD_ID)
def flower_show(flower_id: int) -> None:
    """Show one flower."""
    handler = ShowFlowerHandler(bootstrap.unit_of_work)
    with domain_errors():
        f = handler.handle(flower_id)
    click.echo(f"Flower #{f.id} '{f.name}'  price={f.price}  stock={f.stock}")
    if f.category:
        click.echo(f"Category: {f.category}")
    if f.description:
        click.echo(f.description)


@click.command("update")
@click.option("--id", "flower_id", required=True, type=RECORD_ID)
@click.option("--name", default=None)
@click.option("--price", default=None, help="New price (e.g. 29.99).")
@click.option("--category", default=None)
@click.option("--description", default=None)
def flower_update(
    flower_id: int,
    name: str | None,
    price: str | None,
    category: str | None,
    description: str | None,
) -> None:
    """Update a flower's catalog attributes."""
    handler = UpdateFlowerHandler(bootstrap.unit_of_work)
    with domain_errors():
        f = handler.handle(
            flower_id, name=name, price=price, category=category, description=description
        )
    click.echo(f"Flower #{f.id} updated (price ${f.price})")


@click.command("restock")
@click.option("--id", "flower_id", required=True, type=RECORD_ID)
@click.option("--delta", required=True, type=STOCK_UNITS, help="Units to add (negative to remove).")
def flower_restock(flower_id: int, delta: int) -> None:
    """Adjust a flower's stock by a delta."""
    handler = RestockFlowerHandler(bootstrap.unit_of_work)
    with domain_errors():
        f = handler.handle(flower_id, delta)
    click.echo(f"Flower #{f.id} stock is now {f.stock}")


@click.command("deactivate")
@click.option("--id", "flower_id", required=True, type=RECORD_ID)
def flower_deactivate(flower_id: int) -> None:
    """Remove a flower from sale (kept for order history)."""
    handler = DeactivateFlowerHandler(bootstrap.unit_of_work)
    with domain_errors():
        handler.handle(flower_id)
    click.echo(f"Flower #{flower_id} deactivated.")

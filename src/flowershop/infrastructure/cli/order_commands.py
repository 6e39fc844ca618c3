"""CLI commands for the Order aggregate (staff)."""

from __future__ import annotations

import click

from flowershop.application.delete_order import DeleteOrderHandler
from flowershop.application.dto import PlaceOrderRequest
from flowershop.application.list_orders import ListOrdersHandler
from flowershop.application.place_order import PlaceOrderHandler
from flowershop.application.show_order import ShowOrderHandler
from flowershop.application.update_order_status import UpdateOrderStatusHandler
from flowershop.infrastructure import bootstrap
from flowershop.infrastructure.cli.common import (
    RECORD_ID,
    display_order,
    display_order_list,
    domain_errors,
    parse_items,
)


@click.command("create")
@click.option("--customer-id", required=True, type=RECORD_ID, help="Existing customer ID.")
@click.option("--items", required=True, help="Items as 'FlowerId:Qty,FlowerId:Qty'.")
@click.option("--phone", "contact_phone", required=True, help="Contact phone.")
@click.option("--fulfilment", type=click.Choice(["pickup", "delivery"]), default="pickup", show_default=True)
@click.option("--address", "delivery_address", default=None, help="Delivery address.")
@click.option("--date", "delivery_date", default=None, help="Delivery date (YYYY-MM-DD).")
@click.option("--gift", "gift_message", default=None, help="Gift message.")
@click.option("--notes", default=None, help="Free-text notes.")
def order_create(
    customer_id: int,
    items: str,
    contact_phone: str,
    fulfilment: str,
    delivery_address: str | None,
    delivery_date: str | None,
    gift_message: str | None,
    notes: str | None,
) -> None:
    """Enter an order on behalf of a customer."""
    request = PlaceOrderRequest(
        items=parse_items(items),
        contact_phone=contact_phone,
        fulfilment_mode=fulfilment,
        delivery_address=delivery_address,
        delivery_date=delivery_date,
        gift_message=gift_message,
        notes=notes,
    )
    handler = PlaceOrderHandler(
        bootstrap.unit_of_work,
        max_attempts=bootstrap.settings().place_order_retries,
    )

    with domain_errors():
        dto = handler.handle_for_customer(customer_id, request)

    click.echo(f"Order #{dto.id} created")
    display_order(dto)


@click.command("show")
@click.option("--id", "order_id", required=True, type=RECORD_ID, help="Order ID to display.")
def order_show(order_id: int) -> None:
    """Show details of an existing order."""
    handler = ShowOrderHandler(bootstrap.unit_of_work)
    with domain_errors():
        dto = handler.handle(order_id)
    display_order(dto)


@click.command("list")
@click.option("--page", default=1, show_default=True, type=int)
@click.option("--page-size", default=20, show_default=True, type=int)
def order_list(page: int, page_size: int) -> None:
    """List all orders, newest first."""
    handler = ListOrdersHandler(bootstrap.unit_of_work)
    with domain_errors():
        result = handler.handle(page=page, page_size=page_size)
    display_order_list(result.items)
    click.echo(f"Page {result.page} ({len(result.items)} of {result.total})")


@click.command("status")
@click.option("--id", "order_id", required=True, type=RECORD_ID, help="Order ID.")
@click.option("--status", required=True, help="pending, paid, shipped, delivered or cancelled.")
def order_status(order_id: int, status: str) -> None:
    """Change an order's status."""
    handler = UpdateOrderStatusHandler(bootstrap.unit_of_work)
    with domain_errors():
        dto = handler.handle(order_id, status)
    click.echo(f"Order #{dto.id} is now {dto.status}.")


@click.command("delete")
@click.option("--id", "order_id", required=True, type=RECORD_ID, help="Order ID to delete.")
@click.confirmation_option(prompt="Permanently delete this order?")
def order_delete(order_id: int) -> None:
    """Permanently delete an order and its items."""
    handler = DeleteOrderHandler(bootstrap.unit_of_work)
    with domain_errors():
        handler.handle(order_id)
    click.echo(f"Order #{order_id} deleted.")

"""CLI commands for the customer-facing shop (self-service orders).

The identity layer is outside this program: the caller states who the
principal is and this CLI trusts it.
"""

from __future__ import annotations

import click

from flowershop.application.dto import PlaceOrderRequest, Principal
from flowershop.application.list_orders import ListOrdersHandler
from flowershop.application.place_order import PlaceOrderHandler
from flowershop.application.show_order import ShowOrderHandler
from flowershop.infrastructure import bootstrap
from flowershop.infrastructure.cli.common import (
    RECORD_ID,
    display_order,
    display_order_list,
    domain_errors,
    parse_items,
)


def _principal(email: str, name: str | None, user_id: int | None, role: str) -> Principal:
    return Principal(id=user_id, email=email, name=name, role=role)


@click.command("place")
@click.option("--email", required=True, help="Principal email.")
@click.option("--name", default=None, help="Principal display name.")
@click.option("--user-id", type=int, default=None, help="Principal user ID.")
@click.option("--role", default="customer", show_default=True, help="Principal role.")
@click.option("--items", required=True, help="Items as 'FlowerId:Qty,FlowerId:Qty'.")
@click.option("--phone", "contact_phone", required=True, help="Contact phone.")
@click.option("--fulfilment", type=click.Choice(["pickup", "delivery"]), default="pickup", show_default=True)
@click.option("--address", "delivery_address", default=None, help="Delivery address.")
@click.option("--date", "delivery_date", default=None, help="Delivery date (YYYY-MM-DD).")
@click.option("--gift", "gift_message", default=None, help="Gift message.")
@click.option("--notes", default=None, help="Free-text notes.")
def shop_place(
    email: str,
    name: str | None,
    user_id: int | None,
    role: str,
    items: str,
    contact_phone: str,
    fulfilment: str,
    delivery_address: str | None,
    delivery_date: str | None,
    gift_message: str | None,
    notes: str | None,
) -> None:
    """Place an order as a signed-in customer."""
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
        dto = handler.handle_for_principal(_principal(email, name, user_id, role), request)

    click.echo(f"Order #{dto.id} placed")
    display_order(dto)


@click.command("orders")
@click.option("--email", required=True, help="Principal email.")
def shop_orders(email: str) -> None:
    """List my orders."""
    handler = ListOrdersHandler(bootstrap.unit_of_work)
    with domain_errors():
        orders = handler.handle_for_principal(_principal(email, None, None, "customer"))
    display_order_list(orders)


@click.command("show")
@click.option("--email", required=True, help="Principal email.")
@click.option("--id", "order_id", required=True, type=RECORD_ID, help="Order ID to display.")
def shop_show(email: str, order_id: int) -> None:
    """Show one of my orders."""
    handler = ShowOrderHandler(bootstrap.unit_of_work)
    with domain_errors():
        dto = handler.handle_for_principal(_principal(email, None, None, "customer"), order_id)
    display_order(dto)

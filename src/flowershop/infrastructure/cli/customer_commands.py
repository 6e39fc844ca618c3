"""CLI commands for customer profiles (staff)."""

from __future__ import annotations

import click

from flowershop.application.add_customer import AddCustomerHandler
from flowershop.application.browse_customers import ListCustomersHandler, ShowCustomerHandler
from flowershop.application.deactivate_customer import DeactivateCustomerHandler
from flowershop.application.list_orders import ListOrdersHandler
from flowershop.application.update_customer import UpdateCustomerHandler
from flowershop.infrastructure import bootstrap
from flowershop.infrastructure.cli.common import RECORD_ID, display_order_list, domain_errors


@click.command("add")
@click.option("--name", required=True)
@click.option("--email", required=True)
@click.option("--phone", default=None)
@click.option("--address", default=None)
def customer_add(name: str, email: str, phone: str | None, address: str | None) -> None:
    """Register a customer (in-store or phone orders)."""
    handler = AddCustomerHandler(bootstrap.unit_of_work)
    with domain_errors():
        c = handler.handle(name=name, email=email, phone=phone, address=address)
    click.echo(f"Customer #{c.id} {c.name} <{c.email}>")


@click.command("list")
@click.option("--page", default=1, show_default=True, type=int)
@click.option("--page-size", default=20, show_default=True, type=int)
def customer_list(page: int, page_size: int) -> None:
    """List active customers."""
    handler = ListCustomersHandler(bootstrap.unit_of_work)
    with domain_errors():
        result = handler.handle(page=page, page_size=page_size)

    if not result.items:
        click.echo("No customers found.")
        return

    click.echo(f"{'ID':<6} {'Name':<20} {'Email':<28} {'Phone':<12}")
    click.echo("-" * 68)
    for c in result.items:
        click.echo(f"{c.id:<6} {c.name:<20} {c.email:<28} {c.phone or '':<12}")
    click.echo(f"Page {result.page} ({len(result.items)} of {result.total})")


@click.command("show")
@click.option("--id", "customer_id", required=True, type=RECORD_ID)
def customer_show(customer_id: int) -> None:
    """Show one customer."""
    handler = ShowCustomerHandler(bootstrap.unit_of_work)
    with domain_errors():
        c = handler.handle(customer_id)
    click.echo(f"Customer #{c.id} {c.name} <{c.email}>")
    if c.phone:
        click.echo(f"Phone:   {c.phone}")
    if c.address:
        click.echo(f"Address: {c.address}")


@click.command("update")
@click.option("--id", "customer_id", required=True, type=RECORD_ID)
@click.option("--name", default=None)
@click.option("--email", default=None)
@click.option("--phone", default=None)
@click.option("--address", default=None)
def customer_update(
    customer_id: int,
    name: str | None,
    email: str | None,
    phone: str | None,
    address: str | None,
) -> None:
    """Update a customer's details."""
    handler = UpdateCustomerHandler(bootstrap.unit_of_work)
    with domain_errors():
        c = handler.handle(customer_id, name=name, email=email, phone=phone, address=address)
    click.echo(f"Customer #{c.id} updated.")


@click.command("deactivate")
@click.option("--id", "customer_id", required=True, type=RECORD_ID)
def customer_deactivate(customer_id: int) -> None:
    """Soft-delete a customer; their orders are kept."""
    handler = DeactivateCustomerHandler(bootstrap.unit_of_work)
    with domain_errors():
        handler.handle(customer_id)
    click.echo(f"Customer #{customer_id} deactivated.")


@click.command("orders")
@click.option("--id", "customer_id", required=True, type=RECORD_ID)
def customer_orders(customer_id: int) -> None:
    """Show a customer's order history."""
    handler = ListOrdersHandler(bootstrap.unit_of_work)
    with domain_errors():
        orders = handler.handle_for_customer(customer_id)
    display_order_list(orders)

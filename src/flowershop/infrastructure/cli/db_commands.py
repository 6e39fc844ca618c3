"""CLI commands for database housekeeping."""

from __future__ import annotations

import click

from flowershop.application.seed_sample_data import SeedSampleDataHandler
from flowershop.infrastructure import bootstrap
from flowershop.infrastructure.cli.common import domain_errors


@click.command("init")
def db_init() -> None:
    """Create any missing tables."""
    with domain_errors():
        bootstrap.engine()
    click.echo("Database ready.")


@click.command("seed")
def db_seed() -> None:
    """Insert sample customers and flowers (safe to run twice)."""
    handler = SeedSampleDataHandler(bootstrap.unit_of_work)
    with domain_errors():
        customers, flowers = handler.handle()
    click.echo(f"Seeded {customers} customer(s) and {flowers} flower(s).")

"""Application service: Seed Sample Data use case.

Idempotent: customers are matched by email and flowers by name, and
anything already present is left alone.
"""

from __future__ import annotations

from collections.abc import Callable

import structlog

from flowershop.domain.model.customer import CustomerProfile
from flowershop.domain.model.flower import Flower
from flowershop.domain.model.value_objects import Money
from flowershop.domain.repository.unit_of_work import UnitOfWork

logger = structlog.get_logger(__name__)

SAMPLE_CUSTOMERS = [
    {"name": "Jane Doe", "email": "jane@example.com", "phone": "0400000000", "address": "123 Collins St"},
    {"name": "John Smith", "email": "john@example.com", "phone": "0400000001", "address": "456 Bourke St"},
]

SAMPLE_FLOWERS = [
    {"name": "Red Roses", "description": "A dozen red roses bouquet", "price": "49.99", "stock": 50, "category": "bouquet"},
    {"name": "Tulip Bunch", "description": "Mixed tulip arrangement", "price": "39.95", "stock": 30, "category": "arrangement"},
    {"name": "Orchid Pot", "description": "Elegant potted orchids", "price": "59.90", "stock": 15, "category": "plant"},
]


class SeedSampleDataHandler:

    def __init__(self, uow_factory: Callable[[], UnitOfWork]) -> None:
        self._uow_factory = uow_factory

    def handle(self) -> tuple[int, int]:
        """Insert missing sample rows; return ``(customers_added, flowers_added)``."""
        customers_added = flowers_added = 0
        with self._uow_factory() as uow:
            for raw in SAMPLE_CUSTOMERS:
                if uow.customers.find_by_email(raw["email"], include_inactive=True) is None:
                    uow.customers.add(CustomerProfile.create(**raw))
                    customers_added += 1

            for raw in SAMPLE_FLOWERS:
                if uow.flowers.get_by_name(raw["name"]) is None:
                    uow.flowers.add(
                        Flower.create(
                            name=raw["name"],
                            price=Money.of(raw["price"]),
                            stock_quantity=raw["stock"],
                            category=raw["category"],
                            description=raw["description"],
                        )
                    )
                    flowers_added += 1
            uow.commit()

        logger.info("sample_data_seeded", customers=customers_added, flowers=flowers_added)
        return customers_added, flowers_added

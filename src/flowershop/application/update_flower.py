"""Application service: Update Flower use case."""

from __future__ import annotations

from collections.abc import Callable

import structlog

from flowershop.application.dto import FlowerDTO
from flowershop.domain.exceptions import EntityNotFoundError, ValidationError
from flowershop.domain.model.value_objects import Money
from flowershop.domain.repository.unit_of_work import UnitOfWork

logger = structlog.get_logger(__name__)


class UpdateFlowerHandler:

    def __init__(self, uow_factory: Callable[[], UnitOfWork]) -> None:
        self._uow_factory = uow_factory

    def handle(
        self,
        flower_id: int,
        name: str | None = None,
        price: str | None = None,
        category: str | None = None,
        description: str | None = None,
    ) -> FlowerDTO:
        """Change catalog attributes.  Stock moves only through restock.

        A price change does NOT affect any existing orders; their items
        captured a price snapshot at placement time.
        """
        with self._uow_factory() as uow:
            flower = uow.flowers.get_by_id(flower_id)
            if flower is None:
                logger.warning("flower_not_found", flower_id=flower_id)
                raise EntityNotFoundError(f"Flower {flower_id} not found")

            if name is not None:
                if not name.strip():
                    raise ValidationError("Flower name is required")
                flower.name = name.strip()
            if price is not None:
                flower.update_price(Money.of(price))
            if category is not None:
                flower.category = category or None
            if description is not None:
                flower.description = description or None

            uow.flowers.save(flower)
            uow.commit()

        logger.info("flower_updated", flower_id=flower_id)
        return FlowerDTO.from_flower(flower)

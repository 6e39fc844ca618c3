"""Application service: Add Flower use case."""

from __future__ import annotations

from collections.abc import Callable

import structlog

from flowershop.application.dto import FlowerDTO
from flowershop.domain.exceptions import ValidationError
from flowershop.domain.model.flower import Flower
from flowershop.domain.model.value_objects import Money
from flowershop.domain.repository.unit_of_work import UnitOfWork

logger = structlog.get_logger(__name__)


class AddFlowerHandler:

    def __init__(self, uow_factory: Callable[[], UnitOfWork]) -> None:
        self._uow_factory = uow_factory

    def handle(
        self,
        name: str,
        price: str,
        stock: int = 0,
        category: str | None = None,
        description: str | None = None,
    ) -> FlowerDTO:
        """Add a new flower to the catalog."""
        if not name or not price:
            raise ValidationError("name and price are required")

        flower = Flower.create(
            name=name,
            price=Money.of(price),
            stock_quantity=stock,
            category=category,
            description=description,
        )
        with self._uow_factory() as uow:
            if uow.flowers.get_by_name(flower.name) is not None:
                raise ValidationError(f"Flower '{flower.name}' already exists")
            uow.flowers.add(flower)
            uow.commit()

        logger.info("flower_created", flower_id=flower.id, name=flower.name)
        return FlowerDTO.from_flower(flower)

"""Application service: Restock Flower use case.

Runs outside the order path.  The delta may be negative (write-offs)
but the resulting stock can never drop below zero.
"""

from __future__ import annotations

from collections.abc import Callable

import structlog

from flowershop.application.dto import FlowerDTO
from flowershop.domain.exceptions import DomainException, ValidationError
from flowershop.domain.model.value_objects import MAX_INTEGER
from flowershop.domain.repository.unit_of_work import UnitOfWork

logger = structlog.get_logger(__name__)


class RestockFlowerHandler:

    def __init__(self, uow_factory: Callable[[], UnitOfWork]) -> None:
        self._uow_factory = uow_factory

    def handle(self, flower_id: int, delta: int) -> FlowerDTO:
        if isinstance(delta, bool) or not isinstance(delta, int):
            raise ValidationError("Stock delta must be an integer")
        if abs(delta) > MAX_INTEGER:
            raise ValidationError("Stock delta is too large")

        try:
            with self._uow_factory() as uow:
                flower = uow.flowers.adjust_stock(flower_id, delta)
                uow.commit()
        except DomainException as exc:
            logger.warning("restock_rejected", flower_id=flower_id, delta=delta, error=str(exc))
            raise

        logger.info("flower_restocked", flower_id=flower_id, stock=flower.stock_quantity)
        return FlowerDTO.from_flower(flower)

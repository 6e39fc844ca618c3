"""Application service: Deactivate Flower use case (soft delete)."""

from __future__ import annotations

from collections.abc import Callable

import structlog

from flowershop.domain.exceptions import EntityNotFoundError
from flowershop.domain.repository.unit_of_work import UnitOfWork

logger = structlog.get_logger(__name__)


class DeactivateFlowerHandler:

    def __init__(self, uow_factory: Callable[[], UnitOfWork]) -> None:
        self._uow_factory = uow_factory

    def handle(self, flower_id: int) -> None:
        with self._uow_factory() as uow:
            flower = uow.flowers.get_by_id(flower_id, include_inactive=True)
            if flower is None:
                logger.warning("flower_not_found", flower_id=flower_id)
                raise EntityNotFoundError(f"Flower {flower_id} not found")
            flower.deactivate()
            uow.flowers.save(flower)
            uow.commit()
        logger.warning("flower_deactivated", flower_id=flower_id, name=flower.name)

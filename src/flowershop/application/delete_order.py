"""Application service: Delete Order use case (staff/admin).

A hard delete: the order and its items disappear.  Stock is not
returned to the catalog.
"""

from __future__ import annotations

from collections.abc import Callable

import structlog

from flowershop.domain.exceptions import EntityNotFoundError
from flowershop.domain.repository.unit_of_work import UnitOfWork

logger = structlog.get_logger(__name__)


class DeleteOrderHandler:

    def __init__(self, uow_factory: Callable[[], UnitOfWork]) -> None:
        self._uow_factory = uow_factory

    def handle(self, order_id: int) -> None:
        with self._uow_factory() as uow:
            if not uow.orders.delete(order_id):
                logger.warning("order_not_found", order_id=order_id)
                raise EntityNotFoundError(f"Order #{order_id} not found")
            uow.commit()
        logger.warning("order_deleted", order_id=order_id)

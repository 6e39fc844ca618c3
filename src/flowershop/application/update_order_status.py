"""Application service: Update Order Status use case (staff)."""

from __future__ import annotations

from collections.abc import Callable

import structlog

from flowershop.application.dto import OrderDTO
from flowershop.domain.exceptions import EntityNotFoundError, ValidationError
from flowershop.domain.model.order import OrderStatus
from flowershop.domain.repository.unit_of_work import UnitOfWork

logger = structlog.get_logger(__name__)


class UpdateOrderStatusHandler:

    def __init__(self, uow_factory: Callable[[], UnitOfWork]) -> None:
        self._uow_factory = uow_factory

    def handle(self, order_id: int, status: str) -> OrderDTO:
        """Move an order to one of the five defined states."""
        try:
            new_status = OrderStatus.parse(status)
        except ValidationError:
            logger.warning("order_status_invalid", order_id=order_id, status=status)
            raise

        with self._uow_factory() as uow:
            order = uow.orders.update_status(order_id, new_status)
            if order is None:
                logger.warning("order_not_found", order_id=order_id)
                raise EntityNotFoundError(f"Order #{order_id} not found")
            uow.commit()

        logger.info("order_status_updated", order_id=order_id, status=new_status.value)
        return OrderDTO.from_order(order)

"""Application service: Show Order use case (query)."""

from __future__ import annotations

from collections.abc import Callable

import structlog

from flowershop.application.dto import OrderDTO, Principal
from flowershop.domain.exceptions import EntityNotFoundError
from flowershop.domain.repository.unit_of_work import UnitOfWork

logger = structlog.get_logger(__name__)


class ShowOrderHandler:

    def __init__(self, uow_factory: Callable[[], UnitOfWork]) -> None:
        self._uow_factory = uow_factory

    def handle(self, order_id: int) -> OrderDTO:
        """Staff lookup: any order by ID."""
        with self._uow_factory() as uow:
            order = uow.orders.get_by_id(order_id, with_items=True)
        if order is None:
            logger.warning("order_not_found", order_id=order_id)
            raise EntityNotFoundError(f"Order #{order_id} not found")
        return OrderDTO.from_order(order)

    def handle_for_principal(self, principal: Principal, order_id: int) -> OrderDTO:
        """Self-service lookup.

        Someone else's order is reported exactly like a missing one, so
        order IDs cannot be probed.
        """
        with self._uow_factory() as uow:
            profile = uow.customers.find_by_email(principal.email or "", include_inactive=True)
            order = uow.orders.get_by_id(order_id, with_items=True)
        if profile is None or order is None or order.customer_id != profile.id:
            logger.warning("own_order_not_found", order_id=order_id, user_id=principal.id)
            raise EntityNotFoundError(f"Order #{order_id} not found")
        return OrderDTO.from_order(order)

"""Application service: Deactivate Customer use case (soft delete).

Orders keep referencing the profile; nothing is cascaded.
"""

from __future__ import annotations

from collections.abc import Callable

import structlog

from flowershop.domain.exceptions import EntityNotFoundError
from flowershop.domain.repository.unit_of_work import UnitOfWork

logger = structlog.get_logger(__name__)


class DeactivateCustomerHandler:

    def __init__(self, uow_factory: Callable[[], UnitOfWork]) -> None:
        self._uow_factory = uow_factory

    def handle(self, customer_id: int) -> None:
        with self._uow_factory() as uow:
            profile = uow.customers.get_by_id(customer_id, include_inactive=True)
            if profile is None:
                logger.warning("customer_not_found", customer_id=customer_id)
                raise EntityNotFoundError(f"Customer {customer_id} not found")
            profile.deactivate()
            uow.customers.save(profile)
            uow.commit()
        logger.warning("customer_deactivated", customer_id=customer_id)

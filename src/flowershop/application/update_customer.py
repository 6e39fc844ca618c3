"""Application service: Update Customer use case."""

from __future__ import annotations

from collections.abc import Callable

import structlog

from flowershop.application.dto import CustomerDTO
from flowershop.domain.exceptions import EntityNotFoundError, ValidationError
from flowershop.domain.repository.unit_of_work import UnitOfWork

logger = structlog.get_logger(__name__)


class UpdateCustomerHandler:

    def __init__(self, uow_factory: Callable[[], UnitOfWork]) -> None:
        self._uow_factory = uow_factory

    def handle(
        self,
        customer_id: int,
        name: str | None = None,
        email: str | None = None,
        phone: str | None = None,
        address: str | None = None,
    ) -> CustomerDTO:
        with self._uow_factory() as uow:
            profile = uow.customers.get_by_id(customer_id)
            if profile is None:
                logger.warning("customer_not_found", customer_id=customer_id)
                raise EntityNotFoundError(f"Customer {customer_id} not found")

            if email is not None and email.strip() != profile.email:
                email = email.strip()
                if not email:
                    raise ValidationError("Customer email is required")
                if uow.customers.find_by_email(email, include_inactive=True) is not None:
                    raise ValidationError("Customer already exists")
                profile.email = email
            if name is not None:
                if not name.strip():
                    raise ValidationError("Customer name is required")
                profile.name = name.strip()
            if phone is not None:
                profile.phone = phone or None
            if address is not None:
                profile.address = address or None

            uow.customers.save(profile)
            uow.commit()

        logger.info("customer_updated", customer_id=customer_id)
        return CustomerDTO.from_profile(profile)

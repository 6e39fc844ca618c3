"""Application service: Add Customer use case (in-store and phone orders).

Email is the identity of a profile.  An active profile with the same
email is a duplicate; a soft-deleted one is reactivated with the new
details instead of being recreated.
"""

from __future__ import annotations

from collections.abc import Callable

import structlog

from flowershop.application.dto import CustomerDTO
from flowershop.domain.exceptions import ValidationError
from flowershop.domain.model.customer import CustomerProfile
from flowershop.domain.repository.unit_of_work import UnitOfWork

logger = structlog.get_logger(__name__)


class AddCustomerHandler:

    def __init__(self, uow_factory: Callable[[], UnitOfWork]) -> None:
        self._uow_factory = uow_factory

    def handle(
        self,
        name: str,
        email: str,
        phone: str | None = None,
        address: str | None = None,
    ) -> CustomerDTO:
        if not name or not name.strip() or not email or not email.strip():
            raise ValidationError("name and email are required")

        candidate = CustomerProfile.create(email=email, name=name, address=address, phone=phone)
        with self._uow_factory() as uow:
            profile, created = uow.customers.find_or_create_by_email(candidate.email, candidate)
            if not created:
                if profile.active:
                    logger.warning("customer_duplicate_email", customer_id=profile.id)
                    raise ValidationError("Customer already exists")
                profile.name = candidate.name
                profile.phone = phone or profile.phone
                profile.address = address or profile.address
                uow.customers.reactivate(profile)
            uow.commit()

        logger.info(
            "customer_created" if created else "customer_reactivated",
            customer_id=profile.id,
        )
        return CustomerDTO.from_profile(profile)

"""SQL-backed implementation of CustomerRepository."""

from __future__ import annotations

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from flowershop.domain.exceptions import EntityNotFoundError
from flowershop.domain.model.customer import CustomerProfile
from flowershop.domain.model.page import Page, PageRequest
from flowershop.domain.repository.customer_repository import CustomerRepository
from flowershop.infrastructure.persistence.tables import CustomerRecord


class SqlCustomerRepository(CustomerRepository):

    def __init__(self, session: Session) -> None:
        self._session = session

    # --- CustomerRepository interface -----------------------------------------

    def get_by_id(self, customer_id: int, include_inactive: bool = False) -> CustomerProfile | None:
        record = self._session.get(CustomerRecord, customer_id, populate_existing=True)
        if record is None or (not record.is_active and not include_inactive):
            return None
        return self._to_domain(record)

    def find_by_email(self, email: str, include_inactive: bool = False) -> CustomerProfile | None:
        stmt = select(CustomerRecord).where(CustomerRecord.email == email)
        if not include_inactive:
            stmt = stmt.where(CustomerRecord.is_active.is_(True))
        record = self._session.scalars(
            stmt.execution_options(populate_existing=True)
        ).one_or_none()
        return self._to_domain(record) if record is not None else None

    def list_page(self, page: PageRequest) -> Page[CustomerProfile]:
        stmt = select(CustomerRecord).where(CustomerRecord.is_active.is_(True))
        total = self._session.scalar(select(func.count()).select_from(stmt.subquery()))
        records = self._session.scalars(
            stmt.order_by(CustomerRecord.id.desc()).offset(page.offset).limit(page.limit)
        )
        return Page(
            items=[self._to_domain(r) for r in records],
            total=total or 0,
            offset=page.offset,
            limit=page.limit,
        )

    def add(self, profile: CustomerProfile) -> CustomerProfile:
        record = CustomerRecord(
            name=profile.name,
            email=profile.email,
            address=profile.address,
            phone=profile.phone,
            is_active=profile.active,
        )
        self._session.add(record)
        self._session.flush()
        profile.id = record.id
        return profile

    def save(self, profile: CustomerProfile) -> None:
        record = self._session.get(CustomerRecord, profile.id)
        if record is None:
            raise EntityNotFoundError(f"Customer {profile.id} not found")
        record.name = profile.name
        record.email = profile.email
        record.address = profile.address
        record.phone = profile.phone
        record.is_active = profile.active
        self._session.flush()

    def find_or_create_by_email(
        self, email: str, defaults: CustomerProfile
    ) -> tuple[CustomerProfile, bool]:
        existing = self.find_by_email(email, include_inactive=True)
        if existing is not None:
            return existing, False
        # A concurrent transaction may insert the same email first; the
        # savepoint keeps the outer transaction usable when that happens.
        try:
            with self._session.begin_nested():
                created = self.add(defaults)
        except IntegrityError:
            existing = self.find_by_email(email, include_inactive=True)
            if existing is None:
                raise
            return existing, False
        return created, True

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_domain(record: CustomerRecord) -> CustomerProfile:
        return CustomerProfile(
            id=record.id,
            email=record.email,
            name=record.name,
            address=record.address,
            phone=record.phone,
            active=record.is_active,
        )

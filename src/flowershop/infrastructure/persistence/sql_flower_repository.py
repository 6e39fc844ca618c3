"""SQL-backed implementation of FlowerRepository."""

from __future__ import annotations

from sqlalchemy import func, select, update
from sqlalchemy.orm import Session

from flowershop.domain.exceptions import (
    EntityNotFoundError,
    InsufficientStock,
    ItemUnavailable,
    NegativeStockRejected,
)
from flowershop.domain.model.flower import Flower
from flowershop.domain.model.page import Page
from flowershop.domain.model.value_objects import Money
from flowershop.domain.repository.flower_repository import FlowerQuery, FlowerRepository
from flowershop.infrastructure.persistence.tables import FlowerRecord


class SqlFlowerRepository(FlowerRepository):

    def __init__(self, session: Session) -> None:
        self._session = session

    # --- FlowerRepository interface -------------------------------------------

    def get_by_id(self, flower_id: int, include_inactive: bool = False) -> Flower | None:
        record = self._load(flower_id)
        if record is None or (not record.is_active and not include_inactive):
            return None
        return self._to_domain(record)

    def get_by_name(self, name: str) -> Flower | None:
        record = self._session.scalars(
            select(FlowerRecord)
            .where(
                func.lower(FlowerRecord.name) == name.strip().lower(),
                FlowerRecord.is_active.is_(True),
            )
            .order_by(FlowerRecord.id)
            .limit(1)
        ).first()
        return self._to_domain(record) if record is not None else None

    def search(self, query: FlowerQuery) -> Page[Flower]:
        stmt = select(FlowerRecord).where(FlowerRecord.is_active.is_(True))
        if query.text:
            stmt = stmt.where(FlowerRecord.name.icontains(query.text, autoescape=True))
        if query.category:
            stmt = stmt.where(FlowerRecord.category == query.category)
        if query.min_price is not None:
            stmt = stmt.where(FlowerRecord.price >= query.min_price)
        if query.max_price is not None:
            stmt = stmt.where(FlowerRecord.price <= query.max_price)

        total = self._session.scalar(select(func.count()).select_from(stmt.subquery()))
        records = self._session.scalars(
            stmt.order_by(FlowerRecord.id.desc())
            .offset(query.page.offset)
            .limit(query.page.limit)
        )
        return Page(
            items=[self._to_domain(r) for r in records],
            total=total or 0,
            offset=query.page.offset,
            limit=query.page.limit,
        )

    def add(self, flower: Flower) -> Flower:
        record = FlowerRecord(
            name=flower.name,
            description=flower.description,
            category=flower.category,
            price=flower.price.amount,
            stock=flower.stock_quantity,
            is_active=flower.active,
        )
        self._session.add(record)
        self._session.flush()
        flower.id = record.id
        return flower

    def save(self, flower: Flower) -> None:
        record = self._load(flower.id)
        if record is None:
            raise EntityNotFoundError(f"Flower {flower.id} not found")
        record.name = flower.name
        record.description = flower.description
        record.category = flower.category
        record.price = flower.price.amount
        record.is_active = flower.active
        self._session.flush()

    def reserve(self, flower_id: int, quantity: int) -> Flower:
        # Check and decrement in one statement; zero rows means the
        # guard failed and the row is re-read only to classify why.
        result = self._session.execute(
            update(FlowerRecord)
            .where(
                FlowerRecord.id == flower_id,
                FlowerRecord.is_active.is_(True),
                FlowerRecord.stock >= quantity,
            )
            .values(stock=FlowerRecord.stock - quantity)
            .execution_options(synchronize_session=False)
        )
        record = self._load(flower_id)
        flower = self._to_domain(record) if record is not None else None
        if flower is None or not flower.is_purchasable:
            raise ItemUnavailable(flower_id)
        if result.rowcount == 1:
            return flower
        raise InsufficientStock(flower_id, available=flower.stock_quantity, requested=quantity)

    def adjust_stock(self, flower_id: int, delta: int) -> Flower:
        result = self._session.execute(
            update(FlowerRecord)
            .where(
                FlowerRecord.id == flower_id,
                FlowerRecord.is_active.is_(True),
                FlowerRecord.stock + delta >= 0,
            )
            .values(stock=FlowerRecord.stock + delta)
            .execution_options(synchronize_session=False)
        )
        record = self._load(flower_id)
        flower = self._to_domain(record) if record is not None else None
        if flower is None or not flower.is_purchasable:
            raise EntityNotFoundError(f"Flower {flower_id} not found")
        if result.rowcount == 1:
            return flower
        raise NegativeStockRejected(flower_id, current=flower.stock_quantity, delta=delta)

    # --- Serialization --------------------------------------------------------

    def _load(self, flower_id: int | None) -> FlowerRecord | None:
        if flower_id is None:
            return None
        return self._session.get(FlowerRecord, flower_id, populate_existing=True)

    @staticmethod
    def _to_domain(record: FlowerRecord) -> Flower:
        return Flower(
            id=record.id,
            name=record.name,
            price=Money(record.price),
            stock_quantity=record.stock,
            category=record.category,
            description=record.description,
            active=record.is_active,
        )

"""SQL-backed implementation of OrderRepository."""

from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal

from sqlalchemy import Select, func, select, update
from sqlalchemy.orm import Session, selectinload

from flowershop.domain.model.order import (
    FulfilmentDetails,
    FulfilmentMode,
    Order,
    OrderItem,
    OrderStatus,
)
from flowershop.domain.model.page import Page, PageRequest
from flowershop.domain.model.value_objects import Money, Quantity
from flowershop.domain.repository.order_repository import (
    FlowerSales,
    OrderRepository,
    SalesTotals,
)
from flowershop.infrastructure.persistence.tables import (
    FlowerRecord,
    OrderItemRecord,
    OrderRecord,
)


def _money(value: object) -> Money:
    # Aggregates come back as int, float or Decimal depending on the backend.
    return Money(Decimal(str(value or 0)))


class SqlOrderRepository(OrderRepository):

    def __init__(self, session: Session) -> None:
        self._session = session

    # --- OrderRepository interface --------------------------------------------

    def create(self, shell: Order) -> Order:
        details = shell.details
        record = OrderRecord(
            customer_id=shell.customer_id,
            status=shell.status.value,
            total=shell.total.amount,
            fulfilment_mode=details.mode.value,
            delivery_address=details.delivery_address,
            delivery_date=details.delivery_date,
            contact_phone=details.contact_phone,
            gift_message=details.gift_message,
            notes=details.notes,
            created_at=shell.created_at,
        )
        self._session.add(record)
        self._session.flush()
        shell.id = record.id
        return shell

    def attach_item(self, order_id: int, item: OrderItem) -> None:
        position = self._session.scalar(
            select(func.count()).where(OrderItemRecord.order_id == order_id)
        )
        self._session.add(
            OrderItemRecord(
                order_id=order_id,
                flower_id=item.flower_id,
                position=position or 0,
                quantity=item.quantity.value,
                unit_price=item.unit_price_at_sale.amount,
            )
        )
        self._session.flush()

    def finalize_total(self, order_id: int, total: Money) -> None:
        self._session.execute(
            update(OrderRecord)
            .where(OrderRecord.id == order_id)
            .values(total=total.amount)
            .execution_options(synchronize_session=False)
        )

    def get_by_id(self, order_id: int, with_items: bool = True) -> Order | None:
        stmt = select(OrderRecord).where(OrderRecord.id == order_id)
        if with_items:
            stmt = self._with_items(stmt)
        record = self._session.scalars(
            stmt.execution_options(populate_existing=True)
        ).one_or_none()
        if record is None:
            return None
        return self._to_domain(record, with_items)

    def list_by_customer(self, customer_id: int) -> list[Order]:
        stmt = self._with_items(
            select(OrderRecord)
            .where(OrderRecord.customer_id == customer_id)
            .order_by(OrderRecord.id.desc())
        )
        return [self._to_domain(r) for r in self._session.scalars(stmt)]

    def list_page(self, page: PageRequest) -> Page[Order]:
        total = self._session.scalar(select(func.count(OrderRecord.id)))
        stmt = self._with_items(
            select(OrderRecord)
            .order_by(OrderRecord.id.desc())
            .offset(page.offset)
            .limit(page.limit)
        )
        return Page(
            items=[self._to_domain(r) for r in self._session.scalars(stmt)],
            total=total or 0,
            offset=page.offset,
            limit=page.limit,
        )

    def sales_totals(self, start: datetime | None, end: datetime | None) -> SalesTotals:
        stmt = self._sales_in_period(
            select(func.coalesce(func.sum(OrderRecord.total), 0), func.count(OrderRecord.id)),
            start,
            end,
        )
        revenue, orders = self._session.execute(stmt).one()
        return SalesTotals(revenue=_money(revenue), orders=orders)

    def best_sellers(
        self, start: datetime | None, end: datetime | None, limit: int
    ) -> list[FlowerSales]:
        quantity = func.sum(OrderItemRecord.quantity).label("quantity")
        revenue = func.sum(OrderItemRecord.quantity * OrderItemRecord.unit_price).label("revenue")
        stmt = self._sales_in_period(
            select(OrderItemRecord.flower_id, FlowerRecord.name, quantity, revenue)
            .select_from(OrderItemRecord)
            .join(OrderRecord, OrderRecord.id == OrderItemRecord.order_id)
            .outerjoin(FlowerRecord, FlowerRecord.id == OrderItemRecord.flower_id),
            start,
            end,
        )
        stmt = (
            stmt.group_by(OrderItemRecord.flower_id, FlowerRecord.name)
            .order_by(quantity.desc(), OrderItemRecord.flower_id)
            .limit(limit)
        )
        return [
            FlowerSales(
                flower_id=row.flower_id,
                name=row.name,
                quantity=row.quantity,
                revenue=_money(row.revenue),
            )
            for row in self._session.execute(stmt)
        ]

    def update_status(self, order_id: int, status: OrderStatus) -> Order | None:
        record = self._session.get(OrderRecord, order_id)
        if record is None:
            return None
        record.status = status.value
        self._session.flush()
        return self.get_by_id(order_id)

    def delete(self, order_id: int) -> bool:
        record = self._session.get(OrderRecord, order_id)
        if record is None:
            return False
        self._session.delete(record)
        self._session.flush()
        return True

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _sales_in_period(stmt: Select, start: datetime | None, end: datetime | None) -> Select:
        stmt = stmt.where(OrderRecord.status != OrderStatus.CANCELLED.value)
        if start is not None:
            stmt = stmt.where(OrderRecord.created_at >= start)
        if end is not None:
            stmt = stmt.where(OrderRecord.created_at <= end)
        return stmt

    @staticmethod
    def _with_items(stmt: Select) -> Select:
        return stmt.options(
            selectinload(OrderRecord.items).selectinload(OrderItemRecord.flower)
        )

    @staticmethod
    def _to_domain(record: OrderRecord, with_items: bool = True) -> Order:
        items = []
        if with_items:
            items = [
                OrderItem(
                    flower_id=i.flower_id,
                    quantity=Quantity(i.quantity),
                    unit_price_at_sale=Money(i.unit_price),
                    flower_name=i.flower.name if i.flower is not None else None,
                )
                for i in record.items
            ]
        created_at = record.created_at
        if created_at.tzinfo is None:
            created_at = created_at.replace(tzinfo=timezone.utc)
        return Order(
            id=record.id,
            customer_id=record.customer_id,
            details=FulfilmentDetails(
                contact_phone=record.contact_phone,
                mode=FulfilmentMode(record.fulfilment_mode),
                delivery_address=record.delivery_address,
                delivery_date=record.delivery_date,
                gift_message=record.gift_message,
                notes=record.notes,
            ),
            items=items,
            status=OrderStatus(record.status),
            total=Money(record.total),
            created_at=created_at,
        )

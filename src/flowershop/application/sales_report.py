"""Application service: Sales Report use case (admin query).

Revenue and order count over an optional, inclusive date range, plus
the five best-selling flowers by quantity.  Cancelled orders are not
sales and are left out.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from datetime import date, datetime, time, timezone

import structlog

from flowershop.domain.exceptions import ValidationError
from flowershop.domain.repository.unit_of_work import UnitOfWork

logger = structlog.get_logger(__name__)

TOP_FLOWERS = 5


@dataclass(frozen=True)
class TopFlowerDTO:
    flower_id: int
    name: str | None
    quantity: int
    revenue: str


@dataclass(frozen=True)
class SalesReportDTO:
    total_revenue: str
    orders: int
    top_flowers: list[TopFlowerDTO]


def _parse_day(raw: str | None, label: str) -> date | None:
    if not raw:
        return None
    try:
        return date.fromisoformat(raw)
    except ValueError as exc:
        raise ValidationError(f"Invalid {label} date {raw!r} (expected YYYY-MM-DD)") from exc


class SalesReportHandler:

    def __init__(self, uow_factory: Callable[[], UnitOfWork]) -> None:
        self._uow_factory = uow_factory

    def handle(self, date_from: str | None = None, date_to: str | None = None) -> SalesReportDTO:
        first_day = _parse_day(date_from, "from")
        last_day = _parse_day(date_to, "to")
        start = datetime.combine(first_day, time.min, timezone.utc) if first_day else None
        end = datetime.combine(last_day, time.max, timezone.utc) if last_day else None

        with self._uow_factory() as uow:
            totals = uow.orders.sales_totals(start, end)
            best = uow.orders.best_sellers(start, end, TOP_FLOWERS)

        report = SalesReportDTO(
            total_revenue=f"{totals.revenue.amount:.2f}",
            orders=totals.orders,
            top_flowers=[
                TopFlowerDTO(
                    flower_id=s.flower_id,
                    name=s.name,
                    quantity=s.quantity,
                    revenue=f"{s.revenue.amount:.2f}",
                )
                for s in best
            ],
        )
        logger.info(
            "sales_report_generated",
            date_from=date_from,
            date_to=date_to,
            total_revenue=report.total_revenue,
            orders=report.orders,
        )
        return report

"""Application service: catalog queries (public)."""

from __future__ import annotations

from collections.abc import Callable
from decimal import Decimal, InvalidOperation

from flowershop.application.dto import FlowerDTO, PageDTO
from flowershop.domain.exceptions import EntityNotFoundError, ValidationError
from flowershop.domain.model.page import DEFAULT_PAGE_SIZE, PageRequest
from flowershop.domain.repository.flower_repository import FlowerQuery
from flowershop.domain.repository.unit_of_work import UnitOfWork


def _parse_price(raw: str | None, label: str) -> Decimal | None:
    if raw is None or raw == "":
        return None
    try:
        value = Decimal(raw)
    except InvalidOperation as exc:
        raise ValidationError(f"Invalid {label}: {raw!r}") from exc
    if not value.is_finite():
        raise ValidationError(f"Invalid {label}: {raw!r}")
    return value


class ListFlowersHandler:

    def __init__(self, uow_factory: Callable[[], UnitOfWork]) -> None:
        self._uow_factory = uow_factory

    def handle(
        self,
        text: str | None = None,
        category: str | None = None,
        min_price: str | None = None,
        max_price: str | None = None,
        page: int = 1,
        page_size: int = DEFAULT_PAGE_SIZE,
    ) -> PageDTO:
        """Active flowers matching every given filter, newest first."""
        query = FlowerQuery(
            text=text or None,
            category=category or None,
            min_price=_parse_price(min_price, "minPrice"),
            max_price=_parse_price(max_price, "maxPrice"),
            page=PageRequest.for_page(page, page_size),
        )
        with self._uow_factory() as uow:
            result = uow.flowers.search(query)
        return PageDTO(
            items=[FlowerDTO.from_flower(f) for f in result.items],
            total=result.total,
            page=page,
            page_size=page_size,
        )


class ShowFlowerHandler:

    def __init__(self, uow_factory: Callable[[], UnitOfWork]) -> None:
        self._uow_factory = uow_factory

    def handle(self, flower_id: int) -> FlowerDTO:
        with self._uow_factory() as uow:
            flower = uow.flowers.find_active_by_id(flower_id)
        if flower is None:
            raise EntityNotFoundError(f"Flower {flower_id} not found")
        return FlowerDTO.from_flower(flower)

"""Application service: List Orders use case (query)."""

from __future__ import annotations

from collections.abc import Callable

from flowershop.application.dto import OrderDTO, PageDTO, Principal
from flowershop.domain.exceptions import EntityNotFoundError
from flowershop.domain.model.page import DEFAULT_PAGE_SIZE, PageRequest
from flowershop.domain.repository.unit_of_work import UnitOfWork


class ListOrdersHandler:

    def __init__(self, uow_factory: Callable[[], UnitOfWork]) -> None:
        self._uow_factory = uow_factory

    def handle(self, page: int = 1, page_size: int = DEFAULT_PAGE_SIZE) -> PageDTO:
        """All orders, newest first (staff)."""
        request = PageRequest.for_page(page, page_size)
        with self._uow_factory() as uow:
            result = uow.orders.list_page(request)
        return PageDTO(
            items=[OrderDTO.from_order(o) for o in result.items],
            total=result.total,
            page=page,
            page_size=page_size,
        )

    def handle_for_customer(self, customer_id: int) -> list[OrderDTO]:
        """A customer's order history (staff)."""
        with self._uow_factory() as uow:
            if uow.customers.get_by_id(customer_id, include_inactive=True) is None:
                raise EntityNotFoundError(f"Customer {customer_id} not found")
            orders = uow.orders.list_by_customer(customer_id)
        return [OrderDTO.from_order(o) for o in orders]

    def handle_for_principal(self, principal: Principal) -> list[OrderDTO]:
        """The caller's own orders; empty until their first order creates a profile."""
        with self._uow_factory() as uow:
            profile = uow.customers.find_by_email(principal.email or "", include_inactive=True)
            if profile is None:
                return []
            orders = uow.orders.list_by_customer(profile.id)
        return [OrderDTO.from_order(o) for o in orders]

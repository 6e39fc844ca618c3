"""Application service: customer queries (staff)."""

from __future__ import annotations

from collections.abc import Callable

from flowershop.application.dto import CustomerDTO, PageDTO
from flowershop.domain.exceptions import EntityNotFoundError
from flowershop.domain.model.page import DEFAULT_PAGE_SIZE, PageRequest
from flowershop.domain.repository.unit_of_work import UnitOfWork


class ListCustomersHandler:

    def __init__(self, uow_factory: Callable[[], UnitOfWork]) -> None:
        self._uow_factory = uow_factory

    def handle(self, page: int = 1, page_size: int = DEFAULT_PAGE_SIZE) -> PageDTO:
        with self._uow_factory() as uow:
            result = uow.customers.list_page(PageRequest.for_page(page, page_size))
        return PageDTO(
            items=[CustomerDTO.from_profile(c) for c in result.items],
            total=result.total,
            page=page,
            page_size=page_size,
        )


class ShowCustomerHandler:

    def __init__(self, uow_factory: Callable[[], UnitOfWork]) -> None:
        self._uow_factory = uow_factory

    def handle(self, customer_id: int) -> CustomerDTO:
        with self._uow_factory() as uow:
            profile = uow.customers.get_by_id(customer_id)
        if profile is None:
            raise EntityNotFoundError(f"Customer {customer_id} not found")
        return CustomerDTO.from_profile(profile)

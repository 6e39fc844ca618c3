"""Abstract repository for Order aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime

from flowershop.domain.model.order import Order, OrderItem, OrderStatus
from flowershop.domain.model.page import Page, PageRequest
from flowershop.domain.model.value_objects import Money


@dataclass(frozen=True)
class SalesTotals:
    revenue: Money
    orders: int


@dataclass(frozen=True)
class FlowerSales:
    """Units sold and revenue earned by one flower over a period."""

    flower_id: int
    name: str | None
    quantity: int
    revenue: Money


class OrderRepository(ABC):

    @abstractmethod
    def create(self, shell: Order) -> Order:
        """Persist a pending order shell (no items, zero total) and assign its ID."""

    @abstractmethod
    def attach_item(self, order_id: int, item: OrderItem) -> None:
        """Persist one item row.  ``(order_id, flower_id)`` is unique."""

    @abstractmethod
    def finalize_total(self, order_id: int, total: Money) -> None:
        """Store the accumulated total on the order row."""

    @abstractmethod
    def get_by_id(self, order_id: int, with_items: bool = True) -> Order | None:
        """Return an order (optionally hydrated with items and flower names)."""

    @abstractmethod
    def list_by_customer(self, customer_id: int) -> list[Order]:
        """Return every order owned by a customer, newest first, with items."""

    @abstractmethod
    def list_page(self, page: PageRequest) -> Page[Order]:
        """Return one page of all orders, newest first, with items."""

    @abstractmethod
    def update_status(self, order_id: int, status: OrderStatus) -> Order | None:
        """Set the status; return the updated order, or None if it does not exist."""

    @abstractmethod
    def delete(self, order_id: int) -> bool:
        """Hard-delete an order and its items.  Return False if it did not exist."""

    # Sales figures cover orders created within ``[start, end]`` (either
    # bound optional) and leave cancelled orders out.

    @abstractmethod
    def sales_totals(self, start: datetime | None, end: datetime | None) -> SalesTotals:
        """Return the summed order totals and the number of orders."""

    @abstractmethod
    def best_sellers(
        self, start: datetime | None, end: datetime | None, limit: int
    ) -> list[FlowerSales]:
        """Return up to ``limit`` flowers by units sold, most first, ties by flower ID."""

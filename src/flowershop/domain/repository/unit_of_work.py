"""Abstract transactional context.

A UnitOfWork is one database transaction exposed through the three
repositories.  It is used as a context manager and is committed or
rolled back exactly once: leaving the ``with`` block without calling
``commit()`` (early return or exception) rolls everything back.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from flowershop.domain.repository.customer_repository import CustomerRepository
from flowershop.domain.repository.flower_repository import FlowerRepository
from flowershop.domain.repository.order_repository import OrderRepository


class UnitOfWork(ABC):

    flowers: FlowerRepository
    customers: CustomerRepository
    orders: OrderRepository

    def __enter__(self) -> UnitOfWork:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.rollback()

    @abstractmethod
    def commit(self) -> None:
        """Make every change in this unit durable."""

    @abstractmethod
    def rollback(self) -> None:
        """Discard every uncommitted change.  A no-op after commit."""

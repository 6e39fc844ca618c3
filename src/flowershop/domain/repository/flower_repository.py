"""Abstract repository for Flower aggregate (the Catalog Store).

Defined in the domain layer so the domain never depends on
infrastructure.  Concrete implementations (SQL, in-memory) live in the
infrastructure layer and the test suite.

All read paths return active flowers only unless ``include_inactive`` is
passed explicitly.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from decimal import Decimal

from flowershop.domain.model.flower import Flower
from flowershop.domain.model.page import Page, PageRequest


@dataclass(frozen=True)
class FlowerQuery:
    """Catalog listing filters.  Price bounds are inclusive."""

    text: str | None = None
    category: str | None = None
    min_price: Decimal | None = None
    max_price: Decimal | None = None
    page: PageRequest = PageRequest()


class FlowerRepository(ABC):

    @abstractmethod
    def get_by_id(self, flower_id: int, include_inactive: bool = False) -> Flower | None:
        """Return a flower by its ID, or None if not found."""

    @abstractmethod
    def get_by_name(self, name: str) -> Flower | None:
        """Return an active flower by its exact name (case-insensitive), or None."""

    def find_active_by_id(self, flower_id: int) -> Flower | None:
        return self.get_by_id(flower_id)

    @abstractmethod
    def search(self, query: FlowerQuery) -> Page[Flower]:
        """Return one page of active flowers matching the query, newest first."""

    @abstractmethod
    def add(self, flower: Flower) -> Flower:
        """Persist a new flower and assign its ID."""

    @abstractmethod
    def save(self, flower: Flower) -> None:
        """Persist attribute changes to an existing flower (not its stock)."""

    @abstractmethod
    def reserve(self, flower_id: int, quantity: int) -> Flower:
        """Atomically check and decrement stock for one order line.

        Returns the flower after the decrement so the caller can snapshot
        its current price.  Raises ItemUnavailable when the flower is
        missing or inactive and InsufficientStock when fewer than
        ``quantity`` units remain.  Two concurrent reservations can never
        both consume the same unit.
        """

    @abstractmethod
    def adjust_stock(self, flower_id: int, delta: int) -> Flower:
        """Add ``delta`` (may be negative) to an active flower's stock.

        Raises EntityNotFoundError for a missing or inactive flower and
        NegativeStockRejected when the result would drop below zero.
        """

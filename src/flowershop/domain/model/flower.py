"""Flower aggregate: one line of the catalog.

Flowers live independently of orders.  Prices change and stock moves,
but a flower is never physically deleted: it is deactivated so that
historical order lines keep pointing at a real row.
"""

from __future__ import annotations

from dataclasses import dataclass

from flowershop.domain.exceptions import NegativeStockRejected, ValidationError
from flowershop.domain.model.value_objects import MAX_INTEGER, Money


@dataclass
class Flower:
    """A flower in the catalog.

    Invariants:
    - ``stock_quantity`` is never negative
    - an inactive flower is never purchasable
    """

    id: int | None
    name: str
    price: Money
    stock_quantity: int = 0
    category: str | None = None
    description: str | None = None
    active: bool = True

    def __post_init__(self) -> None:
        if isinstance(self.stock_quantity, bool) or not isinstance(self.stock_quantity, int):
            raise ValidationError("Stock quantity must be an integer")
        if self.stock_quantity < 0:
            raise ValidationError("Stock quantity cannot be negative")
        if self.stock_quantity > MAX_INTEGER:
            raise ValidationError("Stock quantity is too large")

    @staticmethod
    def create(
        name: str,
        price: Money,
        stock_quantity: int = 0,
        category: str | None = None,
        description: str | None = None,
    ) -> Flower:
        """Create a new catalog line, enforcing all invariants."""
        if not name or not name.strip():
            raise ValidationError("Flower name is required")
        if price.amount <= 0:
            raise ValidationError("Flower price must be greater than zero")
        return Flower(
            id=None,
            name=name.strip(),
            price=price,
            stock_quantity=stock_quantity,
            category=category,
            description=description,
        )

    @property
    def is_purchasable(self) -> bool:
        return self.active

    def update_price(self, new_price: Money) -> None:
        """Change the catalog price.

        This does NOT affect any existing orders because order items
        capture a price snapshot at placement time.
        """
        if new_price.amount <= 0:
            raise ValidationError("Flower price must be greater than zero")
        self.price = new_price

    def adjust_stock(self, delta: int) -> None:
        """Apply a restock (positive) or write-off (negative) delta."""
        if isinstance(delta, bool) or not isinstance(delta, int):
            raise ValidationError("Stock delta must be an integer")
        if self.stock_quantity + delta < 0:
            raise NegativeStockRejected(self.id, self.stock_quantity, delta)
        if self.stock_quantity + delta > MAX_INTEGER:
            raise ValidationError("Stock quantity is too large")
        self.stock_quantity += delta

    def deactivate(self) -> None:
        self.active = False

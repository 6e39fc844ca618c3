"""Cart: the caller's unvalidated list of flower lines for one order.

A cart may name the same flower more than once.  Before any stock is
touched the lines are merged per flower so that each flower is reserved
exactly once, for the combined quantity.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from flowershop.domain.exceptions import ValidationError
from flowershop.domain.model.value_objects import MAX_INTEGER, Quantity

MAX_CART_LINES = 50


def _is_valid_number(value: object) -> bool:
    return (
        not isinstance(value, bool)
        and isinstance(value, int)
        and 1 <= value <= MAX_INTEGER
    )


@dataclass(frozen=True)
class Cart:
    """Merged, validated cart: flower id -> total quantity, in first-seen order."""

    lines: dict[int, Quantity]

    @staticmethod
    def from_lines(raw_lines: Iterable[tuple[object, object]]) -> Cart:
        """Validate and merge ``(flower_id, quantity)`` pairs."""
        merged: dict[int, Quantity] = {}
        count = 0
        for flower_id, quantity in raw_lines:
            count += 1
            if not _is_valid_number(flower_id) or not _is_valid_number(quantity):
                raise ValidationError("Each item needs flowerId and quantity >= 1")
            qty = Quantity(quantity)
            if flower_id in merged:
                qty = merged[flower_id] + qty
                if qty.value > MAX_INTEGER:
                    raise ValidationError(f"Quantity for flower {flower_id} is too large")
            merged[flower_id] = qty

        if count == 0:
            raise ValidationError("items are required")
        if len(merged) > MAX_CART_LINES:
            raise ValidationError(f"Maximum {MAX_CART_LINES} different flowers per order")
        return Cart(lines=merged)

    def __iter__(self) -> Iterator[tuple[int, Quantity]]:
        return iter(self.lines.items())

    def __len__(self) -> int:
        return len(self.lines)

    @property
    def unit_count(self) -> int:
        return sum(q.value for q in self.lines.values())

"""Paginated query results."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar

from flowershop.domain.exceptions import ValidationError

T = TypeVar("T")

DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100


@dataclass(frozen=True)
class PageRequest:
    """Offset/limit window over an ordered listing."""

    offset: int = 0
    limit: int = DEFAULT_PAGE_SIZE

    def __post_init__(self) -> None:
        if self.offset < 0:
            raise ValidationError("Offset cannot be negative")
        if not 1 <= self.limit <= MAX_PAGE_SIZE:
            raise ValidationError(f"Page size must be between 1 and {MAX_PAGE_SIZE}")

    @staticmethod
    def for_page(page: int = 1, page_size: int = DEFAULT_PAGE_SIZE) -> PageRequest:
        """Translate a 1-based page number into an offset."""
        if page < 1:
            raise ValidationError("Page must be 1 or greater")
        return PageRequest(offset=(page - 1) * page_size, limit=page_size)


@dataclass(frozen=True)
class Page(Generic[T]):
    items: list[T]
    total: int
    offset: int
    limit: int

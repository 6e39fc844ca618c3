"""Order aggregate: the core of the domain.

The Order is an aggregate root that owns its items.  An order starts as
a ``pending`` shell with a zero total; items are attached one at a time
during placement and the total is accumulated from their price
snapshots.  After placement only the status moves, and only by staff.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from enum import Enum

from flowershop.domain.exceptions import ValidationError
from flowershop.domain.model.value_objects import Money, Quantity


class OrderStatus(Enum):
    PENDING = "pending"
    PAID = "paid"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"

    @classmethod
    def parse(cls, raw: str | None) -> OrderStatus:
        for status in cls:
            if status.value == raw:
                return status
        allowed = ", ".join(s.value for s in cls)
        raise ValidationError(f"Invalid status {raw!r} (expected one of: {allowed})")


class FulfilmentMode(Enum):
    PICKUP = "pickup"
    DELIVERY = "delivery"

    @classmethod
    def parse(cls, raw: str | None) -> FulfilmentMode:
        if raw is None or raw == "":
            return cls.PICKUP
        for mode in cls:
            if mode.value == raw:
                return mode
        raise ValidationError(
            f"Invalid fulfilment mode {raw!r} (expected pickup or delivery)"
        )


@dataclass(frozen=True)
class FulfilmentDetails:
    """How the customer gets the flowers and how to reach them."""

    contact_phone: str
    mode: FulfilmentMode = FulfilmentMode.PICKUP
    delivery_address: str | None = None
    delivery_date: date | None = None
    gift_message: str | None = None
    notes: str | None = None

    @staticmethod
    def create(
        contact_phone: str | None,
        mode: str | None = None,
        delivery_address: str | None = None,
        delivery_date: str | None = None,
        gift_message: str | None = None,
        notes: str | None = None,
    ) -> FulfilmentDetails:
        if not contact_phone or not contact_phone.strip():
            raise ValidationError("contactPhone is required")

        parsed_date = None
        if delivery_date:
            try:
                parsed_date = date.fromisoformat(delivery_date)
            except ValueError as exc:
                raise ValidationError(
                    f"Invalid delivery date {delivery_date!r} (expected YYYY-MM-DD)"
                ) from exc

        return FulfilmentDetails(
            contact_phone=contact_phone.strip(),
            mode=FulfilmentMode.parse(mode),
            delivery_address=delivery_address or None,
            delivery_date=parsed_date,
            gift_message=gift_message or None,
            notes=notes or None,
        )


@dataclass(frozen=True)
class OrderItem:
    """One flower line, with the price locked at placement time."""

    flower_id: int
    quantity: Quantity
    unit_price_at_sale: Money
    flower_name: str | None = None

    @property
    def line_total(self) -> Money:
        return self.unit_price_at_sale * self.quantity.value


@dataclass
class Order:
    """Aggregate root for customer orders.

    Use ``Order.open()`` for new orders.  The ``__init__`` is intentionally
    simple so the repository can reconstitute persisted orders without
    re-validating.
    """

    id: int | None
    customer_id: int
    details: FulfilmentDetails
    items: list[OrderItem] = field(default_factory=list)
    status: OrderStatus = OrderStatus.PENDING
    total: Money = field(default_factory=Money.zero)
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    # --- Factory (used for NEW orders only) -----------------------------------

    @staticmethod
    def open(customer_id: int, details: FulfilmentDetails) -> Order:
        """Create the pending shell that items are attached to."""
        return Order(id=None, customer_id=customer_id, details=details)

    # --- Placement ------------------------------------------------------------

    def add_item(self, item: OrderItem) -> None:
        """Attach a line and fold its value into the running total."""
        if self.status != OrderStatus.PENDING:
            raise ValidationError(
                f"Cannot add items to an order in {self.status.value} status"
            )
        if any(existing.flower_id == item.flower_id for existing in self.items):
            raise ValidationError(
                f"Flower {item.flower_id} is already on order #{self.id}"
            )
        self.items.append(item)
        self.total = self.total + item.line_total

    # --- State transitions ----------------------------------------------------

    def change_status(self, new_status: OrderStatus) -> None:
        """Staff-driven transition; any of the five states may follow any other."""
        self.status = new_status

    # --- Computed properties --------------------------------------------------

    @property
    def items_total(self) -> Money:
        result = Money.zero()
        for item in self.items:
            result = result + item.line_total
        return result

    @property
    def is_consistent(self) -> bool:
        """True when the stored total matches the sum of the item lines."""
        return self.total == self.items_total

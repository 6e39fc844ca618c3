"""Data Transfer Objects: plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals to the outside world.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from flowershop.domain.model.customer import CustomerProfile
from flowershop.domain.model.flower import Flower
from flowershop.domain.model.order import Order


@dataclass(frozen=True)
class Principal:
    """Verified identity handed over by the identity layer."""

    id: int | None
    email: str | None
    name: str | None = None
    role: str = "customer"


@dataclass(frozen=True)
class CartLineSpec:
    """Input: one cart line as the caller sent it (not yet validated)."""

    flower_id: object
    quantity: object


@dataclass(frozen=True)
class PlaceOrderRequest:
    """Input: everything needed to place one order."""

    items: list[CartLineSpec]
    contact_phone: str | None
    fulfilment_mode: str | None = None
    delivery_address: str | None = None
    delivery_date: str | None = None
    gift_message: str | None = None
    notes: str | None = None


@dataclass(frozen=True)
class OrderItemDTO:
    flower_id: int
    flower_name: str | None
    quantity: int
    unit_price_at_sale: str  # e.g. "9.90"
    line_total: str


@dataclass(frozen=True)
class OrderDTO:
    """Output: a complete, hydrated order."""

    id: int
    customer_id: int
    status: str
    total: str
    items: list[OrderItemDTO]
    created_at: str
    fulfilment_mode: str
    contact_phone: str
    delivery_address: str | None = None
    delivery_date: str | None = None
    gift_message: str | None = None
    notes: str | None = None

    @staticmethod
    def from_order(order: Order) -> OrderDTO:
        details = order.details
        return OrderDTO(
            id=order.id,  # type: ignore[arg-type]
            customer_id=order.customer_id,
            status=order.status.value,
            total=f"{order.total.amount:.2f}",
            items=[
                OrderItemDTO(
                    flower_id=item.flower_id,
                    flower_name=item.flower_name,
                    quantity=item.quantity.value,
                    unit_price_at_sale=f"{item.unit_price_at_sale.amount:.2f}",
                    line_total=f"{item.line_total.amount:.2f}",
                )
                for item in order.items
            ],
            created_at=order.created_at.strftime("%Y-%m-%d %H:%M UTC"),
            fulfilment_mode=details.mode.value,
            contact_phone=details.contact_phone,
            delivery_address=details.delivery_address,
            delivery_date=details.delivery_date.isoformat() if details.delivery_date else None,
            gift_message=details.gift_message,
            notes=details.notes,
        )


@dataclass(frozen=True)
class FlowerDTO:
    id: int
    name: str
    price: str
    stock: int
    category: str | None
    description: str | None

    @staticmethod
    def from_flower(flower: Flower) -> FlowerDTO:
        return FlowerDTO(
            id=flower.id,  # type: ignore[arg-type]
            name=flower.name,
            price=f"{flower.price.amount:.2f}",
            stock=flower.stock_quantity,
            category=flower.category,
            description=flower.description,
        )


@dataclass(frozen=True)
class CustomerDTO:
    id: int
    name: str
    email: str
    address: str | None
    phone: str | None

    @staticmethod
    def from_profile(profile: CustomerProfile) -> CustomerDTO:
        return CustomerDTO(
            id=profile.id,  # type: ignore[arg-type]
            name=profile.name,
            email=profile.email,
            address=profile.address,
            phone=profile.phone,
        )


@dataclass(frozen=True)
class PageDTO:
    """Output: one page of a listing plus paging metadata."""

    items: list = field(default_factory=list)
    total: int = 0
    page: int = 1
    page_size: int = 20

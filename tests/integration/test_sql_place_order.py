"""End-to-end order placement against a real SQLite database."""

from decimal import Decimal

import pytest
from sqlalchemy import select

from flowershop.application.dto import CartLineSpec, PlaceOrderRequest, Principal
from flowershop.application.place_order import PlaceOrderHandler
from flowershop.application.update_flower import UpdateFlowerHandler
from flowershop.domain.exceptions import (
    InsufficientStock,
    ItemUnavailable,
    ValidationError,
)
from flowershop.infrastructure.persistence.tables import (
    CustomerRecord,
    OrderItemRecord,
    OrderRecord,
)

ANN = Principal(id=42, email="ann@x.com", name="Ann")


def _request(*lines: tuple, **details) -> PlaceOrderRequest:
    details.setdefault("contact_phone", "0400000000")
    return PlaceOrderRequest(
        items=[CartLineSpec(flower_id=f, quantity=q) for f, q in lines],
        **details,
    )


@pytest.fixture
def handler(uow_factory):
    return PlaceOrderHandler(uow_factory, sleep=lambda _: None)


class TestWorkedExamples:

    def test_two_tulips(self, handler, add_flower, stock_of, session_factory):
        add_flower("Tulip", "9.90", stock=10, flower_id=7)
        dto = handler.handle_for_principal(ANN, _request((7, 2)))

        assert dto.total == "19.80"
        assert dto.items[0].flower_name == "Tulip"
        assert stock_of(7) == 8
        with session_factory() as session:
            order = session.get(OrderRecord, dto.id)
            assert order.total == Decimal("19.80")
            assert order.status == "pending"
            item = session.get(OrderItemRecord, (dto.id, 7))
            assert (item.quantity, item.unit_price) == (2, Decimal("9.90"))

    def test_twenty_tulips(self, handler, add_flower, stock_of, count_rows):
        add_flower("Tulip", "9.90", stock=10, flower_id=7)
        with pytest.raises(InsufficientStock) as exc_info:
            handler.handle_for_principal(ANN, _request((7, 20)))

        exc = exc_info.value
        assert (exc.flower_id, exc.available, exc.requested) == (7, 10, 20)
        assert stock_of(7) == 10
        assert count_rows(OrderRecord) == 0
        assert count_rows(OrderItemRecord) == 0
        assert count_rows(CustomerRecord) == 0

    def test_repeated_flower_becomes_one_item_row(
        self, handler, add_flower, stock_of, session_factory
    ):
        add_flower("Tulip", "9.90", stock=10, flower_id=7)
        dto = handler.handle_for_principal(ANN, _request((7, 2), (7, 3)))

        assert stock_of(7) == 5
        with session_factory() as session:
            rows = session.scalars(
                select(OrderItemRecord).where(OrderItemRecord.order_id == dto.id)
            ).all()
            assert [(r.flower_id, r.quantity) for r in rows] == [(7, 5)]
            assert session.get(OrderRecord, dto.id).total == Decimal("49.50")


class TestAtomicity:

    def test_late_failure_rolls_back_everything(
        self, handler, add_flower, stock_of, count_rows
    ):
        add_flower("Tulip", "9.90", stock=10, flower_id=7)
        add_flower("Rose", "4.50", stock=1, flower_id=8)

        with pytest.raises(InsufficientStock):
            handler.handle_for_principal(ANN, _request((7, 3), (8, 2)))

        assert stock_of(7) == 10
        assert stock_of(8) == 1
        assert count_rows(OrderRecord) == 0
        assert count_rows(OrderItemRecord) == 0

    def test_inactive_flower_rolls_back(self, handler, add_flower, stock_of, count_rows):
        add_flower("Tulip", "9.90", stock=10, flower_id=7)
        add_flower("Lily", "3.00", stock=10, flower_id=9, active=False)

        with pytest.raises(ItemUnavailable):
            handler.handle_for_principal(ANN, _request((7, 1), (9, 1)))
        assert stock_of(7) == 10
        assert count_rows(OrderRecord) == 0

    def test_stored_total_matches_items(self, handler, add_flower, session_factory):
        add_flower("Tulip", "9.90", stock=10, flower_id=7)
        add_flower("Rose", "4.45", stock=10, flower_id=8)
        dto = handler.handle_for_principal(ANN, _request((7, 3), (8, 7), (7, 1)))

        with session_factory() as session:
            order = session.get(OrderRecord, dto.id)
            computed = sum(i.quantity * i.unit_price for i in order.items)
            assert order.total == computed == Decimal("70.75")
            assert [i.flower_id for i in order.items] == [7, 8]


class TestPriceSnapshot:

    def test_later_price_change_not_reflected(
        self, handler, add_flower, uow_factory, session_factory
    ):
        add_flower("Tulip", "9.90", stock=10, flower_id=7)
        dto = handler.handle_for_principal(ANN, _request((7, 2)))
        UpdateFlowerHandler(uow_factory).handle(7, price="12.00")

        with session_factory() as session:
            item = session.get(OrderItemRecord, (dto.id, 7))
            assert item.unit_price == Decimal("9.90")
            assert session.get(OrderRecord, dto.id).total == Decimal("19.80")


class TestProfileResolution:

    def test_reactivates_soft_deleted_profile(
        self, handler, add_flower, add_customer, session_factory
    ):
        add_flower("Tulip", "9.90", stock=10, flower_id=7)
        old_id = add_customer("ann@x.com", name="Ann", active=False)

        dto = handler.handle_for_principal(ANN, _request((7, 1)))

        with session_factory() as session:
            rows = session.scalars(
                select(CustomerRecord).where(CustomerRecord.email == "ann@x.com")
            ).all()
            assert len(rows) == 1
            assert rows[0].id == old_id == dto.customer_id
            assert rows[0].is_active

    def test_creates_profile_with_default_name(
        self, handler, add_flower, session_factory
    ):
        add_flower("Tulip", "9.90", stock=10, flower_id=7)
        handler.handle_for_principal(Principal(id=1, email="bea@x.com"), _request((7, 1)))
        with session_factory() as session:
            profile = session.scalars(select(CustomerRecord)).one()
            assert profile.name == "bea"

    def test_staff_path_requires_active_customer(self, handler, add_flower, add_customer):
        add_flower("Tulip", "9.90", stock=10, flower_id=7)
        gone = add_customer("gone@x.com", active=False)
        with pytest.raises(ValidationError, match="Invalid customer"):
            handler.handle_for_customer(gone, _request((7, 1)))

    def test_staff_path_places_order(self, handler, add_flower, add_customer, stock_of):
        add_flower("Tulip", "9.90", stock=10, flower_id=7)
        jane = add_customer("jane@example.com")
        dto = handler.handle_for_customer(
            jane, _request((7, 4), fulfilment_mode="delivery", delivery_address="1 Main St")
        )
        assert dto.customer_id == jane
        assert dto.fulfilment_mode == "delivery"
        assert stock_of(7) == 6


class TestOversizedNumbers:

    def test_huge_quantity_rejected_before_touching_stock(
        self, handler, add_flower, add_customer, stock_of, count_rows
    ):
        add_flower("Tulip", "9.90", stock=10, flower_id=7)
        jane = add_customer("jane@example.com")

        with pytest.raises(ValidationError, match="flowerId and quantity"):
            handler.handle_for_customer(jane, _request((7, 10**20)))
        assert stock_of(7) == 10
        assert count_rows(OrderRecord) == 0

    def test_huge_flower_id_rejected(self, handler, add_flower, add_customer, count_rows):
        add_flower("Tulip", "9.90", stock=10, flower_id=7)
        jane = add_customer("jane@example.com")

        with pytest.raises(ValidationError, match="flowerId and quantity"):
            handler.handle_for_customer(jane, _request((10**20, 1)))
        assert count_rows(OrderRecord) == 0

    def test_huge_customer_id_rejected(self, handler, add_flower, stock_of):
        add_flower("Tulip", "9.90", stock=10, flower_id=7)
        with pytest.raises(ValidationError, match="Invalid customer"):
            handler.handle_for_customer(10**20, _request((7, 1)))
        assert stock_of(7) == 10

    def test_largest_quantity_is_insufficient_stock(self, handler, add_flower, add_customer):
        add_flower("Tulip", "9.90", stock=10, flower_id=7)
        jane = add_customer("jane@example.com")

        with pytest.raises(InsufficientStock) as exc_info:
            handler.handle_for_customer(jane, _request((7, 2**31 - 1)))
        assert exc_info.value.available == 10

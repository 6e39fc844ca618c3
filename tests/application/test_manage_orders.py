"""Integration tests for the order queries and staff order management."""

import pytest

from flowershop.application.delete_order import DeleteOrderHandler
from flowershop.application.dto import CartLineSpec, PlaceOrderRequest, Principal
from flowershop.application.list_orders import ListOrdersHandler
from flowershop.application.place_order import PlaceOrderHandler
from flowershop.application.show_order import ShowOrderHandler
from flowershop.application.update_order_status import UpdateOrderStatusHandler
from flowershop.domain.exceptions import EntityNotFoundError, ValidationError
from flowershop.domain.model.flower import Flower
from flowershop.domain.model.value_objects import Money
from tests.fakes import FakeFlowerRepository, FakeUnitOfWork

ANN = Principal(id=1, email="ann@x.com", name="Ann")
BOB = Principal(id=2, email="bob@x.com", name="Bob")


def _setup() -> FakeUnitOfWork:
    flowers = FakeFlowerRepository([
        Flower(id=7, name="Tulip", price=Money.of("9.90"), stock_quantity=100),
        Flower(id=3, name="Red Roses", price=Money.of("49.99"), stock_quantity=100),
    ])
    return FakeUnitOfWork(flowers=flowers)


def _place(uow: FakeUnitOfWork, principal: Principal, flower_id: int = 7, qty: int = 1):
    handler = PlaceOrderHandler(lambda: uow)
    return handler.handle_for_principal(
        principal,
        PlaceOrderRequest(
            items=[CartLineSpec(flower_id=flower_id, quantity=qty)],
            contact_phone="0400000000",
        ),
    )


class TestShowOrder:

    def test_staff_sees_any_order(self):
        uow = _setup()
        placed = _place(uow, ANN)
        dto = ShowOrderHandler(lambda: uow).handle(placed.id)
        assert dto.id == placed.id
        assert dto.items[0].flower_name == "Tulip"

    def test_missing_order(self):
        uow = _setup()
        with pytest.raises(EntityNotFoundError, match="Order #5 not found") as exc_info:
            ShowOrderHandler(lambda: uow).handle(5)
        assert exc_info.value.status_code == 404

    def test_customer_sees_own_order(self):
        uow = _setup()
        placed = _place(uow, ANN)
        dto = ShowOrderHandler(lambda: uow).handle_for_principal(ANN, placed.id)
        assert dto.id == placed.id

    def test_someone_elses_order_looks_missing(self):
        uow = _setup()
        placed = _place(uow, ANN)
        _place(uow, BOB)
        with pytest.raises(EntityNotFoundError):
            ShowOrderHandler(lambda: uow).handle_for_principal(BOB, placed.id)

    def test_caller_without_profile_sees_nothing(self):
        uow = _setup()
        placed = _place(uow, ANN)
        stranger = Principal(id=9, email="new@x.com")
        with pytest.raises(EntityNotFoundError):
            ShowOrderHandler(lambda: uow).handle_for_principal(stranger, placed.id)


class TestListOrders:

    def test_staff_listing_newest_first(self):
        uow = _setup()
        first = _place(uow, ANN)
        second = _place(uow, BOB)
        page = ListOrdersHandler(lambda: uow).handle()
        assert [o.id for o in page.items] == [second.id, first.id]
        assert page.total == 2

    def test_staff_listing_pages(self):
        uow = _setup()
        for _ in range(3):
            _place(uow, ANN)
        page = ListOrdersHandler(lambda: uow).handle(page=2, page_size=2)
        assert len(page.items) == 1
        assert page.total == 3
        assert page.page == 2

    def test_page_size_over_limit_rejected(self):
        uow = _setup()
        with pytest.raises(ValidationError, match="Page size"):
            ListOrdersHandler(lambda: uow).handle(page_size=500)

    def test_own_orders_only(self):
        uow = _setup()
        first = _place(uow, ANN)
        _place(uow, BOB)
        _place(uow, ANN, flower_id=3)
        mine = ListOrdersHandler(lambda: uow).handle_for_principal(ANN)
        assert len(mine) == 2
        assert all(o.customer_id == first.customer_id for o in mine)

    def test_no_profile_yet_means_no_orders(self):
        uow = _setup()
        assert ListOrdersHandler(lambda: uow).handle_for_principal(ANN) == []

    def test_customer_history_for_staff(self):
        uow = _setup()
        placed = _place(uow, ANN)
        history = ListOrdersHandler(lambda: uow).handle_for_customer(placed.customer_id)
        assert [o.id for o in history] == [placed.id]

    def test_customer_history_unknown_customer(self):
        uow = _setup()
        with pytest.raises(EntityNotFoundError):
            ListOrdersHandler(lambda: uow).handle_for_customer(77)


class TestUpdateOrderStatus:

    def test_status_changes(self):
        uow = _setup()
        placed = _place(uow, ANN)
        dto = UpdateOrderStatusHandler(lambda: uow).handle(placed.id, "shipped")
        assert dto.status == "shipped"
        assert uow.orders.get_by_id(placed.id).status.value == "shipped"

    def test_cancelled_order_can_be_reopened(self):
        uow = _setup()
        placed = _place(uow, ANN)
        handler = UpdateOrderStatusHandler(lambda: uow)
        handler.handle(placed.id, "cancelled")
        assert handler.handle(placed.id, "pending").status == "pending"

    def test_invalid_status_rejected(self):
        uow = _setup()
        placed = _place(uow, ANN)
        with pytest.raises(ValidationError, match="Invalid status"):
            UpdateOrderStatusHandler(lambda: uow).handle(placed.id, "lost")

    def test_missing_order(self):
        uow = _setup()
        with pytest.raises(EntityNotFoundError):
            UpdateOrderStatusHandler(lambda: uow).handle(12, "paid")

    def test_status_change_keeps_price_snapshot(self):
        uow = _setup()
        placed = _place(uow, ANN, qty=2)
        dto = UpdateOrderStatusHandler(lambda: uow).handle(placed.id, "paid")
        assert dto.total == placed.total == "19.80"


class TestDeleteOrder:

    def test_order_removed(self):
        uow = _setup()
        placed = _place(uow, ANN)
        DeleteOrderHandler(lambda: uow).handle(placed.id)
        assert uow.orders.get_by_id(placed.id) is None

    def test_stock_not_returned(self):
        uow = _setup()
        placed = _place(uow, ANN, qty=4)
        DeleteOrderHandler(lambda: uow).handle(placed.id)
        assert uow.flowers.stock_of(7) == 96

    def test_missing_order(self):
        uow = _setup()
        with pytest.raises(EntityNotFoundError):
            DeleteOrderHandler(lambda: uow).handle(3)

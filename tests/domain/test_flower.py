"""Unit tests for the Flower aggregate."""

import pytest

from flowershop.domain.exceptions import NegativeStockRejected, ValidationError
from flowershop.domain.model.flower import Flower
from flowershop.domain.model.value_objects import MAX_INTEGER, Money


def _flower(stock: int = 10) -> Flower:
    return Flower(id=7, name="Tulip", price=Money.of("9.90"), stock_quantity=stock)


class TestFlowerCreate:

    def test_create_strips_name(self):
        flower = Flower.create(name="  Red Roses ", price=Money.of("49.99"), stock_quantity=5)
        assert flower.id is None
        assert flower.name == "Red Roses"
        assert flower.stock_quantity == 5
        assert flower.active

    def test_name_required(self):
        with pytest.raises(ValidationError, match="name is required"):
            Flower.create(name=" ", price=Money.of("1"))

    def test_price_must_be_positive(self):
        with pytest.raises(ValidationError, match="greater than zero"):
            Flower.create(name="Free", price=Money.zero())

    def test_negative_stock_rejected(self):
        with pytest.raises(ValidationError, match="cannot be negative"):
            Flower.create(name="Tulip", price=Money.of("1"), stock_quantity=-1)


class TestFlowerStock:

    def test_restock(self):
        flower = _flower(stock=10)
        flower.adjust_stock(5)
        assert flower.stock_quantity == 15

    def test_write_off_to_zero(self):
        flower = _flower(stock=10)
        flower.adjust_stock(-10)
        assert flower.stock_quantity == 0

    def test_write_off_below_zero_rejected(self):
        flower = _flower(stock=3)
        with pytest.raises(NegativeStockRejected) as exc_info:
            flower.adjust_stock(-4)
        assert exc_info.value.current == 3
        assert exc_info.value.delta == -4
        assert flower.stock_quantity == 3

    def test_restock_past_column_limit_rejected(self):
        flower = _flower(stock=MAX_INTEGER)
        with pytest.raises(ValidationError, match="too large"):
            flower.adjust_stock(1)
        assert flower.stock_quantity == MAX_INTEGER


class TestFlowerLifecycle:

    def test_deactivated_flower_not_purchasable(self):
        flower = _flower()
        assert flower.is_purchasable
        flower.deactivate()
        assert not flower.is_purchasable

    def test_update_price(self):
        flower = _flower()
        flower.update_price(Money.of("12.00"))
        assert flower.price == Money.of("12.00")

    def test_update_price_to_zero_rejected(self):
        with pytest.raises(ValidationError):
            _flower().update_price(Money.zero())

"""Unit tests for cart validation and merging."""

import pytest

from flowershop.domain.exceptions import ValidationError
from flowershop.domain.model.cart import MAX_CART_LINES, Cart
from flowershop.domain.model.value_objects import MAX_INTEGER, Quantity


class TestCartMerging:

    def test_duplicate_lines_are_summed(self):
        cart = Cart.from_lines([(7, 1), (7, 2)])
        assert list(cart) == [(7, Quantity(3))]

    def test_first_seen_order_is_kept(self):
        cart = Cart.from_lines([(3, 1), (7, 2), (3, 4), (1, 1)])
        assert [fid for fid, _ in cart] == [3, 7, 1]
        assert cart.lines[3] == Quantity(5)

    def test_merged_cart_equals_pre_merged_cart(self):
        split = Cart.from_lines([(7, 1), (7, 2)])
        merged = Cart.from_lines([(7, 3)])
        assert split == merged

    def test_len_and_unit_count(self):
        cart = Cart.from_lines([(1, 2), (2, 3), (1, 1)])
        assert len(cart) == 2
        assert cart.unit_count == 6


class TestCartValidation:

    def test_empty_cart_rejected(self):
        with pytest.raises(ValidationError, match="items are required"):
            Cart.from_lines([])

    @pytest.mark.parametrize(
        "line",
        [
            (7, 0),
            (7, -1),
            (7, 1.5),
            (7, "2"),
            (7, True),
            (None, 1),
            ("7", 1),
            (0, 1),
            (10**20, 1),
            (7, 10**20),
            (MAX_INTEGER + 1, 1),
        ],
    )
    def test_bad_line_rejected(self, line):
        with pytest.raises(ValidationError, match="flowerId and quantity >= 1"):
            Cart.from_lines([line])

    def test_largest_storable_values_accepted(self):
        cart = Cart.from_lines([(MAX_INTEGER, MAX_INTEGER)])
        assert cart.lines[MAX_INTEGER] == Quantity(MAX_INTEGER)

    def test_merged_quantity_over_limit_rejected(self):
        with pytest.raises(ValidationError, match="too large"):
            Cart.from_lines([(7, MAX_INTEGER), (7, 1)])

    def test_too_many_distinct_flowers_rejected(self):
        lines = [(i, 1) for i in range(1, MAX_CART_LINES + 2)]
        with pytest.raises(ValidationError, match="Maximum"):
            Cart.from_lines(lines)

"""Unit tests for the Product aggregate and its stock counters."""

import pytest

from livepay.domain.exceptions import InsufficientStockError, ValidationError
from livepay.domain.model.product import Product
from livepay.domain.model.value_objects import Money
from tests.fakes import make_product


class TestProductCreate:

    def test_keyword_normalized(self):
        p = Product.create("1", "v1", "  Robe ", "Robe wax", Money(15000), 3)
        assert p.keyword == "robe"
        assert p.reserved_stock == 0
        assert p.active

    def test_name_defaults_to_keyword(self):
        p = Product.create("1", "v1", "sac", "", Money(5000), 1)
        assert p.name == "sac"

    def test_multi_word_keyword_rejected(self):
        with pytest.raises(ValidationError, match="single word"):
            Product.create("1", "v1", "robe wax", "Robe", Money(15000), 1)

    def test_zero_price_rejected(self):
        with pytest.raises(ValidationError, match="greater than zero"):
            Product.create("1", "v1", "robe", "Robe", Money(0), 1)

    def test_negative_stock_rejected(self):
        with pytest.raises(ValidationError, match="cannot be negative"):
            Product.create("1", "v1", "robe", "Robe", Money(100), -1)


class TestProductReserve:

    def test_reserve_reduces_available(self):
        p = make_product(stock=10)
        p.reserve(3)
        assert p.reserved_stock == 3
        assert p.available_stock == 7
        assert p.stock == 10

    def test_reserve_last_unit(self):
        p = make_product(stock=1)
        p.reserve(1)
        assert p.available_stock == 0

    def test_reserve_more_than_available_has_no_effect(self):
        p = make_product(stock=5, reserved=4)
        with pytest.raises(InsufficientStockError) as info:
            p.reserve(2)
        assert info.value.requested == 2
        assert info.value.available == 1
        assert p.reserved_stock == 4

    def test_reserve_zero_rejected(self):
        with pytest.raises(ValidationError, match="must be positive"):
            make_product().reserve(0)


class TestProductRelease:

    def test_release_restores_available(self):
        p = make_product(stock=5, reserved=3)
        assert p.release(2) == 2
        assert p.reserved_stock == 1

    def test_release_is_floored_at_zero(self):
        p = make_product(stock=5, reserved=1)
        assert p.release(3) == 1
        assert p.reserved_stock == 0

    def test_release_zero_rejected(self):
        with pytest.raises(ValidationError, match="must be positive"):
            make_product(reserved=1).release(0)


class TestProductCommit:

    def test_commit_lowers_stock_and_reserved(self):
        p = make_product(stock=5, reserved=2)
        p.commit(2)
        assert p.stock == 3
        assert p.reserved_stock == 0
        assert p.available_stock == 3

    def test_commit_more_than_reserved_rejected(self):
        p = make_product(stock=5, reserved=1)
        with pytest.raises(ValidationError, match="Cannot commit"):
            p.commit(2)
        assert p.stock == 5


class TestProductSetStock:

    def test_restock(self):
        p = make_product(stock=1, reserved=1)
        p.set_stock(10)
        assert p.available_stock == 9

    def test_below_reserved_rejected(self):
        p = make_product(stock=5, reserved=3)
        with pytest.raises(ValidationError, match="currently reserved"):
            p.set_stock(2)

"""Tests for the ReserveOrder use case."""

import threading
from datetime import timedelta

import pytest

from livepay.application.dto import ReserveRequest
from livepay.application.reserve_order import ReserveOrderHandler
from livepay.domain.exceptions import (
    InsufficientStockError,
    ProductInactiveError,
    ProductNotFoundError,
    TokenCollisionError,
    ValidationError,
)
from livepay.domain.model.order import OrderStatus
from livepay.domain.model.vendor import VendorConfig
from livepay.domain.service.payment_tokens import PaymentTokenIssuer
from livepay.domain.service.stock_ledger import StockLedger
from tests.fakes import T0, make_container, make_product


def _request(**overrides) -> ReserveRequest:
    params = dict(
        vendor_id="v1",
        product_keyword="robe",
        quantity=2,
        buyer_phone="+221770000001",
        buyer_name="Awa",
    )
    params.update(overrides)
    return ReserveRequest(**params)


class TestReserveOrder:

    def test_happy_path(self):
        container = make_container(products=[make_product(stock=5)])
        dto = container.reserve_order().handle(_request())

        assert dto.order_id == 1
        assert dto.amount == 30000
        assert dto.expires_at == T0 + timedelta(minutes=10)
        assert dto.payment_token

        product = container.product_repo.get_by_id("1")
        assert product.reserved_stock == 2
        assert product.stock == 5

        order = container.order_repo.get_by_id(1)
        assert order.status == OrderStatus.RESERVED
        assert order.payment_token == dto.payment_token
        assert order.buyer_name == "Awa"

    def test_keyword_is_case_insensitive(self):
        container = make_container(products=[make_product()])
        dto = container.reserve_order().handle(_request(product_keyword="  ROBE "))
        assert dto.order_id == 1

    def test_vendor_hold_duration_applies(self):
        container = make_container(
            products=[make_product()],
            vendors=[VendorConfig("v1", "Boutique Awa", reservation_duration_minutes=30)],
        )
        dto = container.reserve_order().handle(_request())
        assert dto.expires_at == T0 + timedelta(minutes=30)

    def test_tokens_differ_between_orders(self):
        container = make_container(products=[make_product(stock=5)])
        handler = container.reserve_order()
        first = handler.handle(_request(quantity=1))
        second = handler.handle(_request(quantity=1))
        assert first.payment_token != second.payment_token

    def test_price_snapshot(self):
        container = make_container(products=[make_product(price=15000)])
        container.reserve_order().handle(_request(quantity=1))
        container.update_product().handle("1", new_price="20000")
        assert container.order_repo.get_by_id(1).unit_price.amount == 15000


class TestReserveOrderRejections:

    def test_unknown_keyword(self):
        container = make_container(products=[make_product()])
        with pytest.raises(ProductNotFoundError, match="sac"):
            container.reserve_order().handle(_request(product_keyword="sac"))

    def test_other_vendors_product_not_visible(self):
        container = make_container(products=[make_product(vendor_id="v2")])
        with pytest.raises(ProductNotFoundError):
            container.reserve_order().handle(_request())

    def test_inactive_product(self):
        container = make_container(products=[make_product(active=False)])
        with pytest.raises(ProductInactiveError):
            container.reserve_order().handle(_request())

    def test_insufficient_stock_creates_nothing(self):
        container = make_container(products=[make_product(stock=3, reserved=2)])
        with pytest.raises(InsufficientStockError):
            container.reserve_order().handle(_request(quantity=2))
        assert container.order_repo.list_all() == []
        assert container.product_repo.get_by_id("1").reserved_stock == 2

    def test_zero_quantity(self):
        container = make_container(products=[make_product()])
        with pytest.raises(ValidationError):
            container.reserve_order().handle(_request(quantity=0))


class CountingLedger(StockLedger):

    def __init__(self, product_repo):
        super().__init__(product_repo)
        self.reserve_calls = 0

    def reserve(self, product_id, quantity):
        self.reserve_calls += 1
        return super().reserve(product_id, quantity)


class TestReserveOrderInputChecks:

    @pytest.fixture
    def setup(self):
        container = make_container(products=[make_product(stock=1)])
        ledger = CountingLedger(container.product_repo)
        handler = ReserveOrderHandler(
            product_repo=container.product_repo,
            vendor_repo=container.vendor_repo,
            ledger=ledger,
            order_store=container.order_store,
            token_issuer=container.token_issuer,
            clock=container.clock,
        )
        return handler, ledger

    @pytest.mark.parametrize(
        "overrides,message",
        [
            ({"buyer_phone": ""}, "phone"),
            ({"buyer_phone": "   "}, "phone"),
            ({"quantity": 101}, "Maximum 100"),
        ],
    )
    def test_rejected_before_stock_is_held(self, setup, overrides, message):
        handler, ledger = setup
        with pytest.raises(ValidationError, match=message):
            handler.handle(_request(**{"quantity": 1, **overrides}))
        assert ledger.reserve_calls == 0

    def test_malformed_request_does_not_block_last_unit(self, setup):
        handler, ledger = setup
        with pytest.raises(ValidationError):
            handler.handle(_request(quantity=1, buyer_phone=""))
        dto = handler.handle(_request(quantity=1))
        assert dto.order_id == 1
        assert ledger.reserve_calls == 1


class TestReserveOrderRollback:

    def test_hold_released_when_token_cannot_be_issued(self):
        container = make_container(products=[make_product(stock=5)])
        handler = ReserveOrderHandler(
            product_repo=container.product_repo,
            vendor_repo=container.vendor_repo,
            ledger=container.ledger,
            order_store=container.order_store,
            token_issuer=PaymentTokenIssuer(is_taken=lambda token: True),
            clock=container.clock,
        )
        with pytest.raises(TokenCollisionError):
            handler.handle(_request())
        assert container.product_repo.get_by_id("1").reserved_stock == 0


class TestReserveOrderConcurrency:

    def test_last_unit_goes_to_exactly_one_buyer(self):
        container = make_container(products=[make_product(stock=1)])
        handler = container.reserve_order()
        barrier = threading.Barrier(2)
        outcomes: list[str] = []
        lock = threading.Lock()

        def buy(phone):
            barrier.wait()
            try:
                handler.handle(_request(quantity=1, buyer_phone=phone))
                result = "reserved"
            except InsufficientStockError:
                result = "short"
            with lock:
                outcomes.append(result)

        threads = [
            threading.Thread(target=buy, args=(phone,))
            for phone in ("+221770000001", "+221770000002")
        ]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert sorted(outcomes) == ["reserved", "short"]
        assert len(container.order_repo.list_all()) == 1
        assert container.product_repo.get_by_id("1").reserved_stock == 1

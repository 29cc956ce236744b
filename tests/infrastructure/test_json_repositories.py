"""Tests for the JSON-file repositories and outbox."""

import json
from datetime import timedelta

from livepay.domain.model.events import OrderPaid, StockLow
from livepay.domain.model.order import Order, OrderStatus
from livepay.domain.model.payment import PaymentOutcome, PaymentResult, ProcessedPaymentEvent
from livepay.domain.model.value_objects import Money, Quantity
from livepay.domain.model.vendor import VendorConfig
from livepay.infrastructure.notifications.outbox_publisher import OutboxEventPublisher
from livepay.infrastructure.persistence.json_order_repository import JsonOrderRepository
from livepay.infrastructure.persistence.json_payment_event_repository import (
    JsonPaymentEventRepository,
)
from livepay.infrastructure.persistence.json_product_repository import JsonProductRepository
from livepay.infrastructure.persistence.json_vendor_repository import JsonVendorRepository
from tests.fakes import T0, make_product


def _order(token: str = "tok-1") -> Order:
    return Order.reserve(
        vendor_id="v1",
        product_id="1",
        product_name="Robe wax",
        buyer_phone="+221770000001",
        buyer_name="Awa",
        quantity=Quantity(2),
        unit_price=Money(15000),
        payment_token=token,
        now=T0,
        hold_minutes=10,
    )


class TestJsonProductRepository:

    def test_creates_missing_file(self, tmp_path):
        path = tmp_path / "nested" / "products.json"
        JsonProductRepository(path)
        assert json.loads(path.read_text()) == []

    def test_round_trip(self, tmp_path):
        repo = JsonProductRepository(tmp_path / "products.json")
        repo.save(make_product(stock=5, reserved=2))

        loaded = repo.get_by_id("1")
        assert loaded.price == Money(15000)
        assert (loaded.stock, loaded.reserved_stock) == (5, 2)
        assert repo.get_by_keyword("v1", "ROBE").id == "1"
        assert repo.get_by_keyword("v2", "robe") is None
        assert repo.next_id() == "2"

    def test_save_updates_in_place(self, tmp_path):
        repo = JsonProductRepository(tmp_path / "products.json")
        product = make_product()
        repo.save(product)
        product.reserve(3)
        repo.save(product)
        assert len(repo.list_all()) == 1
        assert repo.get_by_id("1").reserved_stock == 3


class TestJsonOrderRepository:

    def test_assigns_ids(self, tmp_path):
        repo = JsonOrderRepository(tmp_path / "orders.json")
        first, second = _order("a"), _order("b")
        repo.save(first)
        repo.save(second)
        assert (first.id, second.id) == (1, 2)

    def test_round_trip(self, tmp_path):
        repo = JsonOrderRepository(tmp_path / "orders.json")
        order = _order()
        repo.save(order)

        loaded = repo.get_by_token("tok-1")
        assert loaded.id == order.id
        assert loaded.quantity == Quantity(2)
        assert loaded.expires_at == T0 + timedelta(minutes=10)
        assert loaded.status == OrderStatus.RESERVED
        assert loaded.buyer_name == "Awa"

    def test_list_due(self, tmp_path):
        repo = JsonOrderRepository(tmp_path / "orders.json")
        repo.save(_order("a"))
        later = _order("b")
        later.expires_at = T0 + timedelta(minutes=30)
        repo.save(later)

        due = repo.list_due(T0 + timedelta(minutes=10))
        assert [o.payment_token for o in due] == ["a"]

    def test_survives_restart(self, tmp_path):
        path = tmp_path / "orders.json"
        JsonOrderRepository(path).save(_order())
        assert JsonOrderRepository(path).get_by_id(1).payment_token == "tok-1"


class TestJsonVendorAndPaymentEvents:

    def test_vendor_config(self, tmp_path):
        repo = JsonVendorRepository(tmp_path / "vendors.json")
        assert repo.get("v1") is None
        repo.save(VendorConfig("v1", "Boutique Awa", reservation_duration_minutes=20))
        assert repo.get("v1").reservation_duration_minutes == 20

    def test_processed_events(self, tmp_path):
        repo = JsonPaymentEventRepository(tmp_path / "payment_events.json")
        repo.add(
            ProcessedPaymentEvent(
                idempotency_key="evt-1",
                provider_ref="WAVE-1",
                token="tok-1",
                order_id=1,
                amount=30000,
                outcome=PaymentOutcome.SUCCESS,
                result=PaymentResult.PAID,
                received_at=T0,
            )
        )
        assert repo.get("evt-1").result == PaymentResult.PAID
        assert len(repo.list_for_order(1)) == 1
        assert repo.get("evt-2") is None


class TestOutboxEventPublisher:

    def test_publish_and_drain(self, tmp_path):
        outbox = OutboxEventPublisher(tmp_path / "outbox.json")
        order = _order()
        order.id = 1
        outbox.publish(OrderPaid.from_order(order, T0))
        outbox.publish(StockLow("v1", "1", "Robe wax", 1, T0))

        pending = outbox.pending()
        assert [r["event"] for r in pending] == ["OrderPaid", "StockLow"]
        assert pending[0]["data"]["amount"] == 30000
        assert pending[0]["data"]["occurred_at"] == T0.isoformat()

        assert len(outbox.drain()) == 2
        assert outbox.pending() == []

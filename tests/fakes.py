"""In-memory fakes for testing.

These implement the same abstract interfaces as the JSON repositories
but keep everything in a dict. No file I/O, no side effects.
"""

from __future__ import annotations

import threading
from datetime import datetime, timedelta, timezone

from livepay.application.dto import PaymentAck, ReservationDTO, ReserveRequest
from livepay.domain.model.order import Order, OrderStatus
from livepay.domain.model.payment import PaymentEvent, PaymentOutcome, ProcessedPaymentEvent
from livepay.domain.model.product import Product, normalize_keyword
from livepay.domain.model.value_objects import Money
from livepay.domain.model.vendor import VendorConfig
from livepay.domain.repository.order_repository import OrderRepository
from livepay.domain.repository.payment_event_repository import PaymentEventRepository
from livepay.domain.repository.product_repository import ProductRepository
from livepay.domain.repository.vendor_repository import VendorRepository
from livepay.domain.service.event_publisher import EventPublisher

T0 = datetime(2026, 3, 14, 18, 0, tzinfo=timezone.utc)


class FakeClock:
    """Controllable wall clock; call it to read, ``advance`` to move."""

    def __init__(self, start: datetime = T0) -> None:
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **delta) -> datetime:
        self.now = self.now + timedelta(**delta)
        return self.now


class FakeOrderRepository(OrderRepository):

    def __init__(self) -> None:
        self._store: dict[int, Order] = {}
        self._next_id = 1
        self._lock = threading.Lock()

    def next_id(self) -> int:
        return self._next_id

    def get_by_id(self, order_id: int) -> Order | None:
        return self._store.get(order_id)

    def get_by_token(self, token: str) -> Order | None:
        for order in list(self._store.values()):
            if order.payment_token == token:
                return order
        return None

    def list_by_status(
        self, status: OrderStatus, vendor_id: str | None = None
    ) -> list[Order]:
        return [o for o in self.list_all(vendor_id) if o.status == status]

    def list_all(self, vendor_id: str | None = None) -> list[Order]:
        return [
            o
            for o in list(self._store.values())
            if vendor_id is None or o.vendor_id == vendor_id
        ]

    def save(self, order: Order) -> None:
        with self._lock:
            if order.id is None:
                order.id = self._next_id
                self._next_id += 1
            self._store[order.id] = order


class FakeProductRepository(ProductRepository):

    def __init__(self, products: list[Product] | None = None) -> None:
        self._store: dict[str, Product] = {}
        for p in products or []:
            self._store[p.id] = p

    def next_id(self) -> str:
        return str(len(self._store) + 1)

    def get_by_id(self, product_id: str) -> Product | None:
        return self._store.get(product_id)

    def get_by_keyword(self, vendor_id: str, keyword: str) -> Product | None:
        wanted = normalize_keyword(keyword)
        for p in self._store.values():
            if p.vendor_id == vendor_id and p.keyword == wanted:
                return p
        return None

    def list_all(self, vendor_id: str | None = None) -> list[Product]:
        return [
            p for p in self._store.values() if vendor_id is None or p.vendor_id == vendor_id
        ]

    def save(self, product: Product) -> None:
        self._store[product.id] = product


class FakeVendorRepository(VendorRepository):

    def __init__(self, configs: list[VendorConfig] | None = None) -> None:
        self._store: dict[str, VendorConfig] = {c.vendor_id: c for c in configs or []}

    def get(self, vendor_id: str) -> VendorConfig | None:
        return self._store.get(vendor_id)

    def save(self, config: VendorConfig) -> None:
        self._store[config.vendor_id] = config


class FakePaymentEventRepository(PaymentEventRepository):

    def __init__(self) -> None:
        self._store: dict[str, ProcessedPaymentEvent] = {}

    def get(self, idempotency_key: str) -> ProcessedPaymentEvent | None:
        return self._store.get(idempotency_key)

    def list_for_order(self, order_id: int) -> list[ProcessedPaymentEvent]:
        return [r for r in self._store.values() if r.order_id == order_id]

    def add(self, record: ProcessedPaymentEvent) -> None:
        self._store[record.idempotency_key] = record


class RecordingPublisher(EventPublisher):

    def __init__(self) -> None:
        self.events: list = []
        self._lock = threading.Lock()

    def publish(self, event) -> None:
        with self._lock:
            self.events.append(event)

    def names(self) -> list[str]:
        return [e.name for e in self.events]


# --- Whole-engine wiring ------------------------------------------------------

WEBHOOK_SECRET = "test-secret"


def make_product(
    product_id: str = "1",
    vendor_id: str = "v1",
    keyword: str = "robe",
    name: str = "Robe wax",
    price: int = 15000,
    stock: int = 5,
    reserved: int = 0,
    active: bool = True,
) -> Product:
    return Product(
        id=product_id,
        vendor_id=vendor_id,
        keyword=keyword,
        name=name,
        price=Money(price),
        stock=stock,
        reserved_stock=reserved,
        active=active,
    )


def make_container(
    products: list[Product] | None = None,
    vendors: list[VendorConfig] | None = None,
    clock: FakeClock | None = None,
):
    """A fully wired Container backed by the in-memory fakes."""
    from livepay.infrastructure.bootstrap import Container
    from livepay.infrastructure.config import Settings

    return Container(
        settings=Settings(webhook_secret=WEBHOOK_SECRET, default_reservation_minutes=10),
        product_repo=FakeProductRepository(products),
        order_repo=FakeOrderRepository(),
        vendor_repo=FakeVendorRepository(vendors),
        payment_event_repo=FakePaymentEventRepository(),
        publisher=RecordingPublisher(),
        clock=clock or FakeClock(),
    )


def reserve(container, quantity: int = 2, phone: str = "+221770000001") -> ReservationDTO:
    return container.reserve_order().handle(
        ReserveRequest(
            vendor_id="v1",
            product_keyword="robe",
            quantity=quantity,
            buyer_phone=phone,
            buyer_name="Awa",
        )
    )


def payment_event(
    token: str,
    amount: int,
    key: str | None = "evt-1",
    ref: str = "WAVE-1",
    outcome: PaymentOutcome = PaymentOutcome.SUCCESS,
) -> PaymentEvent:
    return PaymentEvent(
        token=token, provider_ref=ref, amount=amount, outcome=outcome, idempotency_key=key
    )


def pay(container, token: str, amount: int, **kwargs) -> PaymentAck:
    """Deliver a correctly signed payment event."""
    event = payment_event(token, amount, **kwargs)
    return container.payment_handler.handle(event, container.verifier.sign(event))

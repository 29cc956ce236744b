"""Composition root: wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.

One ``Container`` per process: the Stock Ledger, the Order Store and the
repositories must be shared by every handler, because their locks are
what serialize concurrent requests.
"""

from __future__ import annotations

from livepay.application.add_product import AddProductHandler
from livepay.application.cancel_order import CancelOrderHandler
from livepay.application.clock import Clock, utc_now
from livepay.application.configure_vendor import ConfigureVendorHandler
from livepay.application.expire_orders import ExpireOrdersHandler
from livepay.application.handle_payment_event import HandlePaymentEventHandler
from livepay.application.reserve_order import ReserveOrderHandler
from livepay.application.send_reminders import SendRemindersHandler
from livepay.application.set_stock import SetStockHandler
from livepay.application.show_inventory import ShowInventoryHandler
from livepay.application.show_order import ListOrdersHandler, ShowOrderHandler
from livepay.application.show_payment_page import ShowPaymentPageHandler
from livepay.application.update_product import UpdateProductHandler
from livepay.domain.repository.order_repository import OrderRepository
from livepay.domain.repository.payment_event_repository import PaymentEventRepository
from livepay.domain.repository.product_repository import ProductRepository
from livepay.domain.repository.vendor_repository import VendorRepository
from livepay.domain.service.event_publisher import EventPublisher
from livepay.domain.service.order_store import OrderStore
from livepay.domain.service.payment_tokens import PaymentTokenIssuer
from livepay.domain.service.signature import WebhookSignatureVerifier
from livepay.domain.service.stock_ledger import StockLedger
from livepay.infrastructure.config import Settings
from livepay.infrastructure.notifications.outbox_publisher import OutboxEventPublisher
from livepay.infrastructure.persistence.json_order_repository import (
    JsonOrderRepository,
)
from livepay.infrastructure.persistence.json_payment_event_repository import (
    JsonPaymentEventRepository,
)
from livepay.infrastructure.persistence.json_product_repository import (
    JsonProductRepository,
)
from livepay.infrastructure.persistence.json_vendor_repository import (
    JsonVendorRepository,
)
from livepay.infrastructure.scheduler import ExpirationScheduler


class Container:

    def __init__(
        self,
        settings: Settings,
        product_repo: ProductRepository,
        order_repo: OrderRepository,
        vendor_repo: VendorRepository,
        payment_event_repo: PaymentEventRepository,
        publisher: EventPublisher,
        clock: Clock = utc_now,
    ) -> None:
        self.settings = settings
        self.product_repo = product_repo
        self.order_repo = order_repo
        self.vendor_repo = vendor_repo
        self.payment_event_repo = payment_event_repo
        self.publisher = publisher
        self.clock = clock

        self.ledger = StockLedger(product_repo)
        self.order_store = OrderStore(order_repo)
        self.token_issuer = PaymentTokenIssuer(
            is_taken=lambda token: order_repo.get_by_token(token) is not None
        )
        self.verifier = WebhookSignatureVerifier(settings.webhook_secret)

        # Stateful handlers are built once and shared.
        self.payment_handler = HandlePaymentEventHandler(
            order_repo=order_repo,
            vendor_repo=vendor_repo,
            payment_event_repo=payment_event_repo,
            order_store=self.order_store,
            ledger=self.ledger,
            verifier=self.verifier,
            publisher=publisher,
            clock=clock,
        )

    # --- Handlers -------------------------------------------------------------

    def reserve_order(self) -> ReserveOrderHandler:
        return ReserveOrderHandler(
            product_repo=self.product_repo,
            vendor_repo=self.vendor_repo,
            ledger=self.ledger,
            order_store=self.order_store,
            token_issuer=self.token_issuer,
            clock=self.clock,
            default_minutes=self.settings.default_reservation_minutes,
        )

    def cancel_order(self) -> CancelOrderHandler:
        return CancelOrderHandler(self.order_store, self.ledger, self.publisher, self.clock)

    def expire_orders(self) -> ExpireOrdersHandler:
        return ExpireOrdersHandler(
            self.order_repo, self.order_store, self.ledger, self.publisher, self.clock
        )

    def send_reminders(self) -> SendRemindersHandler:
        return SendRemindersHandler(
            self.order_repo, self.vendor_repo, self.order_store, self.publisher, self.clock
        )

    def show_order(self) -> ShowOrderHandler:
        return ShowOrderHandler(self.order_repo, self.payment_event_repo)

    def list_orders(self) -> ListOrdersHandler:
        return ListOrdersHandler(self.order_repo)

    def show_payment_page(self) -> ShowPaymentPageHandler:
        return ShowPaymentPageHandler(self.order_repo, self.vendor_repo)

    def add_product(self) -> AddProductHandler:
        return AddProductHandler(self.product_repo)

    def update_product(self) -> UpdateProductHandler:
        return UpdateProductHandler(self.ledger)

    def set_stock(self) -> SetStockHandler:
        return SetStockHandler(self.product_repo, self.ledger)

    def show_inventory(self) -> ShowInventoryHandler:
        return ShowInventoryHandler(self.product_repo)

    def configure_vendor(self) -> ConfigureVendorHandler:
        return ConfigureVendorHandler(
            self.vendor_repo, self.settings.default_reservation_minutes
        )

    def scheduler(self, interval: float | None = None) -> ExpirationScheduler:
        return ExpirationScheduler(
            ticks=[self.expire_orders().handle, self.send_reminders().handle],
            interval=interval or self.settings.sweep_interval_seconds,
        )


def build_container(settings: Settings | None = None) -> Container:
    """Wire the JSON-file stores under ``settings.data_dir``."""
    settings = settings or Settings.from_env()
    data_dir = settings.data_dir
    return Container(
        settings=settings,
        product_repo=JsonProductRepository(data_dir / "products.json"),
        order_repo=JsonOrderRepository(data_dir / "orders.json"),
        vendor_repo=JsonVendorRepository(data_dir / "vendors.json"),
        payment_event_repo=JsonPaymentEventRepository(data_dir / "payment_events.json"),
        publisher=OutboxEventPublisher(data_dir / "outbox.json"),
    )

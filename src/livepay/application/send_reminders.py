"""Application service: Send Payment Reminders use case.

Runs after each expiration sweep.  A buyer gets one reminder once 70%
of the hold window has passed, if the vendor enabled auto-reminders.
"""

from __future__ import annotations

import logging

from livepay.application.clock import Clock, utc_now
from livepay.application.configure_vendor import load_vendor_config
from livepay.domain.model.events import PaymentReminder
from livepay.domain.model.order import Order, OrderStatus
from livepay.domain.repository.order_repository import OrderRepository
from livepay.domain.repository.vendor_repository import VendorRepository
from livepay.domain.service.event_publisher import EventPublisher
from livepay.domain.service.order_store import OrderStore

logger = logging.getLogger(__name__)

REMINDER_FRACTION = 0.7


class SendRemindersHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        vendor_repo: VendorRepository,
        order_store: OrderStore,
        publisher: EventPublisher,
        clock: Clock = utc_now,
    ) -> None:
        self._order_repo = order_repo
        self._vendor_repo = vendor_repo
        self._order_store = order_store
        self._publisher = publisher
        self._clock = clock

    def handle(self) -> list[Order]:
        now = self._clock()
        reminded: list[Order] = []

        for order in self._order_repo.list_by_status(OrderStatus.RESERVED):
            if order.reminder_sent or order.expires_at <= now:
                continue
            remind_at = order.expires_at - order.hold_duration * (1 - REMINDER_FRACTION)
            if now < remind_at:
                continue
            if not load_vendor_config(self._vendor_repo, order.vendor_id).auto_reminder_enabled:
                continue
            if not self._order_store.mark_reminder_sent(order.id):  # type: ignore[arg-type]
                continue

            self._publisher.publish(
                PaymentReminder.from_order(order, now, expires_at=order.expires_at)
            )
            logger.info("Payment reminder sent for order #%s", order.id)
            reminded.append(order)

        return reminded

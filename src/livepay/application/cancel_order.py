"""Application service: Cancel Order use case.

Explicit cancellation by the buyer or the vendor.  Uses the same
discipline as the expiration sweep: CAS ``reserved -> cancelled`` first,
release the held units only if that CAS applied.  Cancelling an order
that already settled (or a second concurrent cancel) is rejected and
releases nothing.
"""

from __future__ import annotations

import logging

from livepay.application.clock import Clock, utc_now
from livepay.domain.exceptions import InvalidTransitionError
from livepay.domain.model.events import OrderCancelled
from livepay.domain.model.order import OrderStatus
from livepay.domain.service.event_publisher import EventPublisher
from livepay.domain.service.order_store import OrderStore
from livepay.domain.service.stock_ledger import StockLedger

logger = logging.getLogger(__name__)


class CancelOrderHandler:

    def __init__(
        self,
        order_store: OrderStore,
        ledger: StockLedger,
        publisher: EventPublisher,
        clock: Clock = utc_now,
    ) -> None:
        self._order_store = order_store
        self._ledger = ledger
        self._publisher = publisher
        self._clock = clock

    def handle(self, order_id: int) -> None:
        now = self._clock()
        result = self._order_store.transition(
            order_id, OrderStatus.RESERVED, OrderStatus.CANCELLED, at=now
        )
        order = result.order
        if not result.applied:
            raise InvalidTransitionError(
                order_id, order.status.value, OrderStatus.CANCELLED.value
            )

        self._ledger.release(order.product_id, order.quantity.value)
        self._publisher.publish(OrderCancelled.from_order(order, now))
        logger.info("Order #%s cancelled", order_id)

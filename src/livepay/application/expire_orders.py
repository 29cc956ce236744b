"""Application service: Expire Orders use case (one sweep tick).

For every order that is still RESERVED past its deadline:

1. CAS ``reserved -> expired`` through the Order Store.
2. Only if the CAS applied, release the held units.

The status change comes first so that a payment confirming at the same
instant can never leave a unit both sold and released: whichever CAS
wins decides what happens to the stock.
"""

from __future__ import annotations

import logging

from livepay.application.clock import Clock, utc_now
from livepay.domain.model.events import OrderExpired
from livepay.domain.model.order import Order, OrderStatus
from livepay.domain.repository.order_repository import OrderRepository
from livepay.domain.service.event_publisher import EventPublisher
from livepay.domain.service.order_store import OrderStore
from livepay.domain.service.stock_ledger import StockLedger

logger = logging.getLogger(__name__)


class ExpireOrdersHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        order_store: OrderStore,
        ledger: StockLedger,
        publisher: EventPublisher,
        clock: Clock = utc_now,
    ) -> None:
        self._order_repo = order_repo
        self._order_store = order_store
        self._ledger = ledger
        self._publisher = publisher
        self._clock = clock

    def handle(self) -> list[Order]:
        """Expire every overdue hold; return the orders this tick expired."""
        now = self._clock()
        expired: list[Order] = []

        for candidate in self._order_repo.list_due(now):
            result = self._order_store.transition(
                candidate.id,  # type: ignore[arg-type]
                OrderStatus.RESERVED,
                OrderStatus.EXPIRED,
                at=now,
            )
            if not result.applied:
                # Paid or cancelled since the candidate list was read.
                continue

            order = result.order
            self._ledger.release(order.product_id, order.quantity.value)
            self._publisher.publish(OrderExpired.from_order(order, now))
            logger.info(
                "Order #%s expired: released %d x product %s",
                order.id, order.quantity.value, order.product_id,
            )
            expired.append(order)

        return expired

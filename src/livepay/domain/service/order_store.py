"""Domain service: Order Store.

The only component allowed to change an order's status.  Every change
is a compare-and-set: it succeeds only when the order is still in the
expected source status, checked and applied under the order's lock.
This is what arbitrates the reserve / expire / pay / cancel races
without a global lock.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from datetime import datetime

from livepay.domain.exceptions import EntityNotFoundError, TokenCollisionError
from livepay.domain.model.order import Order, OrderStatus, check_transition
from livepay.domain.repository.order_repository import OrderRepository
from livepay.domain.service.locks import KeyedLock

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TransitionResult:
    """Outcome of a CAS: whether it applied, and the order as it now stands."""

    applied: bool
    order: Order


class OrderStore:

    def __init__(
        self,
        order_repo: OrderRepository,
        locks: KeyedLock | None = None,
    ) -> None:
        self._order_repo = order_repo
        self._locks = locks or KeyedLock()
        self._insert_lock = threading.Lock()

    def add(self, order: Order) -> Order:
        """Insert a new order, refusing a payment token already in use."""
        with self._insert_lock:
            if self._order_repo.get_by_token(order.payment_token) is not None:
                raise TokenCollisionError("Payment token already assigned")
            self._order_repo.save(order)
        return order

    def get(self, order_id: int) -> Order:
        order = self._order_repo.get_by_id(order_id)
        if order is None:
            raise EntityNotFoundError(f"Order #{order_id} not found")
        return order

    def transition(
        self,
        order_id: int,
        expected: OrderStatus,
        target: OrderStatus,
        at: datetime,
        provider_ref: str | None = None,
    ) -> TransitionResult:
        """Move ``expected -> target`` if the order is still in ``expected``.

        An edge that is not in the state machine raises
        InvalidTransitionError; losing the race to another actor is not
        an error and returns ``applied=False`` with the current order.
        """
        check_transition(order_id, expected, target)
        with self._locks.hold(order_id):
            order = self.get(order_id)
            if order.status != expected:
                logger.debug(
                    "CAS %s->%s skipped for order #%s: status is %s",
                    expected.value, target.value, order_id, order.status.value,
                )
                return TransitionResult(applied=False, order=order)
            order.transition_to(target, at, provider_ref=provider_ref)
            self._order_repo.save(order)
            return TransitionResult(applied=True, order=order)

    def mark_reminder_sent(self, order_id: int) -> bool:
        """Flag the reminder once, and only while the order is still RESERVED."""
        with self._locks.hold(order_id):
            order = self.get(order_id)
            if order.status != OrderStatus.RESERVED or order.reminder_sent:
                return False
            order.reminder_sent = True
            self._order_repo.save(order)
            return True

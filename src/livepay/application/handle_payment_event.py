"""Application service: Payment Reconciler.

Consumes payment provider callbacks.  Validation comes before any
mutation:

1. Authenticity: an unverifiable event raises InvalidSignatureError
   and touches nothing.
2. Idempotency: a key seen before replays the stored result.
3. The token must name an order; the amount must equal its total.

On a verified success the order goes ``reserved -> paid`` by CAS and,
only if that CAS applied, the Stock Ledger commits the units.  That is
the sole path that lowers a product's total ``stock``.  A success that
arrives after the hold was reclaimed is recorded as
``LATE_OR_PAID_ELSEWHERE`` and surfaced for a manual refund; nothing is
refunded or re-reserved automatically.

Every outcome is stored before it is returned to the webhook.
"""

from __future__ import annotations

import logging

from livepay.application.clock import Clock, utc_now
from livepay.application.configure_vendor import load_vendor_config
from livepay.application.dto import PaymentAck
from livepay.domain.exceptions import (
    EntityNotFoundError,
    InvalidSignatureError,
    InvalidTransitionError,
)
from livepay.domain.model.events import LatePaymentReceived, OrderPaid, StockLow
from livepay.domain.model.order import Order, OrderStatus
from livepay.domain.model.payment import (
    PaymentEvent,
    PaymentOutcome,
    PaymentResult,
    ProcessedPaymentEvent,
)
from livepay.domain.repository.order_repository import OrderRepository
from livepay.domain.repository.payment_event_repository import PaymentEventRepository
from livepay.domain.repository.vendor_repository import VendorRepository
from livepay.domain.service.event_publisher import EventPublisher
from livepay.domain.service.locks import KeyedLock
from livepay.domain.service.order_store import OrderStore
from livepay.domain.service.signature import WebhookSignatureVerifier
from livepay.domain.service.stock_ledger import StockLedger

logger = logging.getLogger(__name__)


class HandlePaymentEventHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        vendor_repo: VendorRepository,
        payment_event_repo: PaymentEventRepository,
        order_store: OrderStore,
        ledger: StockLedger,
        verifier: WebhookSignatureVerifier,
        publisher: EventPublisher,
        clock: Clock = utc_now,
    ) -> None:
        self._order_repo = order_repo
        self._vendor_repo = vendor_repo
        self._payment_event_repo = payment_event_repo
        self._order_store = order_store
        self._ledger = ledger
        self._verifier = verifier
        self._publisher = publisher
        self._clock = clock
        self._key_locks = KeyedLock()

    def handle(self, event: PaymentEvent, signature: str | None) -> PaymentAck:
        try:
            self._verifier.verify(event, signature)
        except InvalidSignatureError:
            logger.warning(
                "Rejected payment event %s: bad signature", event.provider_ref
            )
            raise

        key = event.dedup_key
        with self._key_locks.hold(key):
            previous = self._payment_event_repo.get(key)
            if previous is not None:
                logger.info(
                    "Payment event %s already processed (%s), replaying",
                    key, previous.result.value,
                )
                return PaymentAck(
                    result=previous.result.value,
                    order_id=previous.order_id,
                    replayed=True,
                )

            order = self._order_repo.get_by_token(event.token)
            if order is None:
                raise EntityNotFoundError("No order for this payment token")

            result = self._apply(order, event, key)
            self._record(event, key, order, result)
            return PaymentAck(result=result.value, order_id=order.id)  # type: ignore[arg-type]

    # --- Outcomes -------------------------------------------------------------

    def _record(
        self, event: PaymentEvent, key: str, order: Order, result: PaymentResult
    ) -> None:
        self._payment_event_repo.add(
            ProcessedPaymentEvent(
                idempotency_key=key,
                provider_ref=event.provider_ref,
                token=event.token,
                order_id=order.id,  # type: ignore[arg-type]
                amount=event.amount,
                outcome=event.outcome,
                result=result,
                received_at=self._clock(),
            )
        )

    def _apply(self, order: Order, event: PaymentEvent, key: str) -> PaymentResult:
        if event.outcome == PaymentOutcome.FAILURE:
            logger.info(
                "Payment %s failed for order #%s; hold kept until expiry",
                event.provider_ref, order.id,
            )
            return PaymentResult.PAYMENT_FAILED

        if event.amount != order.total_amount.amount:
            logger.warning(
                "Amount mismatch on order #%s: expected %d, provider sent %d (ref %s)",
                order.id, order.total_amount.amount, event.amount, event.provider_ref,
            )
            return PaymentResult.AMOUNT_MISMATCH

        now = self._clock()
        cas = self._order_store.transition(
            order.id,  # type: ignore[arg-type]
            OrderStatus.RESERVED,
            OrderStatus.PAID,
            at=now,
            provider_ref=event.provider_ref,
        )
        current = cas.order

        if cas.applied:
            try:
                product = self._ledger.commit(current.product_id, current.quantity.value)
            except Exception:
                # Order is paid but its units are still counted as held.
                logger.exception(
                    "Order #%s paid (ref %s) but stock commit failed; reconcile product %s by hand",
                    current.id, event.provider_ref, current.product_id,
                )
                self._record(event, key, current, PaymentResult.COMMIT_FAILED)
                raise
            self._publisher.publish(OrderPaid.from_order(current, now))
            logger.info(
                "Order #%s paid (%s, ref %s)",
                current.id, current.total_amount, event.provider_ref,
            )
            self._check_low_stock(current, product.available_stock, now)
            return PaymentResult.PAID

        if current.status == OrderStatus.PAID:
            logger.info(
                "Order #%s already paid; ref %s acknowledged as duplicate",
                current.id, event.provider_ref,
            )
            return PaymentResult.DUPLICATE

        if current.status in (OrderStatus.EXPIRED, OrderStatus.CANCELLED):
            logger.warning(
                "Late payment on %s order #%s (ref %s): manual refund needed",
                current.status.value, current.id, event.provider_ref,
            )
            self._publisher.publish(
                LatePaymentReceived.from_order(
                    current,
                    now,
                    provider_ref=event.provider_ref,
                    order_status=current.status.value,
                )
            )
            return PaymentResult.LATE_OR_PAID_ELSEWHERE

        logger.error(
            "Payment for order #%s in unexpected status %s",
            current.id, current.status.value,
        )
        raise InvalidTransitionError(
            current.id, current.status.value, OrderStatus.PAID.value
        )

    def _check_low_stock(self, order: Order, remaining: int, now) -> None:
        vendor = load_vendor_config(self._vendor_repo, order.vendor_id)
        if remaining <= vendor.low_stock_threshold:
            self._publisher.publish(
                StockLow(
                    vendor_id=order.vendor_id,
                    product_id=order.product_id,
                    product_name=order.product_name,
                    remaining=remaining,
                    occurred_at=now,
                )
            )

"""Order aggregate: one buyer's hold on units of one product.

The Order owns its lifecycle status.  The allowed moves are::

    pending --> reserved --> paid       (terminal)
                         --> expired    (terminal)
                         --> cancelled  (terminal)

Anything else raises InvalidTransitionError.  Concurrent actors never
call ``transition_to`` directly: they go through the Order Store, which
performs the compare-and-set on the current status.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from enum import Enum

from livepay.domain.exceptions import InvalidTransitionError, ValidationError
from livepay.domain.model.value_objects import Money, Quantity


class OrderStatus(Enum):
    PENDING = "pending"
    RESERVED = "reserved"
    PAID = "paid"
    EXPIRED = "expired"
    CANCELLED = "cancelled"


ALLOWED_TRANSITIONS: dict[OrderStatus, frozenset[OrderStatus]] = {
    OrderStatus.PENDING: frozenset({OrderStatus.RESERVED}),
    OrderStatus.RESERVED: frozenset(
        {OrderStatus.PAID, OrderStatus.EXPIRED, OrderStatus.CANCELLED}
    ),
    OrderStatus.PAID: frozenset(),
    OrderStatus.EXPIRED: frozenset(),
    OrderStatus.CANCELLED: frozenset(),
}


def check_transition(
    order_id: int | None, current: OrderStatus, target: OrderStatus
) -> None:
    if target not in ALLOWED_TRANSITIONS[current]:
        raise InvalidTransitionError(order_id, current.value, target.value)


# ---------------------------------------------------------------------------
# Constants for business rules
# ---------------------------------------------------------------------------
MAX_QUANTITY_PER_ORDER = 100
MAX_RESERVATION_MINUTES = 24 * 60


def check_reservation_request(buyer_phone: str, quantity: Quantity) -> None:
    """Buyer input rules, checked before any stock is held."""
    if not buyer_phone or not buyer_phone.strip():
        raise ValidationError("Buyer phone is required")
    if quantity.value > MAX_QUANTITY_PER_ORDER:
        raise ValidationError(f"Maximum {MAX_QUANTITY_PER_ORDER} units per order")


@dataclass
class Order:
    """Aggregate root for a reservation and its settlement.

    Use the ``Order.reserve()`` factory for new orders; it enforces all
    business rules.  The ``__init__`` is intentionally simple so the
    repository can reconstitute persisted orders without re-validating.
    """

    id: int | None
    vendor_id: str
    product_id: str
    product_name: str
    buyer_phone: str
    quantity: Quantity
    unit_price: Money  # locked at reservation time
    payment_token: str
    expires_at: datetime
    status: OrderStatus = OrderStatus.RESERVED
    buyer_name: str | None = None
    reserved_at: datetime | None = None
    paid_at: datetime | None = None
    closed_at: datetime | None = None
    provider_ref: str | None = None
    reminder_sent: bool = False
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    # --- Factory (used for NEW orders only) -----------------------------------

    @staticmethod
    def reserve(
        vendor_id: str,
        product_id: str,
        product_name: str,
        buyer_phone: str,
        quantity: Quantity,
        unit_price: Money,
        payment_token: str,
        now: datetime,
        hold_minutes: int,
        buyer_name: str | None = None,
    ) -> Order:
        """Create an order directly in RESERVED, with its hold deadline.

        The stock must already be held by the ledger when this is called.
        """
        check_reservation_request(buyer_phone, quantity)
        if not 0 < hold_minutes <= MAX_RESERVATION_MINUTES:
            raise ValidationError(
                f"Reservation duration must be between 1 and "
                f"{MAX_RESERVATION_MINUTES} minutes"
            )
        if not payment_token:
            raise ValidationError("Payment token is required")

        return Order(
            id=None,
            vendor_id=vendor_id,
            product_id=product_id,
            product_name=product_name,
            buyer_phone=buyer_phone.strip(),
            buyer_name=buyer_name.strip() if buyer_name else None,
            quantity=quantity,
            unit_price=unit_price,
            payment_token=payment_token,
            status=OrderStatus.RESERVED,
            reserved_at=now,
            expires_at=now + timedelta(minutes=hold_minutes),
            created_at=now,
        )

    # --- State transitions ----------------------------------------------------

    def transition_to(
        self,
        target: OrderStatus,
        at: datetime,
        provider_ref: str | None = None,
    ) -> None:
        """Apply one edge of the state machine, stamping the timestamps."""
        check_transition(self.id, self.status, target)
        self.status = target
        if target == OrderStatus.RESERVED:
            self.reserved_at = at
        elif target == OrderStatus.PAID:
            self.paid_at = at
            self.closed_at = at
            self.provider_ref = provider_ref
        else:
            self.closed_at = at

    # --- Computed properties --------------------------------------------------

    @property
    def total_amount(self) -> Money:
        return self.unit_price * self.quantity.value

    @property
    def hold_duration(self) -> timedelta:
        return self.expires_at - (self.reserved_at or self.created_at)

    def is_due(self, now: datetime) -> bool:
        """True when the hold has elapsed and the order is still unsettled."""
        return self.status == OrderStatus.RESERVED and self.expires_at <= now

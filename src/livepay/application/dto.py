"""Data Transfer Objects: plain containers that cross layer boundaries.

DTOs carry data between the CLI / HTTP layers and the application
layer without exposing domain internals to the outside world.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from livepay.domain.model.order import Order
from livepay.domain.model.payment import ProcessedPaymentEvent
from livepay.domain.model.value_objects import Money


@dataclass(frozen=True)
class ReserveRequest:
    """Input: the structured request produced by the chat parser."""

    vendor_id: str
    product_keyword: str
    quantity: int
    buyer_phone: str
    buyer_name: str | None = None


@dataclass(frozen=True)
class ReservationDTO:
    """Output: what the chat collaborator needs to send the payment link."""

    order_id: int
    payment_token: str
    amount: int
    expires_at: datetime


@dataclass(frozen=True)
class PaymentRecordDTO:
    """Output: one provider event processed for an order."""

    received_at: str
    provider_ref: str
    amount: str
    outcome: str
    result: str

    @staticmethod
    def from_record(record: ProcessedPaymentEvent) -> PaymentRecordDTO:
        return PaymentRecordDTO(
            received_at=_fmt(record.received_at),  # type: ignore[arg-type]
            provider_ref=record.provider_ref,
            amount=str(Money(record.amount)),
            outcome=record.outcome.value,
            result=record.result.value,
        )


@dataclass(frozen=True)
class OrderDTO:
    """Output: a complete order as displayed to the vendor."""

    id: int
    vendor_id: str
    product_name: str
    buyer_phone: str
    buyer_name: str | None
    quantity: int
    unit_price: str  # formatted, e.g. "15 000 F CFA"
    total: str
    status: str
    payment_token: str
    reserved_at: str | None
    expires_at: str
    paid_at: str | None
    provider_ref: str | None
    payments: tuple[PaymentRecordDTO, ...] = ()

    @staticmethod
    def from_order(
        order: Order, payments: list[ProcessedPaymentEvent] | None = None
    ) -> OrderDTO:
        return OrderDTO(
            id=order.id,  # type: ignore[arg-type]
            vendor_id=order.vendor_id,
            product_name=order.product_name,
            buyer_phone=order.buyer_phone,
            buyer_name=order.buyer_name,
            quantity=order.quantity.value,
            unit_price=str(order.unit_price),
            total=str(order.total_amount),
            status=order.status.value,
            payment_token=order.payment_token,
            reserved_at=_fmt(order.reserved_at),
            expires_at=_fmt(order.expires_at),  # type: ignore[arg-type]
            paid_at=_fmt(order.paid_at),
            provider_ref=order.provider_ref,
            payments=tuple(PaymentRecordDTO.from_record(p) for p in payments or []),
        )


@dataclass(frozen=True)
class PaymentPageDTO:
    """Output: public, read-only view behind ``/pay/<token>``.

    Deliberately excludes vendor id, order id, product id and the
    buyer's phone number.
    """

    product_name: str
    amount: int
    client_name: str | None
    status: str
    expires_at: datetime
    vendor_name: str


@dataclass(frozen=True)
class PaymentAck:
    """Output: what the webhook endpoint reports back to the provider."""

    result: str
    order_id: int
    replayed: bool = False


def _fmt(value: datetime | None) -> str | None:
    return value.strftime("%Y-%m-%d %H:%M UTC") if value else None

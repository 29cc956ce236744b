"""Notification events emitted by the engine.

The engine never formats or sends messages itself.  It publishes these
plain records and the chat collaborator turns them into messages.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from datetime import datetime

from livepay.domain.model.order import Order


@dataclass(frozen=True)
class OrderNotification:
    order_id: int
    vendor_id: str
    product_name: str
    amount: int
    buyer_phone: str
    occurred_at: datetime

    @classmethod
    def from_order(cls, order: Order, occurred_at: datetime, **extra):
        return cls(
            order_id=order.id,  # type: ignore[arg-type]
            vendor_id=order.vendor_id,
            product_name=order.product_name,
            amount=order.total_amount.amount,
            buyer_phone=order.buyer_phone,
            occurred_at=occurred_at,
            **extra,
        )

    @property
    def name(self) -> str:
        return type(self).__name__

    def to_dict(self) -> dict:
        data = asdict(self)
        data["occurred_at"] = self.occurred_at.isoformat()
        return data


@dataclass(frozen=True)
class OrderPaid(OrderNotification):
    pass


@dataclass(frozen=True)
class OrderExpired(OrderNotification):
    pass


@dataclass(frozen=True)
class OrderCancelled(OrderNotification):
    pass


@dataclass(frozen=True)
class PaymentReminder(OrderNotification):
    expires_at: datetime | None = None

    def to_dict(self) -> dict:
        data = super().to_dict()
        data["expires_at"] = self.expires_at.isoformat() if self.expires_at else None
        return data


@dataclass(frozen=True)
class LatePaymentReceived(OrderNotification):
    """A payment succeeded after the hold was reclaimed; refund by hand."""

    provider_ref: str = ""
    order_status: str = ""


@dataclass(frozen=True)
class StockLow:
    vendor_id: str
    product_id: str
    product_name: str
    remaining: int
    occurred_at: datetime

    @property
    def name(self) -> str:
        return type(self).__name__

    def to_dict(self) -> dict:
        data = asdict(self)
        data["occurred_at"] = self.occurred_at.isoformat()
        return data

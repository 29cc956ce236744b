"""JSON-file-backed implementation of OrderRepository."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path

from livepay.domain.model.order import Order, OrderStatus
from livepay.domain.model.value_objects import DEFAULT_CURRENCY, Money, Quantity
from livepay.domain.repository.order_repository import OrderRepository
from livepay.infrastructure.persistence.json_file import JsonListFile


class JsonOrderRepository(OrderRepository):

    def __init__(self, file_path: Path) -> None:
        self._file = JsonListFile(file_path)

    # --- OrderRepository interface --------------------------------------------

    def next_id(self) -> int:
        orders = self._file.load()
        if not orders:
            return 1
        return max(o["id"] for o in orders) + 1

    def get_by_id(self, order_id: int) -> Order | None:
        for raw in self._file.load():
            if raw["id"] == order_id:
                return self._to_domain(raw)
        return None

    def get_by_token(self, token: str) -> Order | None:
        for raw in self._file.load():
            if raw["payment_token"] == token:
                return self._to_domain(raw)
        return None

    def list_by_status(
        self, status: OrderStatus, vendor_id: str | None = None
    ) -> list[Order]:
        return [o for o in self.list_all(vendor_id) if o.status == status]

    def list_all(self, vendor_id: str | None = None) -> list[Order]:
        return [
            self._to_domain(raw)
            for raw in self._file.load()
            if vendor_id is None or raw["vendor_id"] == vendor_id
        ]

    def save(self, order: Order) -> None:
        with self._file.lock:
            if order.id is None:
                order.id = self.next_id()
            self._file.upsert(self._to_raw(order), key="id")

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(order: Order) -> dict:
        return {
            "id": order.id,
            "vendor_id": order.vendor_id,
            "product_id": order.product_id,
            "product_name": order.product_name,
            "buyer_phone": order.buyer_phone,
            "buyer_name": order.buyer_name,
            "quantity": order.quantity.value,
            "unit_price": order.unit_price.amount,
            "currency": order.unit_price.currency,
            "status": order.status.value,
            "payment_token": order.payment_token,
            "reserved_at": _iso(order.reserved_at),
            "expires_at": order.expires_at.isoformat(),
            "paid_at": _iso(order.paid_at),
            "closed_at": _iso(order.closed_at),
            "provider_ref": order.provider_ref,
            "reminder_sent": order.reminder_sent,
            "created_at": order.created_at.isoformat(),
        }

    @staticmethod
    def _to_domain(raw: dict) -> Order:
        return Order(
            id=raw["id"],
            vendor_id=raw["vendor_id"],
            product_id=raw["product_id"],
            product_name=raw["product_name"],
            buyer_phone=raw["buyer_phone"],
            buyer_name=raw.get("buyer_name"),
            quantity=Quantity(raw["quantity"]),
            unit_price=Money(raw["unit_price"], raw.get("currency", DEFAULT_CURRENCY)),
            status=OrderStatus(raw["status"]),
            payment_token=raw["payment_token"],
            reserved_at=_parse(raw.get("reserved_at")),
            expires_at=datetime.fromisoformat(raw["expires_at"]),
            paid_at=_parse(raw.get("paid_at")),
            closed_at=_parse(raw.get("closed_at")),
            provider_ref=raw.get("provider_ref"),
            reminder_sent=raw.get("reminder_sent", False),
            created_at=datetime.fromisoformat(raw["created_at"]),
        )


def _iso(value: datetime | None) -> str | None:
    return value.isoformat() if value else None


def _parse(value: str | None) -> datetime | None:
    return datetime.fromisoformat(value) if value else None

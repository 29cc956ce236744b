"""Abstract repository for Order aggregate.

Storage only: status changes are arbitrated by the Order Store, which
is the single caller of ``save`` for existing orders.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime

from livepay.domain.model.order import Order, OrderStatus


class OrderRepository(ABC):

    @abstractmethod
    def next_id(self) -> int:
        """Generate the next unique order ID."""

    @abstractmethod
    def get_by_id(self, order_id: int) -> Order | None:
        """Return an order by its ID, or None if not found."""

    @abstractmethod
    def get_by_token(self, token: str) -> Order | None:
        """Return the order owning a payment token, or None."""

    @abstractmethod
    def list_by_status(
        self, status: OrderStatus, vendor_id: str | None = None
    ) -> list[Order]:
        """Return orders currently in *status*, oldest first."""

    @abstractmethod
    def list_all(self, vendor_id: str | None = None) -> list[Order]:
        """Return every order, oldest first."""

    @abstractmethod
    def save(self, order: Order) -> None:
        """Persist a new or updated order (assigns an ID to new ones)."""

    def list_due(self, now: datetime) -> list[Order]:
        """Orders still RESERVED whose hold elapsed at or before *now*."""
        return [o for o in self.list_by_status(OrderStatus.RESERVED) if o.is_due(now)]

"""Abstract repository for processed payment provider events."""

from __future__ import annotations

from abc import ABC, abstractmethod

from livepay.domain.model.payment import ProcessedPaymentEvent


class PaymentEventRepository(ABC):

    @abstractmethod
    def get(self, idempotency_key: str) -> ProcessedPaymentEvent | None:
        """Return the stored result for a key, or None if never processed."""

    @abstractmethod
    def list_for_order(self, order_id: int) -> list[ProcessedPaymentEvent]:
        """Return every processed event that targeted an order."""

    @abstractmethod
    def add(self, record: ProcessedPaymentEvent) -> None:
        """Store a newly processed event."""

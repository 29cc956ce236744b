"""Outbound port for notification events (paid, expired, reminders...)."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Union

from livepay.domain.model.events import OrderNotification, StockLow

Notification = Union[OrderNotification, StockLow]


class EventPublisher(ABC):

    @abstractmethod
    def publish(self, event: Notification) -> None:
        """Hand an event to the chat collaborator."""

"""EventPublisher that appends events to a JSON outbox file.

The chat collaborator drains the outbox and sends the messages; the
engine only records what happened.
"""

from __future__ import annotations

import logging
from pathlib import Path

from livepay.domain.service.event_publisher import EventPublisher, Notification
from livepay.infrastructure.persistence.json_file import JsonListFile

logger = logging.getLogger(__name__)


class OutboxEventPublisher(EventPublisher):

    def __init__(self, file_path: Path) -> None:
        self._file = JsonListFile(file_path)

    def publish(self, event: Notification) -> None:
        with self._file.lock:
            records = self._file.load()
            records.append({"event": event.name, "data": event.to_dict()})
            self._file.persist(records)
        logger.info("Published %s", event.name)

    def pending(self) -> list[dict]:
        return self._file.load()

    def drain(self) -> list[dict]:
        """Return every queued event and empty the outbox."""
        with self._file.lock:
            records = self._file.load()
            self._file.persist([])
        return records

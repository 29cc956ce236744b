"""JSON-file-backed implementation of PaymentEventRepository."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path

from livepay.domain.model.payment import (
    PaymentOutcome,
    PaymentResult,
    ProcessedPaymentEvent,
)
from livepay.domain.repository.payment_event_repository import PaymentEventRepository
from livepay.infrastructure.persistence.json_file import JsonListFile


class JsonPaymentEventRepository(PaymentEventRepository):

    def __init__(self, file_path: Path) -> None:
        self._file = JsonListFile(file_path)

    def get(self, idempotency_key: str) -> ProcessedPaymentEvent | None:
        for raw in self._file.load():
            if raw["idempotency_key"] == idempotency_key:
                return self._to_domain(raw)
        return None

    def list_for_order(self, order_id: int) -> list[ProcessedPaymentEvent]:
        return [
            self._to_domain(raw)
            for raw in self._file.load()
            if raw["order_id"] == order_id
        ]

    def add(self, record: ProcessedPaymentEvent) -> None:
        with self._file.lock:
            records = self._file.load()
            records.append(
                {
                    "idempotency_key": record.idempotency_key,
                    "provider_ref": record.provider_ref,
                    "token": record.token,
                    "order_id": record.order_id,
                    "amount": record.amount,
                    "outcome": record.outcome.value,
                    "result": record.result.value,
                    "received_at": record.received_at.isoformat(),
                }
            )
            self._file.persist(records)

    @staticmethod
    def _to_domain(raw: dict) -> ProcessedPaymentEvent:
        return ProcessedPaymentEvent(
            idempotency_key=raw["idempotency_key"],
            provider_ref=raw["provider_ref"],
            token=raw["token"],
            order_id=raw["order_id"],
            amount=raw["amount"],
            outcome=PaymentOutcome(raw["outcome"]),
            result=PaymentResult(raw["result"]),
            received_at=datetime.fromisoformat(raw["received_at"]),
        )

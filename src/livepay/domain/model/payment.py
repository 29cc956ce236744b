"""Payment provider events and the record kept for each processed one.

A provider may deliver the same event several times (webhook retries)
and in any order relative to the expiration sweep.  Each delivery is
keyed by its idempotency key; the first processing stores a
``ProcessedPaymentEvent`` and later deliveries replay its result.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from livepay.domain.exceptions import ValidationError


class PaymentOutcome(Enum):
    SUCCESS = "success"
    FAILURE = "failure"


class PaymentResult(Enum):
    PAID = "paid"
    DUPLICATE = "duplicate"
    AMOUNT_MISMATCH = "amount_mismatch"
    LATE_OR_PAID_ELSEWHERE = "late_or_paid_elsewhere"
    PAYMENT_FAILED = "payment_failed"
    COMMIT_FAILED = "commit_failed"


@dataclass(frozen=True)
class PaymentEvent:
    """One callback from the payment provider, already parsed."""

    token: str
    provider_ref: str
    amount: int
    outcome: PaymentOutcome
    idempotency_key: str | None = None

    def __post_init__(self) -> None:
        if not self.token:
            raise ValidationError("Payment token is required")
        if not self.provider_ref:
            raise ValidationError("Provider reference is required")
        if isinstance(self.amount, bool) or not isinstance(self.amount, int):
            raise ValidationError("Payment amount must be an integer")
        if self.amount < 0:
            raise ValidationError("Payment amount cannot be negative")

    @property
    def dedup_key(self) -> str:
        """Idempotency key, falling back to the provider's own reference."""
        return self.idempotency_key or self.provider_ref

    def canonical(self) -> str:
        """The byte-stable string the provider signs."""
        return "|".join(
            [
                self.token,
                self.provider_ref,
                str(self.amount),
                self.outcome.value,
                self.idempotency_key or "",
            ]
        )


@dataclass(frozen=True)
class ProcessedPaymentEvent:
    idempotency_key: str
    provider_ref: str
    token: str
    order_id: int
    amount: int
    outcome: PaymentOutcome
    result: PaymentResult
    received_at: datetime

"""Domain service: webhook authenticity.

The provider signs the canonical form of each event with a shared
secret (HMAC-SHA256, hex digest).  Verification happens before any
lookup or mutation.
"""

from __future__ import annotations

import hashlib
import hmac

from livepay.domain.exceptions import InvalidSignatureError
from livepay.domain.model.payment import PaymentEvent


class WebhookSignatureVerifier:

    def __init__(self, secret: str) -> None:
        if not secret:
            raise ValueError("Webhook secret must not be empty")
        self._secret = secret.encode("utf-8")

    def sign(self, event: PaymentEvent) -> str:
        return hmac.new(
            self._secret, event.canonical().encode("utf-8"), hashlib.sha256
        ).hexdigest()

    def verify(self, event: PaymentEvent, signature: str | None) -> None:
        """Raise InvalidSignatureError unless *signature* matches."""
        if not signature:
            raise InvalidSignatureError("Missing payment event signature")
        if not hmac.compare_digest(self.sign(event), signature.strip().lower()):
            raise InvalidSignatureError("Payment event signature does not match")

"""Domain service: payment token issuance.

Tokens are the public handle of an order's payment page.  They carry
no information: 24 random bytes from ``secrets`` (192 bits), URL-safe
base64 encoded, never derived from the order or product id.
"""

from __future__ import annotations

import secrets
from collections.abc import Callable

from livepay.domain.exceptions import TokenCollisionError

TOKEN_BYTES = 24
MAX_ATTEMPTS = 5


class PaymentTokenIssuer:

    def __init__(
        self,
        is_taken: Callable[[str], bool],
        generate: Callable[[], str] | None = None,
    ) -> None:
        self._is_taken = is_taken
        self._generate = generate or (lambda: secrets.token_urlsafe(TOKEN_BYTES))

    def issue(self) -> str:
        """Return a token not used by any existing order.

        Regenerates on collision; gives up with TokenCollisionError after
        ``MAX_ATTEMPTS`` draws, which only a broken generator can reach.
        """
        for _ in range(MAX_ATTEMPTS):
            token = self._generate()
            if not self._is_taken(token):
                return token
        raise TokenCollisionError(
            f"Could not generate a unique payment token after {MAX_ATTEMPTS} attempts"
        )

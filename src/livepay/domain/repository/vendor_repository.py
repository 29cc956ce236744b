"""Abstract repository for vendor configuration."""

from __future__ import annotations

from abc import ABC, abstractmethod

from livepay.domain.model.vendor import VendorConfig


class VendorRepository(ABC):

    @abstractmethod
    def get(self, vendor_id: str) -> VendorConfig | None:
        """Return the vendor's configuration, or None if never saved."""

    @abstractmethod
    def save(self, config: VendorConfig) -> None:
        """Persist a new or updated configuration."""

"""JSON-file-backed implementation of VendorRepository."""

from __future__ import annotations

from pathlib import Path

from livepay.domain.model.vendor import VendorConfig
from livepay.domain.repository.vendor_repository import VendorRepository
from livepay.infrastructure.persistence.json_file import JsonListFile


class JsonVendorRepository(VendorRepository):

    def __init__(self, file_path: Path) -> None:
        self._file = JsonListFile(file_path)

    def get(self, vendor_id: str) -> VendorConfig | None:
        for raw in self._file.load():
            if raw["vendor_id"] == vendor_id:
                return VendorConfig(**raw)
        return None

    def save(self, config: VendorConfig) -> None:
        self._file.upsert(
            {
                "vendor_id": config.vendor_id,
                "business_name": config.business_name,
                "reservation_duration_minutes": config.reservation_duration_minutes,
                "auto_reminder_enabled": config.auto_reminder_enabled,
                "low_stock_threshold": config.low_stock_threshold,
            },
            key="vendor_id",
        )

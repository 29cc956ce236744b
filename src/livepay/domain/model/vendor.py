"""Vendor configuration: the per-vendor knobs the engine reads."""

from __future__ import annotations

from dataclasses import dataclass

from livepay.domain.exceptions import ValidationError
from livepay.domain.model.order import MAX_RESERVATION_MINUTES

DEFAULT_RESERVATION_MINUTES = 15
DEFAULT_LOW_STOCK_THRESHOLD = 2


@dataclass
class VendorConfig:
    vendor_id: str
    business_name: str
    reservation_duration_minutes: int = DEFAULT_RESERVATION_MINUTES
    auto_reminder_enabled: bool = True
    low_stock_threshold: int = DEFAULT_LOW_STOCK_THRESHOLD

    def __post_init__(self) -> None:
        if not self.vendor_id:
            raise ValidationError("Vendor ID is required")
        if not 0 < self.reservation_duration_minutes <= MAX_RESERVATION_MINUTES:
            raise ValidationError(
                f"Reservation duration must be between 1 and "
                f"{MAX_RESERVATION_MINUTES} minutes"
            )
        if self.low_stock_threshold < 0:
            raise ValidationError("Low-stock threshold cannot be negative")

    @staticmethod
    def default_for(vendor_id: str, reservation_minutes: int) -> VendorConfig:
        """Configuration used for vendors that never saved one."""
        return VendorConfig(
            vendor_id=vendor_id,
            business_name=vendor_id,
            reservation_duration_minutes=reservation_minutes,
        )

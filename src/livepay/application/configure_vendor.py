"""Application service: Configure Vendor use case."""

from __future__ import annotations

from livepay.domain.model.vendor import DEFAULT_RESERVATION_MINUTES, VendorConfig
from livepay.domain.repository.vendor_repository import VendorRepository


def load_vendor_config(
    vendor_repo: VendorRepository,
    vendor_id: str,
    default_minutes: int = DEFAULT_RESERVATION_MINUTES,
) -> VendorConfig:
    """Return the vendor's saved configuration, or the defaults."""
    config = vendor_repo.get(vendor_id)
    if config is None:
        return VendorConfig.default_for(vendor_id, default_minutes)
    return config


class ConfigureVendorHandler:

    def __init__(
        self,
        vendor_repo: VendorRepository,
        default_minutes: int = DEFAULT_RESERVATION_MINUTES,
    ) -> None:
        self._vendor_repo = vendor_repo
        self._default_minutes = default_minutes

    def handle(
        self,
        vendor_id: str,
        business_name: str | None = None,
        reservation_minutes: int | None = None,
        auto_reminder: bool | None = None,
        low_stock_threshold: int | None = None,
    ) -> VendorConfig:
        """Create or update a vendor's settings; omitted fields are kept."""
        current = load_vendor_config(self._vendor_repo, vendor_id, self._default_minutes)
        config = VendorConfig(
            vendor_id=vendor_id,
            business_name=(business_name or current.business_name).strip(),
            reservation_duration_minutes=(
                reservation_minutes
                if reservation_minutes is not None
                else current.reservation_duration_minutes
            ),
            auto_reminder_enabled=(
                auto_reminder if auto_reminder is not None else current.auto_reminder_enabled
            ),
            low_stock_threshold=(
                low_stock_threshold
                if low_stock_threshold is not None
                else current.low_stock_threshold
            ),
        )
        self._vendor_repo.save(config)
        return config

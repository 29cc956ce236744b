"""Runtime settings read from the environment."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from livepay.domain.exceptions import ConfigurationError
from livepay.domain.model.order import MAX_RESERVATION_MINUTES
from livepay.domain.model.vendor import DEFAULT_RESERVATION_MINUTES

# When installed in editable mode the project root is the repo root.
DEFAULT_DATA_DIR = Path(__file__).resolve().parents[3] / "data"
DEFAULT_SWEEP_INTERVAL_SECONDS = 30.0


@dataclass(frozen=True)
class Settings:
    webhook_secret: str
    data_dir: Path = DEFAULT_DATA_DIR
    sweep_interval_seconds: float = DEFAULT_SWEEP_INTERVAL_SECONDS
    default_reservation_minutes: int = DEFAULT_RESERVATION_MINUTES
    log_level: str = "INFO"

    @staticmethod
    def from_env(environ: dict[str, str] | None = None) -> Settings:
        """Build settings from ``LIVEPAY_*`` variables.

        ``LIVEPAY_WEBHOOK_SECRET`` has no default: without it anyone could
        sign a payment event, so startup fails instead.
        """
        env = os.environ if environ is None else environ
        webhook_secret = env.get("LIVEPAY_WEBHOOK_SECRET", "").strip()
        if not webhook_secret:
            raise ConfigurationError("LIVEPAY_WEBHOOK_SECRET must be set")

        settings = Settings(
            webhook_secret=webhook_secret,
            data_dir=Path(env.get("LIVEPAY_DATA_DIR", str(DEFAULT_DATA_DIR))),
            sweep_interval_seconds=_number(
                env, "LIVEPAY_SWEEP_INTERVAL_SECONDS", DEFAULT_SWEEP_INTERVAL_SECONDS, float
            ),
            default_reservation_minutes=_number(
                env, "LIVEPAY_DEFAULT_RESERVATION_MINUTES", DEFAULT_RESERVATION_MINUTES, int
            ),
            log_level=env.get("LIVEPAY_LOG_LEVEL", "INFO").upper(),
        )
        if settings.sweep_interval_seconds <= 0:
            raise ConfigurationError("LIVEPAY_SWEEP_INTERVAL_SECONDS must be positive")
        if not 0 < settings.default_reservation_minutes <= MAX_RESERVATION_MINUTES:
            raise ConfigurationError(
                f"LIVEPAY_DEFAULT_RESERVATION_MINUTES must be between 1 and "
                f"{MAX_RESERVATION_MINUTES}"
            )
        return settings


def _number(env, name: str, default, kind):
    raw = env.get(name)
    if raw is None or raw == "":
        return default
    try:
        return kind(raw)
    except ValueError as exc:
        raise ConfigurationError(f"{name} must be a number, got {raw!r}") from exc

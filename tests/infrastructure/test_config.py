"""Tests for environment-driven settings and logging setup."""

import logging
from pathlib import Path

import pytest

from livepay.domain.exceptions import ConfigurationError
from livepay.infrastructure.config import DEFAULT_DATA_DIR, Settings
from livepay.infrastructure.logging_config import configure_logging

SECRET = {"LIVEPAY_WEBHOOK_SECRET": "s3cret"}


class TestSettings:

    def test_defaults(self):
        settings = Settings.from_env(SECRET)
        assert settings.webhook_secret == "s3cret"
        assert settings.data_dir == DEFAULT_DATA_DIR
        assert settings.sweep_interval_seconds == 30.0
        assert settings.default_reservation_minutes == 15
        assert settings.log_level == "INFO"

    def test_overrides(self, tmp_path):
        settings = Settings.from_env(
            {
                **SECRET,
                "LIVEPAY_DATA_DIR": str(tmp_path),
                "LIVEPAY_SWEEP_INTERVAL_SECONDS": "5",
                "LIVEPAY_DEFAULT_RESERVATION_MINUTES": "1440",
                "LIVEPAY_LOG_LEVEL": "debug",
            }
        )
        assert settings.data_dir == Path(tmp_path)
        assert settings.sweep_interval_seconds == 5.0
        assert settings.default_reservation_minutes == 1440
        assert settings.log_level == "DEBUG"

    @pytest.mark.parametrize("env", [{}, {"LIVEPAY_WEBHOOK_SECRET": ""},
                                     {"LIVEPAY_WEBHOOK_SECRET": "   "}])
    def test_webhook_secret_is_required(self, env):
        with pytest.raises(ConfigurationError, match="LIVEPAY_WEBHOOK_SECRET"):
            Settings.from_env(env)

    @pytest.mark.parametrize(
        "env",
        [
            {"LIVEPAY_SWEEP_INTERVAL_SECONDS": "soon"},
            {"LIVEPAY_SWEEP_INTERVAL_SECONDS": "0"},
            {"LIVEPAY_DEFAULT_RESERVATION_MINUTES": "1.5"},
            {"LIVEPAY_DEFAULT_RESERVATION_MINUTES": "-1"},
            {"LIVEPAY_DEFAULT_RESERVATION_MINUTES": "0"},
            {"LIVEPAY_DEFAULT_RESERVATION_MINUTES": "1441"},
        ],
    )
    def test_invalid_values(self, env):
        with pytest.raises(ConfigurationError):
            Settings.from_env({**SECRET, **env})


def test_configure_logging_sets_root_level():
    configure_logging("warning")
    assert logging.getLogger().level == logging.WARNING
    configure_logging("INFO")

"""Tests for settings and logging configuration."""

import pytest

from flowershop.infrastructure.config import DEFAULT_DATABASE_URL, Settings
from flowershop.infrastructure.logging import get_log_level


class TestSettings:

    def test_defaults(self, monkeypatch):
        for name in (
            "FLOWERSHOP_DATABASE_URL",
            "FLOWERSHOP_DB_TIMEOUT",
            "FLOWERSHOP_PLACE_ORDER_RETRIES",
            "FLOWERSHOP_ENV",
            "FLOWERSHOP_DEBUG",
            "LOG_LEVEL",
        ):
            monkeypatch.delenv(name, raising=False)
        monkeypatch.setattr("flowershop.infrastructure.config.load_dotenv", lambda: None)

        cfg = Settings.from_env()
        assert cfg.database_url == DEFAULT_DATABASE_URL
        assert cfg.place_order_retries == 3
        assert cfg.environment == "development"
        assert not cfg.debug

    def test_from_environment(self, monkeypatch):
        monkeypatch.setenv("FLOWERSHOP_DATABASE_URL", "sqlite:///tmp/x.db")
        monkeypatch.setenv("FLOWERSHOP_DB_TIMEOUT", "2.5")
        monkeypatch.setenv("FLOWERSHOP_PLACE_ORDER_RETRIES", "7")
        monkeypatch.setenv("FLOWERSHOP_ENV", "Production")
        monkeypatch.setenv("FLOWERSHOP_DEBUG", "yes")
        monkeypatch.setenv("LOG_LEVEL", "error")

        cfg = Settings.from_env()
        assert cfg.database_url == "sqlite:///tmp/x.db"
        assert cfg.db_timeout == 2.5
        assert cfg.place_order_retries == 7
        assert cfg.environment == "production"
        assert cfg.debug
        assert cfg.log_level == "error"


class TestLogLevel:

    @pytest.mark.parametrize(
        "environment, expected",
        [("production", "INFO"), ("development", "DEBUG"), ("test", "WARNING"), ("qa", "INFO")],
    )
    def test_level_by_environment(self, environment, expected):
        assert get_log_level(environment) == expected

    def test_override_wins(self):
        assert get_log_level("production", "debug") == "DEBUG"

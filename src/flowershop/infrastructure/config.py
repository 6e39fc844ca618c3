"""Runtime settings read from the environment (and a ``.env`` file if present)."""

from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

DEFAULT_DATABASE_URL = "sqlite:///data/flowershop.db"


def _env_flag(name: str) -> bool:
    return os.getenv(name, "").strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class Settings:
    database_url: str = DEFAULT_DATABASE_URL
    db_timeout: float = 30.0
    place_order_retries: int = 3
    environment: str = "development"
    debug: bool = False
    log_level: str | None = None

    @staticmethod
    def from_env() -> Settings:
        """Build settings from ``FLOWERSHOP_*`` environment variables."""
        load_dotenv()
        return Settings(
            database_url=os.getenv("FLOWERSHOP_DATABASE_URL", DEFAULT_DATABASE_URL),
            db_timeout=float(os.getenv("FLOWERSHOP_DB_TIMEOUT", "30")),
            place_order_retries=int(os.getenv("FLOWERSHOP_PLACE_ORDER_RETRIES", "3")),
            environment=os.getenv("FLOWERSHOP_ENV", "development").lower(),
            debug=_env_flag("FLOWERSHOP_DEBUG"),
            log_level=os.getenv("LOG_LEVEL") or None,
        )

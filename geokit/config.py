"""Centralised settings for the GeoKit scanner.

All runtime configuration is resolved here in one place.  Values can be
overridden via environment variables or a `.env` file in the project root
(loaded automatically when this module is imported).
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

# Load .env from the project root (one level up from this package)
_env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(_env_path, override=False)


@dataclass
class Settings:
    # ------------------------------------------------------------------
    # Fetcher
    # ------------------------------------------------------------------
    fetch_timeout: float = field(
        default_factory=lambda: float(os.environ.get("GEOKIT_FETCH_TIMEOUT", "10.0"))
    )
    user_agent: str = field(
        default_factory=lambda: os.environ.get(
            "GEOKIT_USER_AGENT",
            "Mozilla/5.0 (compatible; GeoKitBot/1.0; +https://geokit.dev/bot)",
        )
    )
    accept_language: str = field(
        default_factory=lambda: os.environ.get("GEOKIT_ACCEPT_LANGUAGE", "en-US,en;q=0.5")
    )

    # ------------------------------------------------------------------
    # Analysis
    # ------------------------------------------------------------------
    analyzer_workers: int = field(
        default_factory=lambda: int(os.environ.get("GEOKIT_ANALYZER_WORKERS", "4"))
    )

    # ------------------------------------------------------------------
    # Logging
    # ------------------------------------------------------------------
    log_level: str = field(
        default_factory=lambda: os.environ.get("GEOKIT_LOG_LEVEL", "INFO").upper()
    )


# Module-level singleton, import this everywhere:
#   from geokit.config import settings
settings = Settings()

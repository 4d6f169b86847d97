"""Centralised settings for the stock crawler.

All runtime configuration is resolved here in one place.  Values can be
overridden via environment variables or a `.env` file in the project root
(loaded automatically when this module is imported).
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

# Load .env from the project root (two levels up from this file)
_env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(_env_path, override=False)


def _env_flag(name: str, default: str) -> bool:
    return os.environ.get(name, default).strip().lower() in ("1", "true", "yes", "on")


@dataclass
class Settings:
    # ------------------------------------------------------------------
    # Target site
    # ------------------------------------------------------------------
    base_url: str = field(
        default_factory=lambda: os.environ.get(
            "STOCKCRAWL_BASE_URL", "http://www.finanzen.net"
        )
    )
    search_path: str = "aktien/aktien_suche.asp"

    @property
    def search_url(self) -> str:
        """Absolute URL of the stock search form."""
        return f"{self.base_url.rstrip('/')}/{self.search_path}"

    # ------------------------------------------------------------------
    # Output
    # ------------------------------------------------------------------
    drop_box_dir: Path = field(
        default_factory=lambda: Path(
            os.environ.get("STOCKCRAWL_DROP_BOX", "vendor/mount")
        )
    )

    # ------------------------------------------------------------------
    # HTTP
    # ------------------------------------------------------------------
    request_timeout: float = field(
        default_factory=lambda: float(os.environ.get("REQUEST_TIMEOUT", "30.0"))
    )
    user_agent: str = field(
        default_factory=lambda: os.environ.get(
            "STOCKCRAWL_USER_AGENT",
            "Mozilla/5.0 (compatible; stockcrawl/1.0)",
        )
    )

    # ------------------------------------------------------------------
    # Crawl engine
    # ------------------------------------------------------------------
    max_workers: int = field(
        default_factory=lambda: int(os.environ.get("STOCKCRAWL_MAX_WORKERS", "8"))
    )
    escape_urls: bool = field(
        default_factory=lambda: _env_flag("STOCKCRAWL_ESCAPE_URLS", "true")
    )


# Module-level singleton — import this everywhere:
#   from stockcrawl.config import settings
settings = Settings()

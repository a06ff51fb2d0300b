"""Centralised settings for the Catechism reader.

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


def _optional_float(name: str) -> float | None:
    value = os.environ.get(name)
    if value is None or value.strip() == "":
        return None
    return float(value)


@dataclass
class Settings:
    # ------------------------------------------------------------------
    # Source document
    # ------------------------------------------------------------------
    base_url: str = field(
        default_factory=lambda: os.environ.get("CATECHISM_BASE_URL", "https://www.vatican.va")
    )
    archive_root: str = field(
        default_factory=lambda: os.environ.get("CATECHISM_ARCHIVE_ROOT", "/archive/ENG0015")
    )
    first_page: str = field(
        default_factory=lambda: os.environ.get("CATECHISM_FIRST_PAGE", "/__P2.HTM")
    )

    # ------------------------------------------------------------------
    # Local storage
    # ------------------------------------------------------------------
    cache_dir: Path = field(
        default_factory=lambda: Path(os.environ.get("CATECHISM_CACHE_DIR", "cache"))
    )
    state_dir: Path = field(
        default_factory=lambda: Path(
            os.environ.get("CATECHISM_STATE_DIR", Path.home() / ".catechism")
        )
    )

    @property
    def position_path(self) -> Path:
        """Absolute path to the reading-position JSON file."""
        return self.state_dir / "position.json"

    # ------------------------------------------------------------------
    # HTTP
    # ------------------------------------------------------------------
    # None means no timeout: a hung server blocks the crawl.
    request_timeout: float | None = field(
        default_factory=lambda: _optional_float("REQUEST_TIMEOUT")
    )

    def first_page_url(self) -> str:
        """Resolve :attr:`first_page` against the archive root."""
        from catechism.scraper.urls import resolve_url

        return resolve_url(self.first_page, base_url=self.base_url, archive_root=self.archive_root)

    def ensure_cache_dir(self) -> None:
        """Create the cache directory if it does not exist."""
        self.cache_dir.mkdir(parents=True, exist_ok=True)


# Module-level singleton — import this everywhere:
#   from catechism.config import settings
settings = Settings()

"""Centralised settings for the heritage enricher.

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
    return os.environ.get(name, default).strip().lower() in {"1", "true", "yes", "on"}


@dataclass
class Settings:
    # ------------------------------------------------------------------
    # Search (discovery)
    # ------------------------------------------------------------------
    search_provider: str = field(
        default_factory=lambda: os.environ.get("SEARCH_PROVIDER", "google")
    )
    google_cx: str = field(default_factory=lambda: os.environ.get("CX", ""))
    google_api_key: str = field(default_factory=lambda: os.environ.get("API_KEY", ""))
    search_timeout: float = field(
        default_factory=lambda: float(os.environ.get("SEARCH_TIMEOUT", "10.0"))
    )

    # ------------------------------------------------------------------
    # Fetcher
    # ------------------------------------------------------------------
    request_timeout: float = field(
        default_factory=lambda: float(os.environ.get("REQUEST_TIMEOUT", "30.0"))
    )
    render_timeout: float = field(
        default_factory=lambda: float(os.environ.get("RENDER_TIMEOUT", "30.0"))
    )
    headless: bool = field(default_factory=lambda: _env_flag("HEADLESS", "true"))

    # ------------------------------------------------------------------
    # Pipeline
    # ------------------------------------------------------------------
    pacing_delay: float = field(
        default_factory=lambda: float(os.environ.get("PACING_DELAY", "3.0"))
    )
    site_type: str = field(
        default_factory=lambda: os.environ.get("SITE_TYPE", "encykorea")
    )

    # ------------------------------------------------------------------
    # Dataset
    # ------------------------------------------------------------------
    input_path: Path = field(
        default_factory=lambda: Path(
            os.environ.get("INPUT_PATH", "./modified_heritage_site_list.xlsx")
        )
    )
    output_path: Path = field(
        default_factory=lambda: Path(
            os.environ.get("OUTPUT_PATH", "./heritage_google_results.xlsx")
        )
    )
    name_field: str = field(default_factory=lambda: os.environ.get("NAME_FIELD", "POI_NM"))
    location_field: str = field(
        default_factory=lambda: os.environ.get("LOCATION_FIELD", "SIGNGU_NM")
    )


# Module-level singleton, import this everywhere:
#   from heritage.config import settings
settings = Settings()

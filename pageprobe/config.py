"""Centralised settings for PageProbe.

All runtime configuration is resolved here in one place.  Values can be
overridden via environment variables or a `.env` file in the project root
(loaded automatically when this module is imported).
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict

from dotenv import load_dotenv

# Load .env from the project root (one level up from this package)
_env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(_env_path, override=False)

USER_AGENT = "Mozilla/5.0 (compatible; PageProbe/1.0)"
ACCEPT = "application/json, text/html, */*"


@dataclass
class Settings:
    # ------------------------------------------------------------------
    # API credentials (attached as static headers, never negotiated)
    # ------------------------------------------------------------------
    api_auth_token: str = field(
        default_factory=lambda: os.environ.get("API_AUTH_TOKEN", "")
    )
    api_org_id: str = field(
        default_factory=lambda: os.environ.get("API_ORG_ID", "")
    )

    # ------------------------------------------------------------------
    # HTTP
    # ------------------------------------------------------------------
    request_timeout: float = field(
        default_factory=lambda: float(os.environ.get("REQUEST_TIMEOUT", "30.0"))
    )

    # ------------------------------------------------------------------
    # Output limits
    # ------------------------------------------------------------------
    max_links: int = field(
        default_factory=lambda: int(os.environ.get("MAX_LINKS", "10"))
    )
    max_link_text: int = field(
        default_factory=lambda: int(os.environ.get("MAX_LINK_TEXT", "100"))
    )
    max_description: int = field(
        default_factory=lambda: int(os.environ.get("MAX_DESCRIPTION", "120"))
    )
    url_display_width: int = field(
        default_factory=lambda: int(os.environ.get("URL_DISPLAY_WIDTH", "50"))
    )
    json_render_budget: int = field(
        default_factory=lambda: int(os.environ.get("JSON_RENDER_BUDGET", "2000"))
    )
    raw_preview_budget: int = field(
        default_factory=lambda: int(os.environ.get("RAW_PREVIEW_BUDGET", "1000"))
    )
    # "placeholder" keeps anchors with no visible text, "skip" drops them.
    empty_link_text: str = field(
        default_factory=lambda: os.environ.get("EMPTY_LINK_TEXT", "placeholder").lower()
    )

    def request_headers(self) -> Dict[str, str]:
        """Return the headers sent with every request."""
        headers = {"User-Agent": USER_AGENT, "Accept": ACCEPT}
        if self.api_auth_token:
            headers["Authorization"] = f"OAuth {self.api_auth_token}"
        if self.api_org_id:
            headers["X-Org-Id"] = self.api_org_id
        return headers


# Module-level singleton — import this everywhere:
#   from pageprobe.config import settings
settings = Settings()

"""Pick an extraction branch from a ``Content-Type`` header."""

from __future__ import annotations

from typing import Optional

from pageprobe.scraper.models import Branch


def classify(content_type: Optional[str]) -> Branch:
    """Return the :class:`Branch` for *content_type*; missing types are generic."""
    lowered = (content_type or "").lower()
    if "application/json" in lowered:
        return Branch.JSON
    if "text/html" in lowered:
        return Branch.HTML
    return Branch.GENERIC

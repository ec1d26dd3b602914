"""Fallback branch for content types the tool does not understand."""

from __future__ import annotations

from typing import Optional

from pageprobe.scraper.models import ExtractionLimits, RawPreview
from pageprobe.scraper.text import decode_body


def extract_generic(
    body: bytes, content_type: str, limits: Optional[ExtractionLimits] = None
) -> RawPreview:
    """Return at most ``limits.raw_preview_budget`` characters of *body*."""
    limits = limits or ExtractionLimits()
    text = decode_body(body, content_type)
    budget = limits.raw_preview_budget
    return RawPreview(
        content_type=content_type,
        preview_text=text[:budget],
        total_length=len(text),
        truncated=len(text) > budget,
    )

"""Classify a response and hand it to the matching extractor.

    classify → extract (html | json | generic) → render
"""

from __future__ import annotations

import logging
from typing import Optional

from pageprobe.scraper.classifier import classify
from pageprobe.scraper.generic_extractor import extract_generic
from pageprobe.scraper.html_extractor import extract_html
from pageprobe.scraper.json_extractor import extract_json
from pageprobe.scraper.models import (
    Branch,
    ExtractionLimits,
    ExtractionResult,
    FetchedResponse,
)
from pageprobe.scraper.rendering import render_json, render_text

logger = logging.getLogger(__name__)

OUTPUT_FORMATS = ("text", "json")


def extract(
    content_type: str,
    body: bytes,
    base_url: str,
    limits: Optional[ExtractionLimits] = None,
) -> ExtractionResult:
    """Run the extractor chosen by *content_type* over *body*."""
    limits = limits or ExtractionLimits()
    branch = classify(content_type)
    logger.debug("Content-Type %r → %s branch", content_type, branch.value)

    if branch is Branch.JSON:
        return extract_json(body, content_type, limits)
    if branch is Branch.HTML:
        return extract_html(body, base_url, limits, content_type)
    return extract_generic(body, content_type or "", limits)


def classify_and_render(
    content_type: str,
    body: bytes,
    base_url: str,
    limits: Optional[ExtractionLimits] = None,
) -> str:
    """Return the plain-text summary of one response body."""
    limits = limits or ExtractionLimits()
    return render_text(extract(content_type, body, base_url, limits), limits)


def summarize(
    response: FetchedResponse,
    limits: Optional[ExtractionLimits] = None,
    output_format: str = "text",
) -> str:
    """Render *response* in ``text`` or ``json`` form.

    Raises:
        ValueError: If *output_format* is not one of :data:`OUTPUT_FORMATS`.
    """
    if output_format not in OUTPUT_FORMATS:
        raise ValueError(f"Unknown output format {output_format!r}")
    limits = limits or ExtractionLimits()
    result = extract(response.content_type, response.body, response.base_url, limits)
    if output_format == "json":
        return render_json(result)
    return render_text(result, limits)

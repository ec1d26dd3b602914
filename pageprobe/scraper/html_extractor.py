"""HTML branch: title, description, link inventory and element counts."""

from __future__ import annotations

import logging
from typing import Optional

from bs4 import BeautifulSoup, Tag

from pageprobe.scraper.models import (
    EMPTY_LINK_SKIP,
    ExtractionLimits,
    LinkEntry,
    PageSummary,
)
from pageprobe.scraper.text import collapse_whitespace, declared_charset, truncate
from pageprobe.scraper.urls import resolve

logger = logging.getLogger(__name__)

NO_TEXT_PLACEHOLDER = "[no text]"

# Anchors pointing at these are not navigation.
_SKIPPED_HREF_PREFIXES = ("#", "javascript:", "mailto:")


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _extract_title(soup: BeautifulSoup) -> Optional[str]:
    """Return the trimmed text of the first ``<title>``, or ``None``."""
    tag = soup.find("title")
    if tag is None:
        return None
    title = tag.get_text().strip()
    return title or None


def _extract_description(soup: BeautifulSoup) -> Optional[str]:
    """Return the first non-blank ``<meta name="description">`` content."""
    for meta in soup.find_all("meta", attrs={"name": "description"}):
        content = meta.get("content")
        if content is not None and content.strip():
            return content.strip()
    return None


def _link_entry(
    anchor: Tag, base_url: str, limits: ExtractionLimits
) -> Optional[LinkEntry]:
    """Build a :class:`LinkEntry` for *anchor*, or ``None`` if it is skipped."""
    href = anchor.get("href")
    if href is None:
        return None
    if isinstance(href, list):
        href = " ".join(href)
    href = href.strip()

    text = anchor.get_text().strip()
    if len(text) > limits.max_link_text:
        logger.debug("Skipping anchor with %d chars of text", len(text))
        return None

    if href.startswith(_SKIPPED_HREF_PREFIXES):
        return None

    text = collapse_whitespace(text)
    if not text:
        if limits.empty_link_text == EMPTY_LINK_SKIP:
            return None
        text = NO_TEXT_PLACEHOLDER

    return LinkEntry(display_text=text, absolute_url=resolve(href, base_url))


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def extract_html(
    body: bytes,
    base_url: str,
    limits: Optional[ExtractionLimits] = None,
    content_type: str = "",
) -> PageSummary:
    """Summarise an HTML document.

    Links are collected in document order until ``limits.max_links`` is
    reached; every count (including ``total_link_count``) covers the whole
    document regardless of that cap.  The description is cut to
    ``limits.max_description`` characters.  A charset declared in
    *content_type* overrides the parser's own encoding detection.
    """
    limits = limits or ExtractionLimits()
    soup = BeautifulSoup(
        body, "html.parser", from_encoding=declared_charset(content_type)
    )

    description = _extract_description(soup)
    if description is not None:
        description = truncate(description, limits.max_description)

    anchors = soup.find_all("a")
    links: list[LinkEntry] = []
    for anchor in anchors:
        if len(links) >= limits.max_links:
            break
        entry = _link_entry(anchor, base_url, limits)
        if entry is not None:
            links.append(entry)

    return PageSummary(
        title=_extract_title(soup),
        description=description,
        links=links,
        h1_count=len(soup.find_all("h1")),
        h2_count=len(soup.find_all("h2")),
        paragraph_count=len(soup.find_all("p")),
        image_count=len(soup.find_all("img")),
        total_link_count=len(anchors),
    )

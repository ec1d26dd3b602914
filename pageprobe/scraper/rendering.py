"""Turn extraction results into terminal text (or JSON)."""

from __future__ import annotations

import json
from dataclasses import asdict
from typing import List, Optional

from pageprobe.scraper.json_extractor import clean_content
from pageprobe.scraper.models import (
    ExtractionLimits,
    ExtractionResult,
    GenericJSONView,
    PageSummary,
    RawPreview,
    StructuredPage,
    UndecodableJSON,
)
from pageprobe.scraper.text import shorten

TRUNCATION_MARKER = "... [output truncated]"
TITLE_PLACEHOLDER = "(not found)"

_HEAVY_RULE = "=" * 60
_RULE = "-" * 60
_SHORT_RULE = "-" * 40

_KINDS = {
    PageSummary: "html",
    StructuredPage: "page",
    GenericJSONView: "json",
    UndecodableJSON: "json_error",
    RawPreview: "raw",
}


# ---------------------------------------------------------------------------
# Per-branch renderers
# ---------------------------------------------------------------------------

def _render_page_summary(summary: PageSummary, limits: ExtractionLimits) -> List[str]:
    lines = ["🌐 HTML page:", _HEAVY_RULE]
    lines.append(f"📄 Title: {summary.title or TITLE_PLACEHOLDER}")
    if summary.description:
        lines.append(f"📝 Description: {summary.description}")

    lines += ["", f"🔗 Links on page (first {limits.max_links}):", _RULE]
    for number, link in enumerate(summary.links, start=1):
        lines.append(f"{number:2d}. {link.display_text}")
        lines.append(f"    {shorten(link.absolute_url, limits.url_display_width)}")
    if not summary.links:
        lines.append("No links found")

    lines += [
        "",
        "📊 Statistics:",
        f"  • H1 headings: {summary.h1_count}",
        f"  • H2 headings: {summary.h2_count}",
        f"  • Paragraphs: {summary.paragraph_count}",
        f"  • Images: {summary.image_count}",
        f"  • Total links: {summary.total_link_count}",
    ]
    return lines


def _render_structured_page(page: StructuredPage) -> List[str]:
    lines = [
        "📋 JSON response:",
        _HEAVY_RULE,
        f"🆔 ID: {page.id}",
        f"🔗 Slug: {page.slug}",
        f"📝 Title: {page.title}",
        f"📄 Page type: {page.page_type}",
    ]
    if page.content:
        lines += ["", "📖 Content:", _RULE]
        for number, line in enumerate(clean_content(page.content), start=1):
            lines.append(f"{number:3d}: {line}")
    return lines


def _render_generic_json(view: GenericJSONView, limits: ExtractionLimits) -> List[str]:
    lines = ["📋 JSON response:", _HEAVY_RULE]
    if view.truncated:
        lines.append(f"📄 JSON (first {limits.json_render_budget} characters):")
    else:
        lines.append("📄 JSON:")
    lines += [_RULE, view.rendered]
    if view.truncated:
        lines.append(TRUNCATION_MARKER)

    if view.keys is not None:
        lines += ["", "🔑 Available fields:"]
        lines += [f"  • {key}" for key in view.keys]
    return lines


def _render_undecodable(result: UndecodableJSON) -> List[str]:
    return [
        "📋 JSON response:",
        _HEAVY_RULE,
        f"❌ JSON parse error: {result.error}",
        "",
        "📄 Raw response:",
        _RULE,
        result.raw_text,
    ]


def _render_raw_preview(preview: RawPreview) -> List[str]:
    lines = [f"⚠️  Unknown content type: {preview.content_type or '(none)'}", _RULE]
    if preview.truncated:
        lines.append(
            f"📄 Preview (first {len(preview.preview_text)} of "
            f"{preview.total_length} characters):"
        )
        lines += [_SHORT_RULE, preview.preview_text, "", TRUNCATION_MARKER]
    else:
        lines.append(f"📄 Content ({preview.total_length} characters):")
        lines += [_SHORT_RULE, preview.preview_text]
    return lines


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def render_text(
    result: ExtractionResult, limits: Optional[ExtractionLimits] = None
) -> str:
    """Render *result* as labelled plain text for the terminal."""
    limits = limits or ExtractionLimits()
    if isinstance(result, PageSummary):
        lines = _render_page_summary(result, limits)
    elif isinstance(result, StructuredPage):
        lines = _render_structured_page(result)
    elif isinstance(result, GenericJSONView):
        lines = _render_generic_json(result, limits)
    elif isinstance(result, UndecodableJSON):
        lines = _render_undecodable(result)
    elif isinstance(result, RawPreview):
        lines = _render_raw_preview(result)
    else:
        raise TypeError(f"Cannot render {type(result).__name__}")
    return "\n".join(lines)


def render_json(result: ExtractionResult) -> str:
    """Render *result* as a JSON document tagged with its ``kind``."""
    payload = {"kind": _KINDS[type(result)]}
    payload.update(asdict(result))
    return json.dumps(payload, indent=2, ensure_ascii=False)

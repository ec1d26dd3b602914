"""JSON branch: recognise wiki page objects, pretty-print everything else."""

from __future__ import annotations

import json
import logging
from typing import Any, List, Optional, Union

from pageprobe.scraper.models import (
    ExtractionLimits,
    GenericJSONView,
    StructuredPage,
    UndecodableJSON,
)
from pageprobe.scraper.text import decode_body

logger = logging.getLogger(__name__)

_PAGE_TEXT_FIELDS = ("slug", "title", "content", "page_type")

JSONResult = Union[StructuredPage, GenericJSONView, UndecodableJSON]


def _reject_constant(name: str) -> Any:
    """Refuse ``NaN`` and ``Infinity``, which are not JSON."""
    raise ValueError(f"Invalid JSON constant {name!r}")


def _as_structured_page(value: Any) -> Optional[StructuredPage]:
    """Return a :class:`StructuredPage` if *value* has the page shape.

    ``id`` must be a non-zero integer: zero means "no id" for the pages API.
    The text fields may be missing or ``null`` but never another type.
    """
    if not isinstance(value, dict):
        return None
    page_id = value.get("id")
    if isinstance(page_id, bool) or not isinstance(page_id, int) or page_id == 0:
        return None

    fields = {}
    for name in _PAGE_TEXT_FIELDS:
        field_value = value.get(name)
        if field_value is None:
            field_value = ""
        if not isinstance(field_value, str):
            return None
        fields[name] = field_value
    return StructuredPage(id=page_id, **fields)


def clean_content(content: str) -> List[str]:
    """Strip light markdown from *content* and return its non-blank lines."""
    content = content.replace("**", "").replace("#", "").replace("&nbsp;", " ")
    return [line.strip() for line in content.split("\n") if line.strip()]


def extract_json(
    body: bytes, content_type: str = "", limits: Optional[ExtractionLimits] = None
) -> JSONResult:
    """Decode *body* and pick the most specific view of it.

    Undecodable bodies are returned verbatim inside :class:`UndecodableJSON`
    rather than raising.
    """
    limits = limits or ExtractionLimits()
    text = decode_body(body, content_type)

    try:
        value = json.loads(text, parse_constant=_reject_constant)
    except (ValueError, RecursionError) as exc:
        logger.debug("JSON decode failed: %s", exc)
        return UndecodableJSON(error=str(exc), raw_text=text)

    page = _as_structured_page(value)
    if page is not None:
        return page

    rendered = json.dumps(value, indent=2, ensure_ascii=False)
    truncated = len(rendered) > limits.json_render_budget
    if truncated:
        rendered = rendered[: limits.json_render_budget]

    keys = list(value.keys()) if isinstance(value, dict) else None
    return GenericJSONView(rendered=rendered, truncated=truncated, keys=keys)

"""Text helpers shared by every extractor."""

from __future__ import annotations

import codecs
import re
from typing import Optional

ELLIPSIS = "..."

_CHARSET_RE = re.compile(r"charset=[\"']?([^\s;\"']+)", re.IGNORECASE)


def collapse_whitespace(text: str) -> str:
    """Trim *text*, turn newlines and tabs into spaces, squeeze runs of spaces."""
    text = text.strip()
    text = text.replace("\r", " ").replace("\n", " ").replace("\t", " ")
    while "  " in text:
        text = text.replace("  ", " ")
    return text


def truncate(text: str, max_len: int) -> str:
    """Return *text* unchanged if it fits in *max_len*, else cut it and add ``...``."""
    if len(text) <= max_len:
        return text
    return text[:max_len] + ELLIPSIS


def shorten(text: str, width: int) -> str:
    """Fit *text* into *width* characters, ellipsis included."""
    if len(text) <= width:
        return text
    return text[: max(width - len(ELLIPSIS), 0)] + ELLIPSIS


def declared_charset(content_type: str) -> Optional[str]:
    """Return the known ``charset=`` of a content type, or ``None``."""
    match = _CHARSET_RE.search(content_type or "")
    if not match:
        return None
    name = match.group(1).lower()
    try:
        codecs.lookup(name)
    except LookupError:
        return None
    return name


def charset_of(content_type: str) -> str:
    """Return the ``charset=`` of a content type, or ``utf-8``."""
    return declared_charset(content_type) or "utf-8"


def decode_body(body: bytes, content_type: str = "") -> str:
    """Decode *body* without ever raising; undecodable bytes become U+FFFD."""
    charset = charset_of(content_type)
    if codecs.lookup(charset).name == "utf-8":
        # Drops a leading BOM, which json.loads refuses.
        charset = "utf-8-sig"
    return body.decode(charset, errors="replace")

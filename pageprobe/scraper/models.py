"""Data models for the fetch → classify → extract pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Union

from pageprobe.config import Settings, settings as default_settings

EMPTY_LINK_PLACEHOLDER = "placeholder"
EMPTY_LINK_SKIP = "skip"


class Branch(str, Enum):
    """Extraction branch selected from a response's content type."""

    HTML = "html"
    JSON = "json"
    GENERIC = "generic"


@dataclass(frozen=True)
class ExtractionLimits:
    """Every size cap applied by the extractors.

    Defaults mirror the environment-driven :class:`~pageprobe.config.Settings`;
    tests construct their own instances to probe boundary values.
    """

    max_links: int = 10
    max_link_text: int = 100
    max_description: int = 120
    url_display_width: int = 50
    json_render_budget: int = 2000
    raw_preview_budget: int = 1000
    empty_link_text: str = EMPTY_LINK_PLACEHOLDER

    @classmethod
    def from_settings(cls, cfg: Optional[Settings] = None) -> ExtractionLimits:
        cfg = cfg or default_settings
        return cls(
            max_links=cfg.max_links,
            max_link_text=cfg.max_link_text,
            max_description=cfg.max_description,
            url_display_width=cfg.url_display_width,
            json_render_budget=cfg.json_render_budget,
            raw_preview_budget=cfg.raw_preview_budget,
            empty_link_text=cfg.empty_link_text,
        )


@dataclass(frozen=True)
class FetchedResponse:
    """A single HTTP response, as handed to the extraction pipeline."""

    base_url: str
    content_type: str
    body: bytes
    status_code: int = 200
    reason_phrase: str = ""
    elapsed: float = 0.0
    content_length: Optional[int] = None


@dataclass
class LinkEntry:
    """One navigational anchor; ``absolute_url`` is shortened only when shown."""

    display_text: str
    absolute_url: str


@dataclass
class PageSummary:
    """What the HTML branch learns about a page."""

    title: Optional[str]
    description: Optional[str]
    links: List[LinkEntry] = field(default_factory=list)
    h1_count: int = 0
    h2_count: int = 0
    paragraph_count: int = 0
    image_count: int = 0
    total_link_count: int = 0


@dataclass
class StructuredPage:
    """A wiki-style page object returned by a JSON API."""

    id: int
    slug: str = ""
    title: str = ""
    content: str = ""
    page_type: str = ""


@dataclass
class GenericJSONView:
    """Pretty-printed JSON of arbitrary shape, already cut to budget."""

    rendered: str
    truncated: bool = False
    keys: Optional[List[str]] = None


@dataclass
class UndecodableJSON:
    """A body that claimed to be JSON but could not be decoded."""

    error: str
    raw_text: str


@dataclass
class RawPreview:
    """Bounded preview of a body the tool does not understand."""

    content_type: str
    preview_text: str
    total_length: int
    truncated: bool = False


ExtractionResult = Union[
    PageSummary, StructuredPage, GenericJSONView, UndecodableJSON, RawPreview
]

"""Scraper package — fetch a URL, classify the response, extract a summary."""

from pageprobe.scraper.classifier import classify
from pageprobe.scraper.fetcher import fetch_url
from pageprobe.scraper.models import (
    Branch,
    ExtractionLimits,
    FetchedResponse,
    LinkEntry,
    PageSummary,
)
from pageprobe.scraper.pipeline import classify_and_render, extract, summarize

__all__ = [
    "fetch_url",
    "classify",
    "extract",
    "classify_and_render",
    "summarize",
    "Branch",
    "ExtractionLimits",
    "FetchedResponse",
    "LinkEntry",
    "PageSummary",
]

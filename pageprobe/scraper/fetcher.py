"""HTTP fetcher: one GET request, returned as a :class:`FetchedResponse`."""

from __future__ import annotations

import logging
from typing import Optional

import httpx

from pageprobe.config import Settings, settings as default_settings
from pageprobe.scraper.models import FetchedResponse

logger = logging.getLogger(__name__)


def _content_length(response: httpx.Response) -> Optional[int]:
    value = response.headers.get("Content-Length")
    if value is None:
        return None
    try:
        return int(value)
    except ValueError:
        return None


def fetch_url(url: str, cfg: Optional[Settings] = None) -> FetchedResponse:
    """Fetch *url* and return a :class:`FetchedResponse`.

    Error statuses are *not* raised: a 404 page is still worth summarising.
    The auth headers come from *cfg* (defaults to the module settings).

    Raises:
        httpx.HTTPError: On transport failures (DNS, timeout, refused, ...).
    """
    cfg = cfg or default_settings
    logger.debug("GET %s", url)

    with httpx.Client(
        headers=cfg.request_headers(),
        timeout=cfg.request_timeout,
        follow_redirects=True,
    ) as client:
        response = client.get(url)

    logger.debug("%s → HTTP %d", url, response.status_code)
    return FetchedResponse(
        base_url=str(response.url),
        content_type=response.headers.get("Content-Type", ""),
        body=response.content,
        status_code=response.status_code,
        reason_phrase=response.reason_phrase,
        elapsed=response.elapsed.total_seconds(),
        content_length=_content_length(response),
    )

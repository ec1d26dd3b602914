"""Tests for the fetch → classify → render pipeline.

Mocking strategy:
- ``respx`` patches ``httpx`` at the transport layer so no real network calls
  are made during ``fetch_url`` tests.
- Rendering tests call ``classify_and_render`` directly with literal bodies;
  it is the boundary the CLI prints from.
"""

from __future__ import annotations

import json

import httpx
import pytest
import respx

from pageprobe.config import Settings
from pageprobe.scraper.fetcher import fetch_url
from pageprobe.scraper.models import ExtractionLimits, FetchedResponse
from pageprobe.scraper.pipeline import classify_and_render, extract, summarize
from pageprobe.scraper.rendering import TITLE_PLACEHOLDER, TRUNCATION_MARKER


# ---------------------------------------------------------------------------
# Fixtures / constants
# ---------------------------------------------------------------------------

_SIMPLE_HTML = """\
<!DOCTYPE html>
<html>
<head>
  <title>Test Page</title>
  <meta name="description" content="A page used in tests.">
</head>
<body>
  <h1>Heading</h1>
  <p>Paragraph.</p>
  <a href="/page1">Link 1</a>
  <a href="https://example.com/a/very/long/path/that/will/not/fit/on/one/line">Long</a>
  <a href="#fragment">Fragment (excluded)</a>
</body>
</html>
"""


@pytest.fixture
def anon_settings() -> Settings:
    return Settings(api_auth_token="", api_org_id="", request_timeout=5.0)


# ---------------------------------------------------------------------------
# fetch_url tests
# ---------------------------------------------------------------------------

class TestFetchUrl:
    def test_successful_fetch_returns_response(self, anon_settings) -> None:
        with respx.mock:
            respx.get("https://example.com/article").mock(
                return_value=httpx.Response(
                    200,
                    headers={"Content-Type": "text/html; charset=utf-8"},
                    text=_SIMPLE_HTML,
                )
            )
            fetched = fetch_url("https://example.com/article", anon_settings)

        assert isinstance(fetched, FetchedResponse)
        assert fetched.base_url == "https://example.com/article"
        assert fetched.status_code == 200
        assert fetched.content_type == "text/html; charset=utf-8"
        assert fetched.content_length == len(_SIMPLE_HTML.encode())
        assert b"<title>Test Page</title>" in fetched.body

    def test_error_status_is_not_raised(self, anon_settings) -> None:
        """A 404 page is returned like any other response."""
        with respx.mock:
            respx.get("https://example.com/missing").mock(
                return_value=httpx.Response(404, text="Not Found")
            )
            fetched = fetch_url("https://example.com/missing", anon_settings)

        assert fetched.status_code == 404
        assert fetched.reason_phrase == "Not Found"
        assert fetched.body == b"Not Found"

    def test_transport_error_raises(self, anon_settings) -> None:
        with respx.mock:
            respx.get("https://down.example.com/").mock(
                side_effect=httpx.ConnectError("connection refused")
            )
            with pytest.raises(httpx.HTTPError):
                fetch_url("https://down.example.com/", anon_settings)

    def test_base_url_follows_redirects(self, anon_settings) -> None:
        with respx.mock:
            respx.get("https://example.com/old").mock(
                return_value=httpx.Response(
                    301, headers={"Location": "https://example.com/new/"}
                )
            )
            respx.get("https://example.com/new/").mock(
                return_value=httpx.Response(200, text="moved")
            )
            fetched = fetch_url("https://example.com/old", anon_settings)

        assert fetched.base_url == "https://example.com/new/"
        assert fetched.body == b"moved"

    def test_static_headers_sent(self) -> None:
        cfg = Settings(api_auth_token="tok", api_org_id="org-1")
        with respx.mock:
            route = respx.get("https://api.example.com/v1/pages").mock(
                return_value=httpx.Response(200, json={"id": 1})
            )
            fetch_url("https://api.example.com/v1/pages", cfg)

        request = route.calls.last.request
        assert request.headers["Authorization"] == "OAuth tok"
        assert request.headers["X-Org-Id"] == "org-1"
        assert "PageProbe" in request.headers["User-Agent"]
        assert request.headers["Accept"] == "application/json, text/html, */*"

    def test_anonymous_request_has_no_auth_headers(self, anon_settings) -> None:
        with respx.mock:
            route = respx.get("https://example.com/").mock(
                return_value=httpx.Response(200, text="ok")
            )
            fetch_url("https://example.com/", anon_settings)

        request = route.calls.last.request
        assert "Authorization" not in request.headers
        assert "X-Org-Id" not in request.headers


# ---------------------------------------------------------------------------
# classify_and_render tests
# ---------------------------------------------------------------------------

class TestRenderHtml:
    def test_summary_sections(self) -> None:
        out = classify_and_render(
            "text/html", _SIMPLE_HTML.encode(), "https://example.com/index.html"
        )
        assert "🌐 HTML page:" in out
        assert "📄 Title: Test Page" in out
        assert "📝 Description: A page used in tests." in out
        assert " 1. Link 1\n    https://example.com/page1" in out
        assert "Fragment" not in out
        assert "  • H1 headings: 1" in out
        assert "  • Paragraphs: 1" in out
        assert "  • Total links: 3" in out

    def test_long_url_shortened_for_display(self) -> None:
        out = classify_and_render(
            "text/html", _SIMPLE_HTML.encode(), "https://example.com/"
        )
        shown = [line.strip() for line in out.splitlines() if "very/long" in line]
        assert len(shown) == 1
        assert len(shown[0]) == 50
        assert shown[0].endswith("...")

    def test_placeholders_for_empty_page(self) -> None:
        out = classify_and_render("text/html", b"<html></html>", "https://example.com")
        assert f"📄 Title: {TITLE_PLACEHOLDER}" in out
        assert "Description" not in out
        assert "No links found" in out
        assert "  • Total links: 0" in out

    def test_link_cap_in_heading(self) -> None:
        limits = ExtractionLimits(max_links=15)
        out = classify_and_render("text/html", b"<a href='x'>x</a>", "https://e.com", limits)
        assert "(first 15)" in out


class TestRenderJson:
    def test_structured_page(self) -> None:
        body = json.dumps(
            {
                "id": 42,
                "slug": "guide",
                "title": "Guide",
                "content": "# Intro\n\n**Hello**&nbsp;world\n\nBye",
                "page_type": "doc",
            }
        ).encode()
        out = classify_and_render("application/json", body, "https://api.example.com")
        assert "🆔 ID: 42" in out
        assert "🔗 Slug: guide" in out
        assert "📝 Title: Guide" in out
        assert "📄 Page type: doc" in out
        assert "  1: Intro\n  2: Hello world\n  3: Bye" in out

    def test_structured_page_without_content(self) -> None:
        body = b'{"id": 42, "slug": "s", "title": "T", "content": "", "page_type": "doc"}'
        out = classify_and_render("application/json", body, "https://api.example.com")
        assert "🆔 ID: 42" in out
        assert "Content:" not in out

    def test_zero_id_rendered_as_generic(self) -> None:
        out = classify_and_render(
            "application/json", b'{"id": 0, "slug": "x"}', "https://api.example.com"
        )
        assert "🆔" not in out
        assert "📄 JSON:" in out
        assert "🔑 Available fields:\n  • id\n  • slug" in out

    def test_large_json_truncated(self) -> None:
        body = json.dumps(list(range(3000))).encode()
        out = classify_and_render("application/json", body, "https://api.example.com")
        assert "📄 JSON (first 2000 characters):" in out
        assert out.rstrip().endswith(TRUNCATION_MARKER)
        assert "Available fields" not in out

    def test_invalid_json_dumped_verbatim(self) -> None:
        body = b"<html>oops, not json" + b"x" * 5000
        out = classify_and_render("application/json", body, "https://api.example.com")
        assert "❌ JSON parse error:" in out
        assert body.decode() in out
        assert TRUNCATION_MARKER not in out


class TestRenderGeneric:
    def test_exact_budget_not_truncated(self) -> None:
        out = classify_and_render("text/plain", b"x" * 1000, "https://e.com")
        assert TRUNCATION_MARKER not in out
        assert "📄 Content (1000 characters):" in out

    def test_over_budget_truncated(self) -> None:
        out = classify_and_render("text/plain", b"x" * 1001, "https://e.com")
        assert TRUNCATION_MARKER in out
        assert "📄 Preview (first 1000 of 1001 characters):" in out
        assert "x" * 1001 not in out

    def test_missing_content_type(self) -> None:
        out = classify_and_render("", b"data", "https://e.com")
        assert "⚠️  Unknown content type: (none)" in out


# ---------------------------------------------------------------------------
# summarize / JSON output
# ---------------------------------------------------------------------------

class TestSummarize:
    def _response(self, content_type: str, body: bytes) -> FetchedResponse:
        return FetchedResponse(
            base_url="https://example.com/", content_type=content_type, body=body
        )

    def test_json_output_for_html(self) -> None:
        out = summarize(
            self._response("text/html", _SIMPLE_HTML.encode()), output_format="json"
        )
        payload = json.loads(out)
        assert payload["kind"] == "html"
        assert payload["title"] == "Test Page"
        assert payload["links"][0] == {
            "display_text": "Link 1",
            "absolute_url": "https://example.com/page1",
        }
        # Full URL, not the shortened display form.
        assert payload["links"][1]["absolute_url"].endswith("/on/one/line")
        assert payload["total_link_count"] == 3

    def test_json_output_for_page(self) -> None:
        out = summarize(
            self._response("application/json", b'{"id": 5, "slug": "s"}'),
            output_format="json",
        )
        assert json.loads(out) == {
            "kind": "page",
            "id": 5,
            "slug": "s",
            "title": "",
            "content": "",
            "page_type": "",
        }

    def test_text_output_matches_classify_and_render(self) -> None:
        response = self._response("text/plain", b"hello")
        assert summarize(response) == classify_and_render(
            "text/plain", b"hello", "https://example.com/"
        )

    def test_unknown_format_rejected(self) -> None:
        with pytest.raises(ValueError):
            summarize(self._response("text/plain", b""), output_format="xml")

    def test_extract_returns_dataclass(self) -> None:
        result = extract("text/plain", b"abc", "https://example.com/")
        assert result.total_length == 3

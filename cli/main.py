"""PageProbe CLI — fetch a URL and print a summary of the response.

Usage:
    python cli/main.py            # interactive session
    python cli/main.py fetch URL  # one-shot
    python cli/main.py --help
"""

from __future__ import annotations

import sys
from pathlib import Path

# Ensure the project root is on sys.path so that `from pageprobe.xxx import ...`
# works when the CLI is invoked as `python cli/main.py` from any directory.
_ROOT = Path(__file__).resolve().parent.parent
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

import logging
from dataclasses import replace
from typing import Optional

import httpx
import typer

from cli.session import probe, run_session
from pageprobe.config import settings
from pageprobe.scraper import ExtractionLimits
from pageprobe.scraper.pipeline import OUTPUT_FORMATS

app = typer.Typer(
    name="pageprobe",
    help="Fetch a URL and summarise the HTML, JSON or raw body it returns.",
    invoke_without_command=True,
)


def _limits(max_links: Optional[int]) -> ExtractionLimits:
    limits = ExtractionLimits.from_settings(settings)
    if max_links is not None:
        limits = replace(limits, max_links=max_links)
    return limits


def _check_format(output_format: Optional[str]) -> Optional[str]:
    if output_format is not None and output_format not in OUTPUT_FORMATS:
        raise typer.BadParameter(f"use one of: {', '.join(OUTPUT_FORMATS)}")
    return output_format


@app.callback()
def main(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
    output_format: str = typer.Option(
        "text", "--format", callback=_check_format, help="Output format: text | json."
    ),
    max_links: Optional[int] = typer.Option(
        None, "--max-links", min=1, help="Number of links to list for HTML pages."
    ),
) -> None:
    """Start the interactive session when no sub-command is given."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    if ctx.invoked_subcommand is None:
        run_session(settings, _limits(max_links), output_format)
        return
    ctx.obj = {"output_format": output_format, "max_links": max_links}


@app.command("fetch")
def fetch(
    ctx: typer.Context,
    url: str = typer.Argument(..., help="Absolute URL to fetch."),
    output_format: Optional[str] = typer.Option(
        None,
        "--format",
        callback=_check_format,
        help="Output format: text | json (defaults to the root --format).",
    ),
    max_links: Optional[int] = typer.Option(
        None, "--max-links", min=1, help="Number of links to list for HTML pages."
    ),
) -> None:
    """Fetch a single URL and print its summary."""
    # Options given before the sub-command apply unless repeated after it.
    parent = ctx.obj or {}
    if output_format is None:
        output_format = parent.get("output_format", "text")
    if max_links is None:
        max_links = parent.get("max_links")

    try:
        probe(url, settings, _limits(max_links), output_format)
    except httpx.HTTPError as exc:
        typer.echo(f"❌ HTTP request failed: {exc}")
        raise typer.Exit(1)


# ---------------------------------------------------------------------------
# Entry-point
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    app()

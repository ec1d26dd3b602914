"""Interactive session helpers: banner, help, input validation, one probe."""

from __future__ import annotations

from datetime import datetime
from typing import Callable, Optional

import httpx
import typer

from pageprobe.config import Settings
from pageprobe.scraper import ExtractionLimits, fetch_url, summarize

EXIT_COMMANDS = {"exit", "quit", "q", "выход"}
HELP_COMMANDS = {"help", "?", "справка", "помощь"}

SEPARATOR = "-" * 50


def is_exit_command(text: str) -> bool:
    return text.strip().lower() in EXIT_COMMANDS


def is_help_command(text: str) -> bool:
    return text.strip().lower() in HELP_COMMANDS


def show_welcome() -> None:
    typer.echo("=== PAGEPROBE: API AND WEB PAGE PARSER ===")
    typer.echo("Works with JSON APIs (wiki pages) and ordinary web pages")
    typer.echo("Environment variables:")
    typer.echo("  API_AUTH_TOKEN - authorization token (sent as OAuth)")
    typer.echo("  API_ORG_ID     - organization id (sent as X-Org-Id)")
    typer.echo("")
    typer.echo("Commands:")
    typer.echo("  exit, quit - leave the program")
    typer.echo("  help, ?    - show help")
    typer.echo("=" * 50)


def show_help() -> None:
    typer.echo("\n=== HELP ===")
    typer.echo("How to use the parser:")
    typer.echo("1. Enter an API URL or an ordinary page URL")
    typer.echo("2. API URLs are always requested over https://")
    typer.echo("3. Ordinary sites may be entered without a protocol")
    typer.echo("4. Environment variables are loaded automatically (.env supported)")
    typer.echo("5. To quit type: exit, quit, q")
    typer.echo("6. For help: help, ?")
    typer.echo("\nAPI URL examples:")
    typer.echo("  https://api.wiki.example.net/v1/pages?slug=...")
    typer.echo("  https://api.example.com/data")
    typer.echo("\nOrdinary URL examples:")
    typer.echo("  example.com")
    typer.echo("  https://github.com")
    typer.echo(SEPARATOR)


def warn_missing_credentials(cfg: Settings) -> None:
    """Tell the user which auth headers will be left out."""
    if not cfg.api_auth_token:
        typer.echo("⚠️  API_AUTH_TOKEN is not set")
        typer.echo("   API requests will be sent anonymously")
    if not cfg.api_org_id:
        typer.echo("⚠️  API_ORG_ID is not set")
        typer.echo("   Some API requests may require this header")


def validate_url(
    text: str, confirm: Callable[[str], bool] = typer.confirm
) -> Optional[str]:
    """Return a fetchable URL built from *text*, or ``None`` if it is rejected.

    *confirm* is asked before ``https://`` is added to a scheme-less address
    (API hosts get it without asking).
    """
    text = text.strip()
    if not text:
        typer.echo("❌ URL must not be empty")
        return None

    if "api." in text and not text.startswith("http"):
        text = "https://" + text
        typer.echo("API URLs require HTTPS")
        typer.echo(f"Using URL: {text}")
        return text

    if not text.startswith(("http://", "https://")):
        if not confirm("No protocol given. Use https://?"):
            typer.echo("Please enter the full URL with a protocol (https://...)")
            return None
        text = "https://" + text
        typer.echo(f"Using URL: {text}")

    if "." not in text:
        typer.echo("❌ URL must contain a domain name")
        return None

    return text


def probe(
    url: str,
    cfg: Settings,
    limits: ExtractionLimits,
    output_format: str = "text",
) -> None:
    """Fetch *url*, print the request details and the rendered summary.

    Raises:
        httpx.HTTPError: If the request itself fails.
    """
    typer.echo(f"\n🔍 Parsing: {url}")
    typer.echo(f"⏰ Time: {datetime.now():%H:%M:%S}")
    if cfg.api_auth_token:
        typer.echo("✅ Using Authorization header")
    if cfg.api_org_id:
        typer.echo("✅ Using X-Org-Id header")

    response = fetch_url(url, cfg)

    length = (
        f"{response.content_length} bytes"
        if response.content_length is not None
        else "unknown"
    )
    typer.echo(f"📊 Status: {response.status_code} {response.reason_phrase}")
    typer.echo(f"⏱️  Request time: {response.elapsed:.3f}s")
    typer.echo(f"📝 Content-Type: {response.content_type or '(none)'}")
    typer.echo(f"📦 Content-Length: {length}")
    typer.echo("")
    typer.echo(summarize(response, limits, output_format))


def run_session(
    cfg: Settings,
    limits: ExtractionLimits,
    output_format: str = "text",
    prompt: Callable[..., str] = typer.prompt,
) -> None:
    """Read URLs until an exit command (or end of input) and probe each one."""
    show_welcome()
    warn_missing_credentials(cfg)

    while True:
        try:
            text = prompt(
                "Enter a URL to parse (or 'exit' to quit)",
                default="",
                show_default=False,
            )
        except (typer.Abort, EOFError):
            typer.echo("")
            break

        if is_exit_command(text):
            typer.echo("Exiting...")
            break
        if is_help_command(text):
            show_help()
            continue

        url = validate_url(text)
        if url is None:
            continue

        try:
            probe(url, cfg, limits, output_format)
        except httpx.HTTPError as exc:
            typer.echo(f"❌ HTTP request failed: {exc}")

        typer.echo("\n" + SEPARATOR + "\n")

    typer.echo("Done. Goodbye!")

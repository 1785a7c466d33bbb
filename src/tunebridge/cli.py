#!/usr/bin/env python3
"""Command-line interface for tunebridge.

This CLI is primarily for debugging and development.
For production use, import tunebridge as a library or run the API.
"""

import asyncio
import json
import logging
import sys
from dataclasses import asdict

import click
import httpx
from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from tunebridge import create_converter
from tunebridge.exceptions import TuneBridgeError
from tunebridge.models.results import ConversionResults
from tunebridge.models.share_link import ShareLink
from tunebridge.settings import Settings, get_settings
from tunebridge.utils.url import parse_share_link

logger = logging.getLogger("tunebridge")


def setup_logging(verbose: bool = False, console: Console | None = None) -> None:
    """Configure logging with Rich handler.

    Clears existing handlers first, so it can be called again to
    reconfigure logging.

    Args:
        verbose: If True, set log level to DEBUG. Otherwise WARNING.
        console: Optional Console instance to use for RichHandler.
    """
    level = logging.DEBUG if verbose else logging.WARNING

    # Clear existing handlers to allow reconfiguration
    root_logger = logging.getLogger()
    root_logger.handlers.clear()

    handler = RichHandler(
        rich_tracebacks=True,
        show_path=False,
        console=console,
    )
    handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))

    root_logger.setLevel(level)
    root_logger.addHandler(handler)
    logging.getLogger("httpx").setLevel(logging.WARNING)


def print_share_link(console: Console, link: ShareLink) -> None:
    """Print a parsed share link as a two-column card."""
    table = Table(show_header=False, padding=(0, 1))
    table.add_column("Field", style="bold cyan", width=10)
    table.add_column("Value", overflow="fold")

    table.add_row("Platform", link.platform.label)
    table.add_row("Type", link.object_type.label)
    table.add_row("ID", link.id)
    table.add_row("Country", link.country_code)
    table.add_row("URL", link.to_url())

    console.print(table)


def print_results(console: Console, results: ConversionResults) -> None:
    """Print conversion results as a table, one row per provider."""
    if not results.results:
        console.print("[yellow]No provider returned a match[/yellow]")
        return

    table = Table(title="Converted links", title_justify="left")
    table.add_column("Provider", style="bold cyan")
    table.add_column("Type")
    table.add_column("Name")
    table.add_column("URL", overflow="fold")

    for link in results.results:
        table.add_row(link.provider, link.type, link.display_name, link.url)

    console.print(table)


def load_settings() -> Settings:
    """Load settings, turning validation errors into CLI errors."""
    try:
        return get_settings()
    except ValidationError as e:
        raise click.ClickException(
            f"Configuration error: {e.errors()[0]['msg']}"
        ) from e


async def run_conversion(settings: Settings, url: str) -> ConversionResults:
    """Convert a link with a short-lived HTTP client."""
    async with httpx.AsyncClient(timeout=settings.http_timeout) as http:
        converter = create_converter(settings.credentials, http, settings.api_config)
        return await converter.convert(url)


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
@click.pass_context
def main(ctx: click.Context, verbose: bool) -> None:
    """Convert music share links between streaming platforms."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    setup_logging(verbose=verbose)


@main.command(name="parse")
@click.argument("url", metavar="URL")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON.")
def parse_cmd(url: str, as_json: bool) -> None:
    """Parse a share link without contacting any provider.

    \b
    Examples:
      tunebridge parse "https://open.spotify.com/intl-de/track/36puuD04lEUD8kVwQsTLm6"
      tunebridge parse "https://tidal.com/browse/album/412502324" --json
    """
    try:
        link = parse_share_link(url)
    except TuneBridgeError as e:
        raise click.ClickException(e.message) from e

    if as_json:
        data = {**asdict(link), "url": link.to_url()}
        json.dump(data, sys.stdout, indent=2, ensure_ascii=False)
        sys.stdout.write("\n")
    else:
        print_share_link(Console(), link)


@main.command(name="convert")
@click.argument("url", metavar="URL")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON.")
def convert_cmd(url: str, as_json: bool) -> None:
    """Convert a share link using the providers configured in the environment.

    Credentials are read from TUNEBRIDGE_* environment variables or a .env
    file.

    \b
    Examples:
      tunebridge convert "https://tidal.com/browse/track/300807510"
      tunebridge convert "https://link.deezer.com/s/30ZfPsU2a5NSJ4DtdHu7y" --json
    """
    settings = load_settings()
    console = Console()

    try:
        results = asyncio.run(run_conversion(settings, url))
    except TuneBridgeError as e:
        logger.error(e.message)
        raise click.ClickException(e.message) from e
    except Exception as e:
        logger.exception("Unexpected error")
        raise click.ClickException(f"Unexpected error: {e}") from e

    if as_json:
        sys.stdout.write(results.to_json())
        sys.stdout.write("\n")
    else:
        print_results(console, results)


if __name__ == "__main__":
    main()

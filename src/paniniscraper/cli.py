"""Command-line interface for paniniscraper."""

from __future__ import annotations

import asyncio
import json
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, TextIO

import click
import structlog
import uvicorn
from pydantic import ValidationError
from rich.console import Console

from paniniscraper import __version__
from paniniscraper.config.config import ScraperSettings, load_settings
from paniniscraper.errors import ScrapingFailedError
from paniniscraper.observability.logging import configure_logging
from paniniscraper.scraper import extract_many, extract_one

# stdout carries JSON only; human-facing messages go to stderr.
console = Console(stderr=True)
logger = structlog.get_logger(__name__)


def _emit(payload: Dict[str, Any]) -> None:
    click.echo(json.dumps(payload, ensure_ascii=False, indent=2))


def _read_urls(urls_file: Optional[TextIO], extra: List[str]) -> List[str]:
    urls: List[str] = []
    if urls_file is not None:
        for line in urls_file:
            line = line.strip()
            if line and not line.startswith("#"):
                urls.append(line)
    urls.extend(extra)
    return urls


@click.group()
@click.version_option(version=__version__)
@click.option("--config", "-c", type=click.Path(exists=True, dir_okay=False), help="Configuration file path")
@click.option(
    "--log-level",
    default=None,
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"]),
    help="Logging level (overrides the configuration file)",
)
@click.pass_context
def cli(ctx: click.Context, config: Optional[str], log_level: Optional[str]) -> None:
    """paniniscraper - product data extraction for Panini Brasil."""
    try:
        settings = load_settings(Path(config) if config else None)
    except (ValidationError, OSError) as e:
        raise click.ClickException(f"Invalid configuration: {e}") from e

    if log_level:
        settings.monitoring = settings.monitoring.model_copy(update={"log_level": log_level})
    configure_logging(settings.monitoring)

    ctx.ensure_object(dict)
    ctx.obj["settings"] = settings
    logger.debug("CLI configured", command=ctx.invoked_subcommand, config=config)


@cli.command()
@click.argument("url")
@click.pass_context
def scrape(ctx: click.Context, url: str) -> None:
    """Extract a single product page and print it as JSON."""
    settings: ScraperSettings = ctx.obj["settings"]
    try:
        record = asyncio.run(extract_one(url, settings.http, site=settings.site))
    except ScrapingFailedError as e:
        console.print(f"[red]Error: {e.message}[/red]")
        _emit({"url": e.url, "code": e.code, "message": e.message, "status_code": e.status_code})
        sys.exit(1)
    _emit(record.to_dict())


@cli.command()
@click.argument("urls", type=click.File("r"), required=False)
@click.option("--url", "extra_urls", multiple=True, help="URL to process (can be used multiple times)")
@click.pass_context
def batch(ctx: click.Context, urls: Optional[TextIO], extra_urls: List[str]) -> None:
    """Extract every URL in URLS (one per line) and/or given with --url."""
    settings: ScraperSettings = ctx.obj["settings"]
    url_list = _read_urls(urls, list(extra_urls))
    if not url_list:
        console.print("[red]Error: No URLs provided[/red]")
        sys.exit(1)

    result = asyncio.run(extract_many(url_list, settings.http, site=settings.site))
    _emit(result.to_dict())
    console.print(
        f"Processed {result.total_processed}: "
        f"[green]{result.success_count} succeeded[/green], [red]{result.failure_count} failed[/red]"
    )
    if result.failure_count:
        sys.exit(1)


@cli.command()
@click.option("--host", default="127.0.0.1", help="Host to bind to")
@click.option("--port", default=8000, help="Port to bind to")
@click.pass_context
def serve(ctx: click.Context, host: str, port: int) -> None:
    """Start the HTTP API."""
    from paniniscraper.web.main import create_app

    settings: ScraperSettings = ctx.obj["settings"]
    console.print(f"[green]Starting Panini Scraper API at http://{host}:{port}[/green]")
    uvicorn.run(create_app(settings), host=host, port=port, log_level=settings.monitoring.log_level.lower())


def main() -> None:
    cli(obj={})


if __name__ == "__main__":
    main()

"""Heritage enricher CLI — entry-point for all pipeline operations.

Usage:
    python cli/main.py --help

Commands:
    run       → enrich a whole spreadsheet of heritage sites
    discover  → run one search query and print the top URL
    scrape    → fetch and extract one page
"""

from __future__ import annotations

import sys
from pathlib import Path

# Ensure the project root is on sys.path so that `from heritage.xxx import ...`
# works when the CLI is invoked as `python cli/main.py` from any directory.
_ROOT = Path(__file__).resolve().parent.parent
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

from typing import Optional

import typer

from heritage.config import settings
from heritage.dataset import DatasetError, load_records, save_records
from heritage.pipeline import Pacer, run_enrichment
from heritage.scraper import FetchError, Found, SiteType, fetch, open_browser
from heritage.scraper.models import OutputRecord
from heritage.search import build_provider, discover

app = typer.Typer(
    name="heritage",
    help="Enrich heritage-site spreadsheets with text harvested from the web.",
    no_args_is_help=True,
)


def _resolve_site_type(site_type: Optional[SiteType]) -> SiteType:
    if site_type is not None:
        return site_type
    try:
        return SiteType(settings.site_type.strip().lower())
    except ValueError:
        typer.echo(f"❌ Unknown SITE_TYPE {settings.site_type!r}.")
        raise typer.Exit(code=1)


def _resolve_provider(name: Optional[str]):
    try:
        return build_provider(name)
    except ValueError as exc:
        typer.echo(f"❌ {exc}")
        raise typer.Exit(code=1)


# ---------------------------------------------------------------------------
# run
# ---------------------------------------------------------------------------

@app.command("run")
def run(
    input_path: Optional[Path] = typer.Option(None, "--input", "-i", help="Input .xlsx workbook."),
    output_path: Optional[Path] = typer.Option(None, "--output", "-o", help="Output .xlsx workbook."),
    site_type: Optional[SiteType] = typer.Option(None, "--site-type", "-t", help="Source family."),
    provider: Optional[str] = typer.Option(None, "--provider", help="google | duckduckgo"),
    delay: Optional[float] = typer.Option(None, "--delay", help="Seconds to wait before each record."),
    limit: Optional[int] = typer.Option(None, "--limit", min=1, help="Only process the first N records."),
    with_source: bool = typer.Option(False, "--with-source", help="Also write URL and Status columns."),
) -> None:
    """Enrich every record of the input workbook and save the results."""
    input_path = input_path or settings.input_path
    output_path = output_path or settings.output_path
    site = _resolve_site_type(site_type)
    search = _resolve_provider(provider)

    try:
        records = load_records(input_path)
    except DatasetError as exc:
        typer.echo(f"❌ {exc}")
        raise typer.Exit(code=1)

    total = len(records) if limit is None else min(limit, len(records))
    typer.echo(f"[run] {total} record(s) from {input_path}  (site type: {site.value}, search: {search.name})")

    def _save(rows: list[OutputRecord]) -> None:
        save_records(rows, output_path, with_source=with_source)
        typer.echo(f"\n[run] Results saved to {output_path}  ({len(rows)} row(s))")

    try:
        with typer.progressbar(length=total, label="Enriching") as bar:
            run_enrichment(
                records,
                site,
                _save,
                provider=search,
                pacer=Pacer(delay),
                progress=bar,
                limit=limit,
            )
    except Exception as exc:
        typer.echo(f"❌ Run aborted: {exc}")
        raise typer.Exit(code=1)


# ---------------------------------------------------------------------------
# discover
# ---------------------------------------------------------------------------

@app.command("discover")
def discover_cmd(
    query: str = typer.Argument(..., help="Free-text search query."),
    provider: Optional[str] = typer.Option(None, "--provider", help="google | duckduckgo"),
) -> None:
    """Print the top search result for QUERY."""
    result = discover(query, _resolve_provider(provider))
    if isinstance(result, Found):
        typer.echo(result.url)
    else:
        typer.echo(f"[discover] No result for {query!r} ({result.reason}).")
        raise typer.Exit(code=1)


# ---------------------------------------------------------------------------
# scrape
# ---------------------------------------------------------------------------

@app.command("scrape")
def scrape(
    url: str = typer.Argument(..., help="Page URL."),
    site_type: Optional[SiteType] = typer.Option(None, "--site-type", "-t", help="Source family."),
) -> None:
    """Fetch URL, apply the site type's extraction rules and print the result."""
    site = _resolve_site_type(site_type)
    typer.echo(f"[scrape] Fetching {url!r} as {site.value} …")
    with open_browser(site.rendered) as browser:
        outcome = fetch(url, site, browser)

    if isinstance(outcome, FetchError):
        typer.echo(f"❌ {outcome.message}")
        raise typer.Exit(code=1)

    typer.echo(f"[scrape] Summary: {outcome.summary}")
    typer.echo("")
    typer.echo(outcome.content)


# ---------------------------------------------------------------------------
# Entry-point
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    app()

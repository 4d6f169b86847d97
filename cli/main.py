"""stockcrawl CLI — entry-point for crawl operations.

Usage:
    python cli/main.py --help

Commands:
    indexes   → list the index ids offered by the search form
    stocks    → list the stocks (and linked pages) of one result page
    run       → crawl indexes into a fresh drop box
"""

from __future__ import annotations

import sys
from pathlib import Path

# Ensure the project root is on sys.path so that `from stockcrawl.xxx import ...`
# works when the CLI is invoked as `python cli/main.py` from any working directory.
_ROOT = Path(__file__).resolve().parent.parent
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

import dataclasses
from typing import List, Optional

import typer

from stockcrawl.config import settings
from stockcrawl.crawl.engine import StockCrawler
from stockcrawl.scraper.extractor import parse_page

app = typer.Typer(
    name="stockcrawl",
    help="Collect the stock pages of every finanzen.net index.",
    no_args_is_help=True,
)


@app.command("indexes")
def indexes_cmd() -> None:
    """List the ids of all indexes offered by the search form."""
    with StockCrawler() as crawler:
        ids = crawler.indexes()
    if not ids:
        typer.echo("[indexes] No indexes found.")
        return
    for index_id in ids:
        typer.echo(index_id)
    typer.echo(f"[indexes] {len(ids)} index(es).")


@app.command("stocks")
def stocks_cmd(
    url: str = typer.Argument(..., help="Search result page (relative or absolute)."),
) -> None:
    """List the stock links and linked pages found on one result page."""
    with StockCrawler() as crawler:
        target = crawler.resolve(url)
        raw = crawler.fetch(target)
        if raw is None:
            typer.echo(f"❌ No response from {target}")
            raise typer.Exit(code=1)
        doc = parse_page(raw.html)
        stocks = crawler.stocks(doc)
        pages = crawler.linked_pages(doc)

    for link in stocks:
        typer.echo(link)
    typer.echo(f"[stocks] {len(stocks)} stock(s), {len(pages)} linked page(s).")
    for link in pages:
        typer.echo(f"  → {link}")


@app.command("run")
def run_cmd(
    index: Optional[List[str]] = typer.Option(
        None, "--index", "-i", help="Index id to crawl (repeatable). Default: all."
    ),
    drop_box: Optional[Path] = typer.Option(
        None, "--drop-box", help="Base directory for results (default from settings)."
    ),
    raw_urls: bool = typer.Option(
        False, "--raw-urls", help="Do not percent-escape resolved links."
    ),
    workers: Optional[int] = typer.Option(
        None, "--workers", help="Number of concurrent requests."
    ),
) -> None:
    """Crawl indexes and write one file per result page into a new drop box."""
    cfg = settings if workers is None else dataclasses.replace(settings, max_workers=workers)

    with StockCrawler(
        drop_box, settings=cfg, escape_urls=False if raw_urls else None
    ) as crawler:
        try:
            summary = crawler.run(index or None)
        except Exception as e:
            typer.echo(f"❌ Error: {e}")
            raise typer.Exit(code=1)

    if summary.pages_requested == 0:
        typer.echo("[run] Nothing to crawl.")
        return
    typer.echo(
        f"✅ {summary.pages_with_stocks} file(s) written to {crawler.drop_box} "
        f"({summary.pages_timed_out} page(s) timed out)."
    )


if __name__ == "__main__":
    app()

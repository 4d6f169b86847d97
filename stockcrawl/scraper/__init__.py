"""Scraper package — URL resolution, page fetch & link extraction."""

from stockcrawl.scraper.extractor import (
    extract_follow_links,
    extract_index_ids,
    extract_page,
    extract_stock_links,
    parse_page,
)
from stockcrawl.scraper.fetcher import build_client, fetch_page
from stockcrawl.scraper.models import PageResult, RawPage
from stockcrawl.scraper.resolver import resolve

__all__ = [
    "build_client",
    "extract_follow_links",
    "extract_index_ids",
    "extract_page",
    "extract_stock_links",
    "fetch_page",
    "parse_page",
    "resolve",
    "PageResult",
    "RawPage",
]

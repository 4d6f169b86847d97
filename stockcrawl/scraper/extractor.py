"""Link extraction from finanzen.net search pages.

Every extractor returns an empty list when the expected markup is missing:
an index without pagination or a page that failed to load is a normal
outcome, not an error.
"""

from __future__ import annotations

from typing import Callable, List, Optional

from bs4 import BeautifulSoup

from stockcrawl.scraper.models import PageResult
from stockcrawl.scraper.resolver import resolve

Resolver = Callable[[str], str]

# ---------------------------------------------------------------------------
# Selectors
# ---------------------------------------------------------------------------

INDEX_OPTION_SELECTOR = (
    '#frmAktienSuche table select[name="inIndex"] option:not(:first-child)'
)

_RESULT_TABLE = "#mainWrapper > div.main > div.table_quotes > div.content > table"

STOCK_LINK_SELECTOR = (
    f"{_RESULT_TABLE} tr > td:not(.no_border):first-child > a:first-child"
)

FOLLOW_LINK_SELECTOR = (
    f"{_RESULT_TABLE} tr:last-child div.paging > a:not(.image_button_right)"
)


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _select_attr(doc: BeautifulSoup, selector: str, attr: str) -> List[str]:
    """Return the stripped *attr* value of every element matching *selector*.

    Elements without the attribute (or with an empty one) are skipped.
    """
    values: List[str] = []
    for element in doc.select(selector):
        value = element.get(attr)
        if isinstance(value, str) and value.strip():
            values.append(value.strip())
    return values


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def parse_page(html: Optional[str]) -> BeautifulSoup:
    """Parse *html* into a document; ``None`` yields an empty document."""
    return BeautifulSoup(html or "", "html.parser")


def extract_index_ids(doc: BeautifulSoup) -> List[str]:
    """Return the index ids offered by the search form, minus the placeholder."""
    return _select_attr(doc, INDEX_OPTION_SELECTOR, "value")


def extract_stock_links(doc: BeautifulSoup, resolver: Resolver = resolve) -> List[str]:
    """Return the absolute detail-page URL of every stock in the result table."""
    return [resolver(href) for href in _select_attr(doc, STOCK_LINK_SELECTOR, "href")]


def extract_follow_links(doc: BeautifulSoup, resolver: Resolver = resolve) -> List[str]:
    """Return the absolute URLs of the further result pages of a listing.

    The "next" arrow is left out since it points at a page already listed.
    """
    return [resolver(href) for href in _select_attr(doc, FOLLOW_LINK_SELECTOR, "href")]


def extract_page(url: str, html: Optional[str], resolver: Resolver = resolve) -> PageResult:
    """Parse *html* fetched from *url* and collect its stock and follow links."""
    doc = parse_page(html)
    return PageResult(
        url=url,
        stock_links=extract_stock_links(doc, resolver),
        follow_links=extract_follow_links(doc, resolver),
    )

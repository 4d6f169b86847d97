"""Crawl orchestration: from the index list to one file per result page.

``StockCrawler`` scrapes finanzen.net for the list of all stocks.  It reads
every index from the search form, requests the search result of each index
and follows the pagination of the first result page.  The stock links of
each page are written to a file in the crawler's drop box, with the URL of
the page on the first line.

Examples::

    StockCrawler().run()                      # every index
    StockCrawler().run(["0", "9"])            # DAX and NASDAQ 100 only
    StockCrawler(drop_box="/tmp/stocks").indexes()
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, List, Optional

import httpx
from bs4 import BeautifulSoup

from stockcrawl.config import Settings, settings as default_settings
from stockcrawl.crawl.dispatcher import CrawlDispatcher, CrawlSummary
from stockcrawl.crawl.policy import should_follow
from stockcrawl.crawl.sink import ResultSink, TokenFactory, new_token
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

SEARCH_QUERY = "inBranche=0&inLand=0"


class StockCrawler:
    """Crawls the stock search of finanzen.net index by index.

    Args:
        drop_box: Base directory for results; a fresh sub-directory named by
            ``token_factory`` is used per crawler.  Defaults to
            ``settings.drop_box_dir``.
        settings: Configuration; defaults to the module-level singleton.
        client: HTTP client to use.  When omitted, one is built from
            ``settings`` and closed by :meth:`close`.
        token_factory: Source of unique names for the drop box and files.
        escape_urls: Percent-escape resolved links (default from settings).
    """

    def __init__(
        self,
        drop_box: Optional[str | Path] = None,
        *,
        settings: Optional[Settings] = None,
        client: Optional[httpx.Client] = None,
        token_factory: TokenFactory = new_token,
        escape_urls: Optional[bool] = None,
    ) -> None:
        self.settings = settings or default_settings
        base = Path(drop_box) if drop_box is not None else self.settings.drop_box_dir
        self._drop_box = base / token_factory()
        self._sink = ResultSink(token_factory)
        self._escape = self.settings.escape_urls if escape_urls is None else escape_urls
        self._owns_client = client is None
        self._client = client or build_client(self.settings)

    @property
    def drop_box(self) -> Path:
        """Directory the result files of this crawler are written to."""
        return self._drop_box

    # ------------------------------------------------------------------
    # Extraction helpers
    # ------------------------------------------------------------------

    def resolve(self, url: str) -> str:
        """Make *url* absolute on the configured site."""
        return resolve(url, self.settings.base_url, escape=self._escape)

    def search_url(self, index_id: str) -> str:
        """Absolute URL of the first search result page of *index_id*."""
        return self.resolve(f"{self.settings.search_path}?{SEARCH_QUERY}&inIndex={index_id}")

    def fetch(self, url: str) -> Optional[RawPage]:
        """GET *url* with the crawler's client; ``None`` if nothing came back."""
        return fetch_page(self._client, url)

    def indexes(self) -> List[str]:
        """Return the ids of all indexes offered by the search form.

        An unreachable search page yields an empty list.
        """
        raw = self.fetch(self.resolve(self.settings.search_path))
        if raw is None:
            return []
        return extract_index_ids(parse_page(raw.html))

    def stocks(self, doc: BeautifulSoup) -> List[str]:
        """Return the stock detail URLs listed on a parsed result page."""
        return extract_stock_links(doc, self.resolve)

    def linked_pages(self, doc: BeautifulSoup) -> List[str]:
        """Return the URLs of the further pages linked from a parsed result page."""
        return extract_follow_links(doc, self.resolve)

    def follow_linked_pages(self, url: str) -> bool:
        """Whether the linked pages of the result page at *url* must be fetched."""
        return should_follow(url)

    # ------------------------------------------------------------------
    # Crawl
    # ------------------------------------------------------------------

    def run(self, index_ids: Optional[Iterable[str]] = None) -> CrawlSummary:
        """Crawl the given indexes (all indexes by default) into the drop box.

        Blocks until every page, including the linked ones, has been
        processed.  When no index is given or found, nothing is requested
        and the drop box is not created.

        Raises:
            OSError: If the drop box or a result file cannot be written.
        """
        ids = list(self.indexes() if index_ids is None else index_ids)
        if not ids:
            print("[CRAWL] No indexes to crawl.")
            return CrawlSummary()

        self._drop_box.mkdir(parents=True, exist_ok=True)

        dispatcher = CrawlDispatcher(
            fetch=self.fetch,
            extract=lambda url, html: extract_page(url, html, self.resolve),
            on_result=self._save,
            follow=self.follow_linked_pages,
            max_workers=self.settings.max_workers,
        )
        print(f"[CRAWL] Queueing {len(ids)} index(es) → {self._drop_box}")
        for index_id in ids:
            dispatcher.queue(self.search_url(index_id))

        summary = dispatcher.run()
        print(
            f"[CRAWL] ✓ {summary.pages_completed}/{summary.pages_requested} page(s), "
            f"{summary.stock_links} stock link(s) in {summary.pages_with_stocks} file(s)."
        )
        return summary

    def _save(self, result: PageResult) -> None:
        if not result.stock_links:
            return
        path = self._sink.persist(self._drop_box, result.batch())
        print(f"[SAVE] {len(result.stock_links)} stock(s) from {result.url} → {path.name}")

    # ------------------------------------------------------------------
    # Resource handling
    # ------------------------------------------------------------------

    def close(self) -> None:
        """Close the HTTP client if this crawler created it."""
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> "StockCrawler":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

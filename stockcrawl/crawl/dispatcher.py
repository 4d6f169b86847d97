"""Crawl dispatcher: a self-feeding request queue on a thread pool.

Each request moves ``queued -> in_flight -> completed`` or, when the fetch
returns nothing, ``queued -> in_flight -> timed_out``.  A completed request
is extracted, handed to the result handler and, if the pagination policy
agrees, its follow links are queued as new requests.  Follow-up work is only
known once its parent completes, so termination is tracked with a pending
counter (a wait group): :meth:`CrawlDispatcher.run` returns once the queue
is empty and no request is in flight.
"""

from __future__ import annotations

import threading
from collections import deque
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Callable, Deque, Optional

from stockcrawl.crawl.policy import should_follow
from stockcrawl.scraper.models import PageResult, RawPage

Fetch = Callable[[str], Optional[RawPage]]
Extract = Callable[[str, Optional[str]], PageResult]
ResultHandler = Callable[[PageResult], None]


@dataclass
class CrawlSummary:
    """Counters collected over one crawl run."""

    pages_requested: int = 0
    pages_completed: int = 0
    pages_timed_out: int = 0
    pages_with_stocks: int = 0
    stock_links: int = 0


class CrawlDispatcher:
    """Runs page requests concurrently until no work is left.

    Args:
        fetch: Returns the page for a URL, or ``None`` on timeout.
        extract: Turns a URL and its markup into a :class:`PageResult`.
        on_result: Called once per completed page, from a worker thread.
        follow: Pagination policy deciding whether follow links are queued.
        max_workers: Size of the worker pool.
    """

    def __init__(
        self,
        fetch: Fetch,
        extract: Extract,
        on_result: ResultHandler,
        follow: Callable[[str], bool] = should_follow,
        max_workers: int = 8,
    ) -> None:
        self._fetch = fetch
        self._extract = extract
        self._on_result = on_result
        self._follow = follow
        self._max_workers = max(1, max_workers)

        self._cond = threading.Condition()
        self._queued: Deque[str] = deque()
        self._pending = 0
        self._pool: Optional[ThreadPoolExecutor] = None
        self._error: Optional[BaseException] = None
        self.summary = CrawlSummary()

    @property
    def pending(self) -> int:
        """Number of requests queued or in flight."""
        with self._cond:
            return self._pending

    def queue(self, url: str) -> None:
        """Add a request for *url*; safe to call from any worker."""
        with self._cond:
            if self._error is not None:
                return
            self._pending += 1
            self.summary.pages_requested += 1
            if self._pool is None:
                self._queued.append(url)
            else:
                self._pool.submit(self._process, url)

    def run(self) -> CrawlSummary:
        """Dispatch all queued requests and block until the crawl drains.

        Raises:
            Exception: The first error raised by ``on_result`` (e.g. a
                filesystem failure), after in-flight requests have finished.
        """
        with ThreadPoolExecutor(
            max_workers=self._max_workers, thread_name_prefix="crawl"
        ) as pool:
            with self._cond:
                self._pool = pool
                while self._queued:
                    pool.submit(self._process, self._queued.popleft())
                while self._pending:
                    self._cond.wait()
                self._pool = None

        if self._error is not None:
            raise self._error
        return self.summary

    # ------------------------------------------------------------------
    # Worker side
    # ------------------------------------------------------------------

    def _process(self, url: str) -> None:
        try:
            raw = self._fetch(url)
            if raw is None:
                with self._cond:
                    self.summary.pages_timed_out += 1
                return

            result = self._extract(url, raw.html)
            self._on_result(result)
            with self._cond:
                self.summary.pages_completed += 1
                if result.stock_links:
                    self.summary.pages_with_stocks += 1
                    self.summary.stock_links += len(result.stock_links)

            if self._follow(url):
                for link in result.follow_links:
                    self.queue(link)
        except Exception as exc:
            print(f"[CRAWL] ✗ Failed {url!r}: {exc}")
            with self._cond:
                if self._error is None:
                    self._error = exc
        finally:
            with self._cond:
                self._pending -= 1
                if self._pending == 0:
                    self._cond.notify_all()

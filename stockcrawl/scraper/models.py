"""Data models for the scraper pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List


@dataclass
class RawPage:
    """The raw HTTP response for a single URL fetch."""

    url: str
    html: str
    status_code: int


@dataclass
class PageResult:
    """Links extracted from one completed search result page."""

    url: str
    stock_links: List[str] = field(default_factory=list)
    follow_links: List[str] = field(default_factory=list)

    def batch(self) -> List[str]:
        """Return the lines persisted for this page: its URL, then each stock link."""
        return [self.url, *self.stock_links]

"""Crawl package — dispatcher, pagination policy, result sink & orchestration."""

from stockcrawl.crawl.dispatcher import CrawlDispatcher, CrawlSummary
from stockcrawl.crawl.engine import StockCrawler
from stockcrawl.crawl.policy import should_follow
from stockcrawl.crawl.sink import ResultSink, new_token

__all__ = [
    "CrawlDispatcher",
    "CrawlSummary",
    "ResultSink",
    "StockCrawler",
    "new_token",
    "should_follow",
]

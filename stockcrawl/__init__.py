"""stockcrawl — collects the stock pages of every finanzen.net index."""

from stockcrawl.crawl import StockCrawler

__all__ = ["StockCrawler"]

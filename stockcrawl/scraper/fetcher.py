"""HTTP fetcher for finanzen.net search pages."""

from __future__ import annotations

from typing import Optional

import httpx

from stockcrawl.config import Settings, settings as default_settings
from stockcrawl.scraper.models import RawPage


def build_client(settings: Settings | None = None) -> httpx.Client:
    """Return an ``httpx.Client`` configured from *settings*.

    The client is shared by all crawl workers; ``httpx.Client`` is safe to
    use from several threads at once.
    """
    cfg = settings or default_settings
    return httpx.Client(
        headers={"User-Agent": cfg.user_agent},
        timeout=cfg.request_timeout,
        follow_redirects=True,
    )


def fetch_page(client: httpx.Client, url: str) -> Optional[RawPage]:
    """GET *url* and return a :class:`RawPage`, or ``None`` if nothing came back.

    Timeouts and other request failures (connection errors, redirect loops,
    undecodable bodies) are reported as ``None`` so the caller can treat
    the page as empty.  Error statuses are *not* raised:
    their body is returned like any other page and simply holds no results.
    """
    try:
        response = client.get(url)
    except httpx.TimeoutException as exc:
        print(f"[FETCH] ✗ Timed out {url!r}: {exc}")
        return None
    except httpx.RequestError as exc:
        print(f"[FETCH] ✗ Failed {url!r}: {exc}")
        return None

    return RawPage(url=url, html=response.text, status_code=response.status_code)

"""Pagination policy: which completed pages have their follow links fetched."""

from __future__ import annotations

# A first result page (``...&inIndex=9``) stays below this length; the
# linked pages carry an extra ``intpagenr`` parameter and exceed it.
MAX_HEAD_URL_LENGTH = 80


def should_follow(url: str) -> bool:
    """Return ``True`` if *url* is the head of a result list.

    Only the head's pagination links are fetched; the linked pages list
    the same siblings again and are not expanded a second time.
    """
    return len(str(url)) <= MAX_HEAD_URL_LENGTH

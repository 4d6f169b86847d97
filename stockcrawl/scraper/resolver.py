"""Turn site-relative paths into absolute URLs on the canonical host."""

from __future__ import annotations

from urllib.parse import quote, urlsplit

from stockcrawl.config import settings

# Everything that may legitimately appear in a path or query stays as is.
# ``%`` is kept so an already-escaped URL is never escaped a second time.
_SAFE_CHARS = "/:?&=%#+@;,!$'()*~[]"


def resolve(url: str, base_url: str | None = None, escape: bool = True) -> str:
    """Return *url* as an absolute URL below *base_url*.

    Absolute input is re-rooted under the canonical host: its scheme and
    host are replaced while path, query and fragment are kept.  With
    ``escape`` enabled, reserved characters (spaces, umlauts, ...) are
    percent-escaped exactly once, so resolving an already resolved URL
    returns it unchanged.

    Examples::

        resolve("aktien/aktien_suche.asp")
        # 'http://www.finanzen.net/aktien/aktien_suche.asp'
        resolve("/aktien/Orságos-Aktie")
        # 'http://www.finanzen.net/aktien/Ors%C3%A1gos-Aktie'
    """
    base = (base_url or settings.base_url).rstrip("/")
    path = (url or "").strip()

    try:
        parts = urlsplit(path)
    except ValueError:
        return f"{base}/{path.lstrip('/')}"

    if parts.netloc:
        path = path.split(parts.netloc, 1)[1]

    path = path.lstrip("/")
    if escape:
        path = quote(path, safe=_SAFE_CHARS)
    return f"{base}/{path}"

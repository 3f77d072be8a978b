"""Cache key generation — normalized request identity."""

from __future__ import annotations

from urllib.parse import urljoin, urlsplit, urlunsplit

_KEY_SEPARATOR = " "


def normalize_url(url: str, origin: str | None = None) -> str:
    """Resolve ``url`` against ``origin`` and drop the fragment.

    Absolute URLs are kept as-is (apart from the fragment); relative ones
    are joined onto the origin so "/index.html" and
    "http://localhost:8000/index.html" map to the same entry.
    """
    if origin and not urlsplit(url).scheme:
        url = urljoin(origin.rstrip("/") + "/", url)
    parts = urlsplit(url)
    path = parts.path or "/"
    return urlunsplit((parts.scheme, parts.netloc, path, parts.query, ""))


def generate_cache_key(url: str, method: str = "GET", origin: str | None = None) -> str:
    """Build the entry key ``"<METHOD> <absolute-url>"``."""
    return f"{method.upper()}{_KEY_SEPARATOR}{normalize_url(url, origin)}"


def url_from_key(key: str) -> str:
    """Inverse of the URL half of ``generate_cache_key``."""
    _, _, url = key.partition(_KEY_SEPARATOR)
    return url

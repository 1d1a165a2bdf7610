"""URL joining and validation helpers."""

from __future__ import annotations

import httpx


def join_url(host: str, api: str) -> str:
    """Join a host (base URL) and an api path into one URL string.

    Exactly one `/` separates the two parts, except before a query string:
    a trailing `/` on the host is dropped when `api` starts with `?`.

    Example:
        >>> join_url("https://example.com/", "v1/items")
        'https://example.com/v1/items'
        >>> join_url("https://example.com/", "?x=1")
        'https://example.com?x=1'
    """
    if not api:
        return host
    if api.startswith("?"):
        return host.removesuffix("/") + api
    if host.endswith("/") and api.startswith("/"):
        return host + api[1:]
    if host.endswith("/") or api.startswith("/"):
        return host + api
    return f"{host}/{api}"


def parse_url(text: str) -> httpx.URL | None:
    """Parse `text` as an absolute URL, returning None when it is not one.

    Whitespace anywhere in the string, a missing scheme or a missing host
    all count as malformed.
    """
    if not text or any(ch.isspace() for ch in text):
        return None
    try:
        url = httpx.URL(text)
    except httpx.InvalidURL:
        return None
    if not url.scheme or not url.host:
        return None
    return url

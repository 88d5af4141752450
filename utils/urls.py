"""URL helpers for login redirects: link joining and open-redirect checks."""

from __future__ import annotations

from typing import Optional
from urllib.parse import quote_plus, urlsplit


def join_links(*links: Optional[str]) -> str:
    """Join path segments with single slashes, merging any query strings.

    >>> join_links("/Security/login", "logout")
    '/Security/login/logout'
    >>> join_links("/Security/changepassword", "?BackURL=%2Fa")
    '/Security/changepassword?BackURL=%2Fa'
    """
    path = ""
    queries = []
    for link in links:
        if not link:
            continue
        link, _, query = link.partition("?")
        if query:
            queries.append(query)
        if not link:
            continue
        path = link if not path else path.rstrip("/") + "/" + link.lstrip("/")

    if queries:
        return f"{path}?{'&'.join(queries)}"
    return path


def add_back_url_param(link: str, back_url: Optional[str]) -> str:
    """Carry ``back_url`` forward as a URL-encoded ``BackURL`` query parameter."""
    if not back_url:
        return link
    return join_links(link, "?BackURL=" + quote_plus(back_url))


def _has_control_chars(value: str) -> bool:
    return any(ord(ch) < 32 or ord(ch) == 127 for ch in value)


def anchor_site_relative(url: Optional[str]) -> Optional[str]:
    """Resolve a non-rooted relative path (``test/link``) against the site root.

    Anything with a scheme, a host or a leading slash is returned stripped but
    otherwise unchanged, so :func:`is_safe_redirect_url` still judges it.
    """
    if not url or not isinstance(url, str):
        return url
    url = url.strip()
    parts = urlsplit(url)
    if url and not parts.scheme and not parts.netloc and not url.startswith(("/", "\\")):
        return "/" + url
    return url


def is_safe_redirect_url(
    url: Optional[str],
    *,
    host_url: Optional[str] = None,
    allow_same_origin: bool = False,
) -> bool:
    """Return True when redirecting the browser to ``url`` cannot leave the site.

    Relative paths (``/account/profile``) are always accepted. Protocol-relative
    (``//host``) and backslash tricks are rejected. Absolute URLs are rejected
    unless ``allow_same_origin`` is set and their scheme and host equal those
    of ``host_url``.
    """
    if not url or not isinstance(url, str):
        return False
    url = url.strip()
    if not url or "\\" in url or _has_control_chars(url):
        return False

    parts = urlsplit(url)
    if not parts.scheme and not parts.netloc:
        return url.startswith("/") and not url.startswith("//")

    if not allow_same_origin or not host_url:
        return False
    if parts.scheme not in ("http", "https"):
        return False
    own = urlsplit(host_url)
    return (parts.scheme, parts.netloc.lower()) == (own.scheme, own.netloc.lower())

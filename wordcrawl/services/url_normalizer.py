"""Canonical URL handling for same-host link discovery.

Every URL the crawler stores or fetches goes through `normalize`, which maps
an href onto `https://<host><path>`: the scheme is forced to https, query
and fragment are dropped and the path is collapsed. Two hrefs that differ
only in those parts are the same page to the crawler.
"""
import posixpath
import re
from typing import Optional
from urllib.parse import urlsplit

_HTTP_PREFIXES = ("http://", "https://")
_SCHEME_RE = re.compile(r"^[a-z][a-z0-9+.\-]*:", re.IGNORECASE)
_HOSTNAME_RE = re.compile(r"^[a-z0-9\-]+(?:\.[a-z0-9\-]+)*\.([a-z]{2,})(?::[0-9]+)?$")

# Schemeless hrefs like "index.html" look like host names; these suffixes mark
# page files. File extensions win over the country code domains they collide
# with (pl, py, do, md); any other suffix is read as a top level domain.
_PAGE_SUFFIXES = frozenset({
    "htm", "html", "xhtml", "shtml", "phtml",
    "php", "asp", "aspx", "jsp", "jspx", "cgi", "cfm", "cfml", "do", "action",
    "pl", "py", "rb",
    "txt", "xml", "md", "json", "rss", "atom", "csv", "pdf",
})


def host_of(url: str) -> str:
    """Return the lower-cased authority of `url`, or "" if it has none."""
    return urlsplit(url).netloc.lower()


def canonicalize(host: str, path: str) -> str:
    cleaned = posixpath.normpath("/" + path.lstrip("/"))
    if cleaned == "/":
        return f"https://{host}"
    return f"https://{host}{cleaned}"


def _looks_like_host(segment: str) -> bool:
    match = _HOSTNAME_RE.match(segment)
    return match is not None and match.group(1) not in _PAGE_SUFFIXES


def _normalize_schemeless(href: str, host: str) -> Optional[str]:
    parts = urlsplit(f"https://{href}")
    authority = parts.netloc.lower()
    if authority == host:
        return canonicalize(host, parts.path)
    if _SCHEME_RE.match(href):
        # mailto:, javascript:, ftp: ...
        return None
    if _looks_like_host(authority):
        return None
    return canonicalize(host, urlsplit(href).path)


def normalize(href: str, host: str) -> Optional[str]:
    """Resolve `href` against `host` into a canonical URL.

    Returns None when the href points at another host, uses a non-HTTP
    scheme or cannot be parsed. Callers drop rejected hrefs silently.
    """
    host = host.lower()
    href = href.strip()
    try:
        if href.lower().startswith(_HTTP_PREFIXES) or href.startswith("//"):
            parts = urlsplit(href)
            if parts.netloc.lower() != host:
                return None
            return canonicalize(host, parts.path)
        if href.startswith("/"):
            return canonicalize(host, urlsplit(href).path)
        return _normalize_schemeless(href, host)
    except ValueError:
        return None

"""
URL validation, origin comparison and normalization.
"""
from __future__ import annotations

from typing import List, Optional
from urllib.parse import quote, urljoin, urlsplit

# Characters left as-is when percent-encoding a path
PATH_SAFE_CHARS = "/%:@!$&'()*+,;=-._~"

# Path segments meaning "." and "..", percent-encoded forms included
SINGLE_DOT = frozenset((".", "%2e"))
DOUBLE_DOT = frozenset(("..", ".%2e", "%2e.", "%2e%2e"))

# Schemes that always carry a host, with their default ports
DEFAULT_PORTS: dict[str, int] = {
    "http": 80,
    "https": 443,
    "ftp": 21,
    "ws": 80,
    "wss": 443,
}


def can_parse(url: str) -> bool:
    """Return True if the URL is syntactically valid on its own (no base)."""
    try:
        parts = urlsplit(url)
        parts.port  # raises on a non-numeric or out-of-range port
    except ValueError:
        return False

    if not parts.scheme:
        return False
    if parts.scheme.lower() in DEFAULT_PORTS and not parts.hostname:
        return False
    return True


def origin_of(url: str) -> Optional[str]:
    """
    Return the origin (scheme://host[:port]) of a URL.

    Scheme and host are lower-cased and a default port is elided, so
    ``HTTP://A.com:80`` and ``http://a.com`` share an origin. URLs without
    a host have an opaque origin and yield None.
    """
    try:
        parts = urlsplit(url)
        port = parts.port
    except ValueError:
        return None

    hostname = parts.hostname
    if not parts.scheme or not hostname:
        return None

    scheme = parts.scheme.lower()
    if ":" in hostname:
        hostname = f"[{hostname}]"

    if port is None or DEFAULT_PORTS.get(scheme) == port:
        return f"{scheme}://{hostname}"
    return f"{scheme}://{hostname}:{port}"


def have_same_origin(url1: str, url2: str) -> bool:
    """Check if both URLs parse and share scheme, host and port."""
    if not can_parse(url1) or not can_parse(url2):
        return False

    origin1 = origin_of(url1)
    return origin1 is not None and origin1 == origin_of(url2)


def remove_dot_segments(path: str) -> str:
    """Resolve "." and ".." segments of an absolute path."""
    segments = path.split("/")[1:]
    resolved: List[str] = []
    for i, segment in enumerate(segments):
        lowered = segment.lower()
        if lowered in SINGLE_DOT or lowered in DOUBLE_DOT:
            if lowered in DOUBLE_DOT and resolved:
                resolved.pop()
            # "/a/b/.." names the directory "/a/"
            if i == len(segments) - 1:
                resolved.append("")
        else:
            resolved.append(segment)
    return "/" + "/".join(resolved)


def normalize_url(url: str) -> Optional[str]:
    """
    Reduce a URL to origin + path for deduplication.

    - Drops the query string and fragment
    - Drops credentials and default ports
    - Uses "/" for an empty path
    - Resolves dot segments, so "/x/../b" and "/b" collapse
    - Percent-encodes spaces and non-ASCII characters, keeping existing
      escapes, so "/a b" and "/a%20b" collapse
    """
    origin = origin_of(url)
    if origin is None:
        return None

    path = urlsplit(url).path or "/"
    if not path.startswith("/"):
        path = "/" + path
    return origin + quote(remove_dot_segments(path), safe=PATH_SAFE_CHARS)


def resolve_url(href: str, base: str) -> Optional[str]:
    """Resolve an href found on ``base`` to a normalized absolute URL."""
    href = href.strip()
    # Bare hostnames such as "www.example.com/page" are treated as absolute.
    if href.startswith("www"):
        href = "http://" + href

    try:
        absolute = urljoin(base, href)
    except ValueError:
        return None
    return normalize_url(absolute)

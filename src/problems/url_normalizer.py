"""Canonical form of problem URLs.

The normalized URL is the join key between the local collection and the
remote database. Raw string comparison is never used, because the same
problem can appear with or without a trailing slash, with query strings
(``?tab=description``) or with extra path segments (``/description/``).
"""

from urllib.parse import urlsplit

PROBLEMS_SEGMENT = "problems"
DEFAULT_PORTS = {"http": 80, "https": 443}


def _path_segments(url: str):
    parts = urlsplit(url)
    if not parts.scheme or not parts.netloc:
        raise ValueError(f"Not an absolute URL: {url!r}")
    return parts, [segment for segment in parts.path.split('/') if segment]


def _origin(parts) -> str:
    """scheme://host[:port] without userinfo; the scheme's default port is dropped."""
    scheme = parts.scheme.lower()
    host = parts.hostname or ""
    if ":" in host:
        host = f"[{host}]"
    port = parts.port
    if port is not None and port != DEFAULT_PORTS.get(scheme):
        host = f"{host}:{port}"
    return f"{scheme}://{host}"


def normalize_url(url: str) -> str:
    """Return ``{origin}/problems/{slug}/`` for problem URLs, else the input.

    Never raises: anything that cannot be parsed is returned unchanged.

    Example:
        >>> normalize_url("https://leetcode.com/problems/two-sum/description/?tab=notes")
        'https://leetcode.com/problems/two-sum/'
        >>> normalize_url("not a url")
        'not a url'
    """
    try:
        parts, segments = _path_segments(url)
        origin = _origin(parts)
    except (ValueError, TypeError, AttributeError):
        return url

    if len(segments) >= 2 and segments[0] == PROBLEMS_SEGMENT:
        return f"{origin}/{PROBLEMS_SEGMENT}/{segments[1]}/"

    return url


def extract_slug(url: str) -> str:
    """Extract the problem slug from a URL.

    Uses the segment after ``/problems/`` when present, otherwise the last
    non-empty path segment, otherwise the input itself.
    """
    try:
        _, segments = _path_segments(url)
    except (ValueError, TypeError, AttributeError):
        return url

    if len(segments) >= 2 and segments[0] == PROBLEMS_SEGMENT:
        return segments[1]
    if segments:
        return segments[-1]
    return url

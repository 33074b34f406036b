from __future__ import annotations

from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

from canonguard.core.config import TRACKING_PARAMS


def canonicalize_url(url: str) -> str:
    """Return a stable form of ``url`` so one physical page maps to one source.

    Drops tracking parameters, trailing slashes (root path excepted) and
    lowercases the host. Input that is not an absolute URL comes back
    unchanged. Idempotent.
    """
    if not isinstance(url, str) or not url:
        return url
    try:
        parts = urlsplit(url)
    except ValueError:
        return url
    if not parts.scheme or not parts.netloc:
        return url

    query = [
        (key, value)
        for key, value in parse_qsl(parts.query, keep_blank_values=True)
        if key not in TRACKING_PARAMS
    ]

    path = parts.path
    if path != "/" and path.endswith("/"):
        path = path.rstrip("/") or "/"
    if not path and parts.scheme in ("http", "https"):
        path = "/"

    userinfo, at, hostport = parts.netloc.rpartition("@")
    netloc = f"{userinfo}{at}{hostport.lower()}"

    return urlunsplit((parts.scheme, netloc, path, urlencode(query), parts.fragment))

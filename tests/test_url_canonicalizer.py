"""
Tests for URL canonicalisation.
"""
from __future__ import annotations

import pytest

from canonguard.services.url_svc import canonicalize_url


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        (
            "https://Example.COM/events/?utm_source=x&id=5&fbclid=abc",
            "https://example.com/events?id=5",
        ),
        ("https://example.com/", "https://example.com/"),
        ("https://example.com", "https://example.com/"),
        ("https://example.com/a/#top", "https://example.com/a#top"),
        ("https://example.com/a//", "https://example.com/a"),
        ("https://User@Example.com:8443/x/", "https://User@example.com:8443/x"),
        ("https://example.fr/agenda?Ref=keep", "https://example.fr/agenda?Ref=keep"),
    ],
)
def test_canonicalize_url_normalises(raw, expected):
    assert canonicalize_url(raw) == expected


def test_canonicalize_url_removes_every_tracking_param():
    tracking = (
        "utm_source=a&utm_medium=b&utm_campaign=c&utm_term=d&utm_content=e"
        "&fbclid=f&gclid=g&ref=h&source=i&campaign=j&affiliate=k"
    )
    assert canonicalize_url(f"https://example.com/page?{tracking}") == "https://example.com/page"


def test_canonicalize_url_keeps_other_params_in_order():
    url = "https://example.com/search?q=legal&utm_medium=mail&page=2"
    assert canonicalize_url(url) == "https://example.com/search?q=legal&page=2"


@pytest.mark.parametrize(
    "raw",
    ["not a url", "", "/relative/path/", "http://[::1", "mailto:someone@example.com", "example.com/x/"],
)
def test_canonicalize_url_returns_unparseable_input_unchanged(raw):
    assert canonicalize_url(raw) == raw


@pytest.mark.parametrize(
    "raw",
    [
        "https://Example.com/Events/?utm_source=x&b=1#frag",
        "https://example.com/a//",
        "http://example.com",
        "https://example.com/search?q=caf%C3%A9+paris&flag",
        "https://example.com/path%2F/",
        "http://[::1",
        "garbage ::: input",
        "",
    ],
)
def test_canonicalize_url_is_idempotent(raw):
    once = canonicalize_url(raw)
    assert canonicalize_url(once) == once

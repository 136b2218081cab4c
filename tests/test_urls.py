"""
URL helper tests
"""

import pytest

from origin_crawler.urls import (
    can_parse,
    have_same_origin,
    normalize_url,
    origin_of,
    resolve_url,
)


@pytest.mark.parametrize(
    "url",
    ["http://a.com/", "https://a.com/x/y", "http://a.com:8080/x", "http://[::1]:8000/"],
)
def test_normalize_is_idempotent(url):
    assert normalize_url(url) == url
    assert normalize_url(normalize_url(url)) == url


def test_normalize_drops_query_and_fragment():
    assert normalize_url("http://a.com/x?q=1#frag") == normalize_url("http://a.com/x") == "http://a.com/x"


def test_normalize_canonical_origin():
    assert normalize_url("HTTP://A.COM:80") == "http://a.com/"
    assert normalize_url("https://user:pw@a.com:443/p") == "https://a.com/p"
    assert normalize_url("https://a.com:8443/p") == "https://a.com:8443/p"


def test_normalize_opaque_url():
    assert normalize_url("mailto:someone@a.com") is None


def test_origin_of():
    assert origin_of("http://a.com/x?y") == "http://a.com"
    assert origin_of("http://[::1]:8080/x") == "http://[::1]:8080"
    assert origin_of("/relative") is None


@pytest.mark.parametrize(
    ("url", "expected"),
    [
        ("http://a.com", True),
        ("https://a.com/x?y#z", True),
        ("mailto:someone@a.com", True),
        ("", False),
        ("not a url", False),
        ("/relative/path", False),
        ("http:///no-host", False),
        ("http://a.com:port/", False),
        ("http://[::1/", False),
    ],
)
def test_can_parse(url, expected):
    assert can_parse(url) is expected


@pytest.mark.parametrize(
    ("url1", "url2", "expected"),
    [
        ("http://a.com/x", "http://a.com:80/y?z", True),
        ("http://a.com/", "https://a.com/", False),
        ("http://a.com/", "http://www.a.com/", False),
        ("http://a.com/", "http://a.com:8080/", False),
        ("http://a.com/", "not a url", False),
        ("mailto:x@a.com", "mailto:y@a.com", False),
    ],
)
def test_have_same_origin(url1, url2, expected):
    assert have_same_origin(url1, url2) is expected


def test_resolve_url():
    base = "http://a.com/dir/page"

    assert resolve_url(" next ", base) == "http://a.com/dir/next"
    assert resolve_url("www.b.com", base) == "http://www.b.com/"
    assert resolve_url("https://b.com/x?y=1", base) == "https://b.com/x"
    assert resolve_url("http://[::1", base) is None


@pytest.mark.parametrize(
    ("url", "expected"),
    [
        ("http://a.com/x/../b", "http://a.com/b"),
        ("http://a.com/./b/./c", "http://a.com/b/c"),
        ("http://a.com/a/b/..", "http://a.com/a/"),
        ("http://a.com/a/.", "http://a.com/a/"),
        ("http://a.com/../../b", "http://a.com/b"),
        ("http://a.com/a/%2e%2E/b", "http://a.com/b"),
        ("http://a.com/a//b", "http://a.com/a//b"),
    ],
)
def test_normalize_removes_dot_segments(url, expected):
    assert normalize_url(url) == expected
    assert normalize_url(expected) == expected


@pytest.mark.parametrize(
    ("url", "expected"),
    [
        ("http://a.com/a b", "http://a.com/a%20b"),
        ("http://a.com/a%20b", "http://a.com/a%20b"),
        ("http://a.com/café", "http://a.com/caf%C3%A9"),
        ("http://a.com/caf%C3%A9", "http://a.com/caf%C3%A9"),
        ("http://a.com/p;v=1/@user:x", "http://a.com/p;v=1/@user:x"),
    ],
)
def test_normalize_percent_encodes_path(url, expected):
    assert normalize_url(url) == expected

# File: tests/test_utils.py
import pytest

from font_scout.utils import is_same_site, normalize_url, remove_duplicates, url_origin


def test_normalize_strips_fragment_tracking_and_slash():
    assert normalize_url("https://a.com/x/?utm_source=foo&ref=bar#sec") == "https://a.com/x"


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("example.com", "https://example.com"),
        ("HTTP://Example.COM:80/Path", "http://example.com/Path"),
        ("https://example.com:443/", "https://example.com"),
        ("https://example.com:8443/a", "https://example.com:8443/a"),
        ("https://a.com/p?id=3&gclid=x&utm_medium=cpc", "https://a.com/p?id=3"),
        ("https://a.com/p?q=", "https://a.com/p?q="),
        ("https://a.com/x//", "https://a.com/x"),
    ],
)
def test_normalize_variants(raw, expected):
    assert normalize_url(raw) == expected


@pytest.mark.parametrize(
    "url",
    [
        "https://a.com/x/?utm_source=foo&ref=bar#sec",
        "example.com/about/",
        "http://[::1]:8080/a/b/",
        "https://a.com/search?q=a+b&page=2",
        "https://user@a.com/",
    ],
)
def test_normalize_is_idempotent(url):
    once = normalize_url(url)
    assert normalize_url(once) == once


def test_malformed_url_returned_unchanged():
    assert normalize_url("http://[::1") == "http://[::1"
    assert normalize_url("") == ""


def test_url_origin():
    assert url_origin("https://a.com:8080/x/y") == "https://a.com:8080"


def test_is_same_site():
    assert is_same_site("https://a.com/x", "https://a.com")
    assert not is_same_site("https://blog.a.com/x", "https://a.com")
    assert is_same_site("https://blog.a.com/x", "https://a.com", include_subdomains=True)
    assert not is_same_site("https://nota.com/x", "https://a.com", include_subdomains=True)
    assert not is_same_site("ftp://a.com/x", "https://a.com")


def test_remove_duplicates_keeps_first():
    urls = ["https://a.com/x/", "https://a.com/x#top", "https://a.com/y"]
    assert remove_duplicates(urls) == ["https://a.com/x/", "https://a.com/y"]

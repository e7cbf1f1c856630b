"""URL Rules — tests for is_not_url.

Tests cover:
    - Schemed URLs, bare domains, localhost and file URLs are URLs
    - Search text, quoted strings and non-strings are not
    - Special schemes (about:, data:) are URLs when they parse
"""

import pytest

from site_collection.core.url_rules import get_scheme, is_not_url


@pytest.mark.parametrize("value", [
    "https://example.com",
    "http://example.com:8080/path?q=1",
    "example.com",
    "localhost",
    "file:///Users/x/file.txt",
    "about:blank",
    "data:text/plain,hello",
])
def test_urls(value):
    assert not is_not_url(value)


@pytest.mark.parametrize("value", [
    "hello",
    "two words",
    '"quoted.com"',
    "?query",
    ".hidden",
    "https://exa mple.com",
    None,
    42,
])
def test_not_urls(value):
    assert is_not_url(value)


def test_get_scheme():
    assert get_scheme("HTTPS://a.com") == "https://"
    assert get_scheme("a.com") is None

import pytest

from sitemap_builder.exceptions import SitemapValidationError
from sitemap_builder.urls import (
    escape_url,
    join_location,
    resolve_relative_url,
    xml_escape,
    xml_unescape,
)


@pytest.mark.parametrize(
    "url, expected",
    [
        ("https://example.com/a b/c&d", "https://example.com/a%20b/c%26d"),
        ("https://example.com", "https://example.com"),
        ("https://example.com/", "https://example.com/"),
        ("https://example.com/café", "https://example.com/caf%C3%A9"),
        ("https://example.com/p?a=1&b=2", "https://example.com/p?a=1&amp;b=2"),
        ("https://example.com/p#section", "https://example.com/p"),
        ("http://example.com:8080/x y", "http://example.com:8080/x%20y"),
        ("https://example.com/it's", "https://example.com/it%27s"),
    ],
)
def test_escape_url(url, expected):
    assert escape_url(url) == expected


def test_escape_url_requires_absolute_url():
    with pytest.raises(SitemapValidationError):
        escape_url("/just/a/path")


def test_xml_escape_replaces_ampersand_first():
    assert xml_escape("<a href=\"x\">&'") == "&lt;a href=&quot;x&quot;&gt;&amp;&apos;"
    assert xml_escape("&lt;") == "&amp;lt;"


def test_xml_unescape_reverses_escape():
    text = "a&b<c>'d\"&amp;"
    assert xml_unescape(xml_escape(text)) == text


def test_join_location():
    assert join_location("https://example.com", "about") == "https://example.com/about"
    assert join_location("https://example.com", "/about") == "https://example.com/about"
    assert join_location("https://example.com", "") == "https://example.com/"


def test_resolve_relative_url():
    domain = "https://example.com"
    assert resolve_relative_url(domain, "https://cdn.com/a.png") == "https://cdn.com/a.png"
    assert resolve_relative_url(domain, "/a.png") == "https://example.com/a.png"
    assert resolve_relative_url(domain, "img/a.png") == "https://example.com/img/a.png"

import xml.etree.ElementTree as ET

import pytest
import requests

from sitemap_builder.builder import SitemapBuilder

SM = "{http://www.sitemaps.org/schemas/sitemap/0.9}"
IMAGE = "{http://www.google.com/schemas/sitemap-image/1.1}"
VIDEO = "{http://www.google.com/schemas/sitemap-video/1.1}"
NEWS = "{http://www.google.com/schemas/sitemap-news/0.9}"

W3C_DATETIME = r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}[+-]\d{2}:\d{2}$"


def parse(xml_text):
    """Parses a generated document (declaration, comment and PI included)."""
    return ET.fromstring(xml_text.encode("utf-8"))


def locs(root):
    """Returns the <loc> texts directly under each <url> or <sitemap>."""
    return [el.text for el in root.findall(f"./*/{SM}loc")]


@pytest.fixture
def builder():
    """A builder with every extension enabled."""
    return SitemapBuilder(
        "https://example.com", {"images": True, "videos": True, "news": True}
    )


@pytest.fixture
def plain_builder():
    return SitemapBuilder("https://example.com")


# Helper class for mocking requests.post
class MockResponse:
    def __init__(self, status_code=200):
        self.status_code = status_code
        self.ok = 200 <= status_code < 300

    def raise_for_status(self):
        if not self.ok:
            raise requests.exceptions.HTTPError(f"{self.status_code} Client Error")


@pytest.fixture
def patch_requests(monkeypatch):
    """Patches requests.post, recording calls; some endpoints fail."""
    calls = []

    def fake_post(url, **kwargs):  # Accept **kwargs to handle json/timeout/headers
        calls.append((url, kwargs))
        if url == "http://error.com/indexnow":
            raise requests.exceptions.RequestException("Network error")
        if url == "http://forbidden.com/indexnow":
            return MockResponse(status_code=403)
        return MockResponse(status_code=202)

    monkeypatch.setattr(requests, "post", fake_post)
    return calls

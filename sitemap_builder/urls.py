"""Helpers for normalising and escaping sitemap locations."""

from urllib.parse import quote, urlsplit

from .exceptions import SitemapValidationError

# Ampersand first so entities produced by later substitutions survive.
_XML_ENTITIES = (
    ("&", "&amp;"),
    ("'", "&apos;"),
    ('"', "&quot;"),
    (">", "&gt;"),
    ("<", "&lt;"),
)


def xml_escape(text: str) -> str:
    """Replace the five XML special characters with their entities."""
    for char, entity in _XML_ENTITIES:
        text = text.replace(char, entity)
    return text


def xml_unescape(text: str) -> str:
    """Inverse of :func:`xml_escape`."""
    for char, entity in reversed(_XML_ENTITIES):
        text = text.replace(entity, char)
    return text


def is_absolute_url(url: str) -> bool:
    parts = urlsplit(url)
    return bool(parts.scheme and parts.netloc)


def join_location(domain: str, path: str) -> str:
    """Join *path* onto *domain*, adding the leading ``/`` when missing."""
    if not path.startswith("/"):
        path = f"/{path}"
    return domain + path


def resolve_relative_url(domain: str, url: str) -> str:
    """Return *url* unchanged if it has a scheme, else resolve it on *domain*."""
    if "://" in url:
        return url
    return join_location(domain, url)


def escape_url(url: str) -> str:
    """Percent-encode each path segment of *url*, then XML-escape the result.

    The scheme, host and query are kept as given; the fragment is dropped.

    >>> escape_url("https://example.com/a b/c&d?x=1&y=2")
    'https://example.com/a%20b/c%26d?x=1&amp;y=2'
    """
    parts = urlsplit(url)
    if not (parts.scheme and parts.netloc):
        raise SitemapValidationError(f"Location {url!r} is not an absolute URL")

    path = "/".join(quote(segment, safe="") for segment in parts.path.split("/"))
    location = f"{parts.scheme}://{parts.netloc}{path}"
    if parts.query:
        location += f"?{parts.query}"
    return xml_escape(location)

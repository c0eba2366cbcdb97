"""Fluent builder producing a single sitemaps.org ``<urlset>`` document.

A caller describes one URL at a time::

    builder = SitemapBuilder("https://example.com", {"images": True})
    (
        builder.set_location_relative("/blog")
        .set_last_modified("2024-05-01")
        .set_change_frequency("weekly")
        .set_priority("0.8")
        .add_image("/img/cover.png", {"title": "Cover"})
    )
    builder.serialize_to_file("sitemap.xml")

Every call to ``set_location`` flushes the previous URL into the document, so
the last URL is only written when the document is serialized (or when
``append_to_document`` is called explicitly).
"""

from __future__ import annotations

import xml.etree.ElementTree as ET
from dataclasses import dataclass
from typing import Any, Iterable, List, Mapping, Optional, Tuple, Union

from .dates import DateLike, generated_at, to_w3c_datetime
from .document import (
    DEFAULT_STYLESHEET,
    IMAGE_NS,
    NEWS_NS,
    SITEMAP_NS,
    VIDEO_NS,
    to_xml_string,
    write_document,
    write_temp_document,
)
from .entries import (
    CHANGE_FREQUENCIES,
    ImageEntry,
    NewsEntry,
    UrlEntry,
    VideoEntry,
    check_xml_text,
)
from .exceptions import (
    SitemapCapacityError,
    SitemapFeatureError,
    SitemapValidationError,
)
from .urls import (
    escape_url,
    is_absolute_url,
    join_location,
    resolve_relative_url,
    xml_unescape,
)

# Search engines accept 50000 URLs per file; stay well below that so the
# 50MB size limit is not reached either.
MAX_URLS = 30000


@dataclass
class SitemapOptions:
    """Features enabled for a :class:`SitemapBuilder`."""

    images: bool = False
    videos: bool = False
    news: bool = False
    escape: bool = True
    max_urls: int = MAX_URLS
    stylesheet: Optional[str] = DEFAULT_STYLESHEET


class SitemapBuilder:
    """Accumulates ``<url>`` entries and serializes them as a sitemap.

    A builder is meant to be driven by a single writer; it keeps the pending
    entry, the remaining capacity and the document tree without locking.
    """

    def __init__(
        self,
        domain: str,
        options: Union[SitemapOptions, Mapping[str, Any], None] = None,
    ):
        if options is None:
            options = SitemapOptions()
        elif not isinstance(options, SitemapOptions):
            options = SitemapOptions(**options)

        self._domain = domain.rstrip("/")
        self.options = options
        self._remaining = options.max_urls
        self._entries: List[UrlEntry] = []
        self._pending: Optional[UrlEntry] = None
        self._stamp = generated_at()
        self._doc = self._new_document()

    def _new_document(self) -> ET.Element:
        root = ET.Element("urlset", {"xmlns": SITEMAP_NS})
        if self.options.images:
            root.set("xmlns:image", IMAGE_NS)
        if self.options.videos:
            root.set("xmlns:video", VIDEO_NS)
        if self.options.news:
            root.set("xmlns:news", NEWS_NS)
        return root

    # --- Accessors ---
    def get_domain(self) -> str:
        return self._domain

    @property
    def remaining(self) -> int:
        """Number of further ``set_location`` calls that will succeed."""
        return self._remaining

    @property
    def entries(self) -> Tuple[UrlEntry, ...]:
        """Entries already flushed into the document."""
        return tuple(self._entries)

    @property
    def pending(self) -> Optional[UrlEntry]:
        return self._pending

    @property
    def document(self) -> ET.Element:
        return self._doc

    # --- Locations ---
    def set_location_relative(self, path: str) -> "SitemapBuilder":
        """Start a new URL at *path* on the builder's domain."""
        return self.set_location(join_location(self._domain, path))

    def set_location(self, url: str) -> "SitemapBuilder":
        """Flush the pending URL and start a new one at the absolute *url*.

        Raises
        ------
        SitemapCapacityError
            If the builder already holds ``max_urls`` URLs.
        SitemapValidationError
            If *url* is not absolute.
        """
        entry = self._pending
        if entry is None or entry.loc is not None:
            self.append_to_document()
            entry = UrlEntry()

        if self._remaining <= 0:
            raise SitemapCapacityError("The maximum urls has been exhausted")

        if self.options.escape:
            loc = escape_url(url)
        elif is_absolute_url(url):
            loc = url
        else:
            raise SitemapValidationError(f"Location {url!r} is not an absolute URL")
        check_xml_text(loc, "Location")

        # Details set before the location belong to this URL.
        self._remaining -= 1
        entry.loc = loc
        self._pending = entry
        return self

    def append_to_document(self) -> "SitemapBuilder":
        """Write the pending URL into the document.

        A no-op when nothing is pending or the pending details still lack a
        location.
        """
        entry = self._pending
        if entry is None or entry.loc is None:
            return self

        self._pending = None
        self._append_url_element(entry)
        self._entries.append(entry)
        return self

    # --- URL details ---
    def _pending_entry(self) -> UrlEntry:
        if self._pending is None:
            self._pending = UrlEntry()
        return self._pending

    def set_last_modified(self, date: DateLike) -> "SitemapBuilder":
        self._pending_entry().lastmod = to_w3c_datetime(date)
        return self

    def set_change_frequency(self, value: str) -> "SitemapBuilder":
        if value not in CHANGE_FREQUENCIES:
            raise SitemapValidationError(f"changefreq value {value!r} is not valid")
        self._pending_entry().changefreq = value
        return self

    def set_priority(self, value: Union[str, float]) -> "SitemapBuilder":
        check_xml_text(value, "priority")
        # Stored as given; range checking is left to the consumer.
        self._pending_entry().priority = str(value)
        return self

    def add_image(
        self, image_url: str, options: Optional[Mapping[str, Any]] = None
    ) -> "SitemapBuilder":
        """Attach an image; relative *image_url* values resolve on the domain."""
        if not self.options.images:
            raise SitemapFeatureError("Enable the images option before adding an image")

        image = ImageEntry(resolve_relative_url(self._domain, image_url), dict(options or {}))
        self._pending_entry().images.append(image)
        return self

    def add_video(
        self, title: str, options: Optional[Mapping[str, Any]] = None
    ) -> "SitemapBuilder":
        """Attach a video.

        *options* must provide ``thumbnail_loc`` (or ``thumbnail``),
        ``description`` and one of ``content_loc`` / ``player_loc``.
        """
        if not self.options.videos:
            raise SitemapFeatureError("Enable the videos option before adding a video")

        video = VideoEntry.from_options(title, options)
        self._pending_entry().videos.append(video)
        return self

    def add_news(
        self, name: str, language: str, options: Optional[Mapping[str, Any]] = None
    ) -> "SitemapBuilder":
        """Attach the news block (publication *name* and *language*)."""
        if not self.options.news:
            raise SitemapFeatureError("Enable the news option before adding news")

        entry = self._pending_entry()
        if entry.news is not None:
            raise SitemapValidationError("A url can only hold one news entry")
        entry.news = NewsEntry(name, language, dict(options or {}))
        return self

    # Short names
    loc = set_location_relative
    url = set_location
    append = append_to_document
    lastmod = set_last_modified
    changefreq = freq = set_change_frequency
    priority = set_priority
    image = add_image
    video = add_video
    news = add_news

    # --- Serialization ---
    def _append_url_element(self, entry: UrlEntry) -> None:
        url = ET.SubElement(self._doc, "url")
        # Escaped locations already carry XML entities; ElementTree re-encodes.
        loc = xml_unescape(entry.loc) if self.options.escape else entry.loc
        ET.SubElement(url, "loc").text = loc

        for name in ("lastmod", "changefreq", "priority"):
            value = getattr(entry, name)
            if value is not None:
                ET.SubElement(url, name).text = value

        for image in entry.images:
            _add_extension(url, "image", image.items())

        for video in entry.videos:
            _add_extension(url, "video", video.items())

        if entry.news is not None:
            news = ET.SubElement(url, "news:news")
            publication = ET.SubElement(news, "news:publication")
            ET.SubElement(publication, "news:name").text = entry.news.name
            ET.SubElement(publication, "news:language").text = entry.news.language
            for key, value in entry.news.items():
                ET.SubElement(news, f"news:{key}").text = value

    def serialize_to_string(self) -> str:
        self.append_to_document()
        return to_xml_string(self._doc, self.options.stylesheet, self._stamp)

    def serialize_to_file(self, path) -> str:
        """Flush and write the sitemap to *path*; returns the path written."""
        self.append_to_document()
        return write_document(path, self._doc, self.options.stylesheet, self._stamp)

    def serialize_to_temp_file(self) -> str:
        """Flush and write the sitemap to a new temporary file; returns its path."""
        self.append_to_document()
        return write_temp_document(self._doc, self.options.stylesheet, self._stamp)

    save_to = serialize_to_file
    save_temp = serialize_to_temp_file


def _add_extension(
    parent: ET.Element, prefix: str, fields: Iterable[Tuple[str, str]]
) -> None:
    child = ET.SubElement(parent, f"{prefix}:{prefix}")
    for key, value in fields:
        ET.SubElement(child, f"{prefix}:{key}").text = value

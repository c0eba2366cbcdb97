"""Value types describing the ``<url>`` entries of a sitemap.

Extension fields (image, video and news) are kept in plain dicts, which
preserve insertion order, so the emitted XML follows the order the caller
supplied them in.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Mapping, Optional, Tuple

from .exceptions import SitemapValidationError

CHANGE_FREQUENCIES = (
    "always",
    "hourly",
    "daily",
    "weekly",
    "monthly",
    "yearly",
    "never",
)

# Fields every <video:video> needs, plus the two raw-content alternatives.
VIDEO_REQUIRED_FIELDS = ("thumbnail_loc", "title", "description")
VIDEO_CONTENT_FIELDS = ("content_loc", "player_loc")

# Keys emitted inside <news:publication> rather than flat under <news:news>.
NEWS_PUBLICATION_FIELDS = ("name", "language")

Fields = Dict[str, Any]

_TAG_NAME = re.compile(r"^[A-Za-z_][A-Za-z0-9_.-]*$")

# Control characters XML 1.0 cannot represent, even as character references.
_INVALID_XML_CHARS = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f]")


def _text(value: Any) -> str:
    return value if isinstance(value, str) else str(value)


def check_xml_text(value: Any, label: str) -> None:
    """Raise if *value* holds characters that cannot appear in XML."""
    if value is not None and _INVALID_XML_CHARS.search(_text(value)):
        raise SitemapValidationError(f"{label} {value!r} contains invalid XML characters")


def _check_fields(fields: Fields, kind: str) -> None:
    for key, value in fields.items():
        if not isinstance(key, str) or not _TAG_NAME.match(key):
            raise SitemapValidationError(f"{kind} field name {key!r} is not a valid tag")
        check_xml_text(value, f"{kind} {key}")


@dataclass
class ImageEntry:
    """An ``<image:image>`` block: a location plus free-form fields."""

    loc: str
    fields: Fields = field(default_factory=dict)

    def __post_init__(self):
        check_xml_text(self.loc, "image loc")
        _check_fields(self.fields, "image")

    def items(self) -> Iterator[Tuple[str, str]]:
        yield "loc", self.loc
        for key, value in self.fields.items():
            if key != "loc" and value is not None:
                yield key, _text(value)


@dataclass
class VideoEntry:
    """A ``<video:video>`` block.

    Construction fails with :class:`SitemapValidationError` when a required
    field is missing or when neither ``content_loc`` nor ``player_loc`` is
    given.
    """

    fields: Fields

    def __post_init__(self):
        _check_fields(self.fields, "video")
        for name in VIDEO_REQUIRED_FIELDS:
            if self.fields.get(name) is None:
                raise SitemapValidationError(f"video {name} option is required")
        if all(self.fields.get(name) is None for name in VIDEO_CONTENT_FIELDS):
            raise SitemapValidationError(
                "Raw video url content_loc or player_loc is required"
            )

    @classmethod
    def from_options(
        cls, title: str, options: Optional[Mapping[str, Any]] = None
    ) -> "VideoEntry":
        """Build a video entry, accepting ``thumbnail`` as ``thumbnail_loc``."""
        fields = dict(options or {})
        fields["title"] = title
        if "thumbnail" in fields:
            fields["thumbnail_loc"] = fields.pop("thumbnail")
        return cls(fields)

    def items(self) -> Iterator[Tuple[str, str]]:
        leading = VIDEO_REQUIRED_FIELDS + VIDEO_CONTENT_FIELDS
        for key in leading:
            if self.fields.get(key) is not None:
                yield key, _text(self.fields[key])
        for key, value in self.fields.items():
            if key not in leading and value is not None:
                yield key, _text(value)


@dataclass
class NewsEntry:
    """A ``<news:news>`` block with its nested publication."""

    name: str
    language: str
    fields: Fields = field(default_factory=dict)

    def __post_init__(self):
        _check_fields(self.fields, "news")
        check_xml_text(self.name, "news publication name")
        check_xml_text(self.language, "news publication language")
        if not self.name:
            raise SitemapValidationError("news publication name is required")
        if not self.language:
            raise SitemapValidationError("news publication language is required")

    def items(self) -> Iterator[Tuple[str, str]]:
        for key, value in self.fields.items():
            if key not in NEWS_PUBLICATION_FIELDS and value is not None:
                yield key, _text(value)


@dataclass
class UrlEntry:
    """One ``<url>`` element of a sitemap."""

    loc: Optional[str] = None
    lastmod: Optional[str] = None
    changefreq: Optional[str] = None
    priority: Optional[str] = None
    images: List[ImageEntry] = field(default_factory=list)
    videos: List[VideoEntry] = field(default_factory=list)
    news: Optional[NewsEntry] = None

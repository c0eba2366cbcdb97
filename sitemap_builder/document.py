"""Writing sitemap element trees out as UTF-8 XML documents."""

from __future__ import annotations

import os
import tempfile
import xml.etree.ElementTree as ET
from typing import Optional

from .dates import generated_at
from .exceptions import SitemapIOError
from .urls import xml_escape

# Namespaces for sitemap XML files and their extensions
SITEMAP_NS = "http://www.sitemaps.org/schemas/sitemap/0.9"
IMAGE_NS = "http://www.google.com/schemas/sitemap-image/1.1"
VIDEO_NS = "http://www.google.com/schemas/sitemap-video/1.1"
NEWS_NS = "http://www.google.com/schemas/sitemap-news/0.9"

DEFAULT_STYLESHEET = "https://dev.rejsy4you.pl/tools/sitemap.xsl"

XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>'


def to_xml_string(
    root: ET.Element,
    stylesheet: Optional[str] = DEFAULT_STYLESHEET,
    stamp: Optional[str] = None,
) -> str:
    """Render *root* preceded by the declaration, comment and stylesheet PI."""
    lines = [XML_DECLARATION, f"<!-- Generated at: {stamp or generated_at()} -->"]
    if stylesheet:
        lines.append(
            f'<?xml-stylesheet type="text/xsl" href="{xml_escape(stylesheet)}"?>'
        )
    lines.append(ET.tostring(root, encoding="unicode"))
    return "\n".join(lines) + "\n"


def write_document(
    path,
    root: ET.Element,
    stylesheet: Optional[str] = DEFAULT_STYLESHEET,
    stamp: Optional[str] = None,
) -> str:
    """Write the document to *path* and return the path written."""
    path = os.fspath(path)
    try:
        with open(path, "w", encoding="utf-8") as fp:
            fp.write(to_xml_string(root, stylesheet, stamp))
    except OSError as e:
        raise SitemapIOError(f"Writing the sitemap {path} failed: {e}") from e
    return path


def write_temp_document(
    root: ET.Element,
    stylesheet: Optional[str] = DEFAULT_STYLESHEET,
    stamp: Optional[str] = None,
) -> str:
    """Write the document to a new temporary file and return its path."""
    try:
        fd, path = tempfile.mkstemp(prefix="sitemap-", suffix=".xml")
        with os.fdopen(fd, "w", encoding="utf-8") as fp:
            fp.write(to_xml_string(root, stylesheet, stamp))
    except OSError as e:
        raise SitemapIOError(f"Saving the sitemap to a temporary file failed: {e}") from e
    return path

"""Builds a sitemap index from sitemap files that were already generated.

Kept apart from ``builder.py``: the index only needs finished files, a
destination directory and the public URL those files will be served from.
"""

from __future__ import annotations

import os
import shutil
import xml.etree.ElementTree as ET
from typing import Mapping, Optional

from .dates import generated_at, now_w3c
from .document import DEFAULT_STYLESHEET, SITEMAP_NS, write_document
from .exceptions import SitemapIOError, SitemapValidationError


class SitemapIndexBuilder:
    """Relocates sitemap files and writes the ``<sitemapindex>`` for them."""

    @classmethod
    def build(
        cls,
        index_filename: str,
        destination_directory,
        public_base_url: str,
        sitemaps: Mapping[str, str],
        *,
        stylesheet: Optional[str] = DEFAULT_STYLESHEET,
    ) -> str:
        """Move every sitemap into place and write the index next to them.

        Parameters
        ----------
        index_filename
            File name of the index inside *destination_directory*.
        destination_directory
            Directory receiving the sitemaps and the index. Must be writable.
        public_base_url
            URL the directory is served from; each ``<loc>`` is this URL plus
            the sitemap file name.
        sitemaps
            Maps the final file name of each sitemap to its current path.
            Files are moved, and listed, in iteration order.

        Returns
        -------
        str
            Path of the written index file.

        Raises
        ------
        SitemapIOError
            If the directory is not writable, a move fails or the index
            cannot be written.
        SitemapValidationError
            If a sitemap name is not a plain file name.
        """
        directory = os.fspath(destination_directory)
        if not directory.endswith("/"):
            directory += "/"
        if not (os.path.isdir(directory) and os.access(directory, os.W_OK)):
            raise SitemapIOError(f"The path {directory} is not writable")

        if not public_base_url.endswith("/"):
            public_base_url += "/"

        for name in sitemaps:
            cls._check_name(name)
        cls._check_name(index_filename)

        stamp = generated_at()
        root = ET.Element("sitemapindex", {"xmlns": SITEMAP_NS})

        for name, source in sitemaps.items():
            destination = directory + name
            try:
                shutil.move(os.fspath(source), destination)
            except OSError as e:
                raise SitemapIOError(f"Moving the file {destination} failed: {e}") from e

            sitemap = ET.SubElement(root, "sitemap")
            ET.SubElement(sitemap, "loc").text = public_base_url + name
            ET.SubElement(sitemap, "lastmod").text = now_w3c()

        return write_document(directory + index_filename, root, stylesheet, stamp)

    @staticmethod
    def _check_name(name: str) -> None:
        if not name or os.path.basename(name) != name or name in (".", ".."):
            raise SitemapValidationError(f"Invalid sitemap file name: {name!r}")

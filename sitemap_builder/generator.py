"""Module for generating one or more sitemaps (plus an index) from URL records."""

import os
import time
from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, List, Optional

from .builder import MAX_URLS, SitemapBuilder, SitemapOptions
from .document import DEFAULT_STYLESHEET
from .exceptions import SitemapCapacityError, SitemapValidationError
from .index import SitemapIndexBuilder
from .urls import resolve_relative_url


@dataclass
class UrlRecord:
    """One URL to list, with its optional sitemap details."""

    loc: str
    lastmod: Optional[str] = None
    changefreq: Optional[str] = None
    priority: Optional[str] = None


def read_url_records(path: str) -> Iterator[UrlRecord]:
    """Reads URL records from a text file.

    One URL (or domain-relative path) per line, optionally followed by
    tab-separated lastmod, changefreq and priority columns. Empty columns,
    blank lines and lines starting with ``#`` are skipped.
    """
    with open(path, "r", encoding="utf-8") as fp:
        for lineno, line in enumerate(fp, start=1):
            line = line.rstrip("\r\n")
            if not line.strip() or line.lstrip().startswith("#"):
                continue

            columns = [column.strip() for column in line.split("\t")]
            if len(columns) > 4:
                raise SitemapValidationError(
                    f"{path}:{lineno}: expected at most 4 columns, got {len(columns)}"
                )
            columns += [""] * (4 - len(columns))
            loc, lastmod, changefreq, priority = columns
            yield UrlRecord(
                loc=loc,
                lastmod=lastmod or None,
                changefreq=changefreq or None,
                priority=priority or None,
            )


@dataclass
class GeneratorConfig:
    """Configuration for the SitemapGenerator."""

    domain: str
    output_dir: str
    base_url: Optional[str] = None
    index_name: str = "sitemap.xml"
    name_template: str = "sitemap-{number}.xml"
    max_urls: int = MAX_URLS
    escape: bool = True
    stylesheet: Optional[str] = DEFAULT_STYLESHEET

    def __post_init__(self):
        # Sitemaps are served from the site root unless told otherwise
        if self.base_url is None:
            self.base_url = self.domain
        if self.max_urls <= 0:
            raise ValueError("max_urls must be a positive integer")


class SitemapGenerator:
    """Feeds URL records into builders, starting a new sitemap whenever one
    is full, and writes the results into ``config.output_dir``.

    A single sitemap is written as ``config.index_name`` directly. When the
    URLs need more than one file, each sitemap is named after
    ``config.name_template`` and an index referencing them is written as
    ``config.index_name``.
    """

    def __init__(self, config: GeneratorConfig):
        self.config = config
        self.locations: List[str] = []
        self._builder: Optional[SitemapBuilder] = None
        # Finished sitemaps waiting in temp files: final name -> temp path
        self._finished: Dict[str, str] = {}

    def _new_builder(self) -> SitemapBuilder:
        options = SitemapOptions(
            escape=self.config.escape,
            max_urls=self.config.max_urls,
            stylesheet=self.config.stylesheet,
        )
        return SitemapBuilder(self.config.domain, options)

    def _finish_builder(self):
        """Saves the current builder to a temp file and forgets it."""
        name = self.config.name_template.format(number=len(self._finished) + 1)
        self._finished[name] = self._builder.serialize_to_temp_file()
        print(f"  Sitemap {name} complete with {len(self._builder.entries)} URLs.")
        self._builder = None

    def _discard_temp_files(self):
        for path in self._finished.values():
            if os.path.exists(path):
                os.remove(path)
        self._finished.clear()

    def add(self, record: UrlRecord):
        """Adds a single record, rolling over to a new sitemap when full."""
        if self._builder is None:
            self._builder = self._new_builder()

        location = resolve_relative_url(self._builder.get_domain(), record.loc)
        try:
            self._builder.set_location(location)
        except SitemapCapacityError:
            self._finish_builder()
            self._builder = self._new_builder()
            self._builder.set_location(location)

        if record.lastmod is not None:
            self._builder.set_last_modified(record.lastmod)
        if record.changefreq is not None:
            self._builder.set_change_frequency(record.changefreq)
        if record.priority is not None:
            self._builder.set_priority(record.priority)
        self.locations.append(location)

    def run(self, records: Iterable[UrlRecord]) -> List[str]:
        """Generates the sitemap files and returns the paths written."""
        start_time = time.time()
        print("Starting sitemap generation...")
        os.makedirs(self.config.output_dir, exist_ok=True)

        try:
            for record in records:
                self.add(record)

            if self._builder is None:
                self._builder = self._new_builder()

            if not self._finished:
                path = os.path.join(self.config.output_dir, self.config.index_name)
                written = [self._builder.serialize_to_file(path)]
                self._builder = None
            else:
                self._finish_builder()
                index_path = SitemapIndexBuilder.build(
                    self.config.index_name,
                    self.config.output_dir,
                    self.config.base_url,
                    self._finished,
                    stylesheet=self.config.stylesheet,
                )
                written = [
                    os.path.join(self.config.output_dir, name)
                    for name in self._finished
                ]
                written.append(index_path)
                self._finished.clear()
        except Exception:
            self._discard_temp_files()
            raise

        total_time = time.time() - start_time
        print(
            f"\nWrote {len(self.locations)} URLs to {len(written)} file(s) "
            f"in {total_time:.2f} seconds."
        )
        return written

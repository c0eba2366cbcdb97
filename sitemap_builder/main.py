"""Main entry point for the Sitemap Builder application."""

import argparse
import sys

import requests

from .builder import MAX_URLS
from .document import DEFAULT_STYLESHEET
from .exceptions import SitemapError
from .generator import GeneratorConfig, SitemapGenerator, read_url_records
from .indexnow import IndexNowSubmitter


def main():
    """Parses command-line arguments and runs the sitemap generator."""
    parser = argparse.ArgumentParser(
        description="Generate sitemaps, and a sitemap index when needed, from a URL list."
    )
    parser.add_argument(
        "domain", help="Site domain (scheme and host), e.g. https://example.com"
    )
    parser.add_argument(
        "urls_file",
        help="File with one URL or path per line, optionally followed by "
        "tab-separated lastmod, changefreq and priority.",
    )
    parser.add_argument("output_dir", help="Directory receiving the sitemap files.")
    parser.add_argument(
        "--base-url",
        default=None,
        help="Public URL of the output directory (default: the domain).",
    )
    parser.add_argument(
        "--index-name",
        default="sitemap.xml",
        help="File name of the sitemap, or of the index when several are needed.",
    )
    parser.add_argument(
        "--max-urls",
        type=int,
        default=MAX_URLS,
        help="Maximum number of URLs per sitemap file.",
    )
    parser.add_argument(
        "--no-escape",
        action="store_true",
        help="Store locations verbatim instead of percent-encoding their paths.",
    )
    parser.add_argument(
        "--stylesheet",
        default=DEFAULT_STYLESHEET,
        help="XSL stylesheet referenced by the generated files ('' for none).",
    )
    parser.add_argument(
        "--indexnow",
        action="store_true",
        help="Submit the generated URLs to IndexNow (needs INDEXNOW_KEY).",
    )

    args = parser.parse_args()

    # --- Argument Validation ---
    if args.max_urls <= 0:
        print("Error: --max-urls must be a positive integer.", file=sys.stderr)
        sys.exit(1)

    config = GeneratorConfig(
        domain=args.domain,
        output_dir=args.output_dir,
        base_url=args.base_url,
        index_name=args.index_name,
        max_urls=args.max_urls,
        escape=not args.no_escape,
        stylesheet=args.stylesheet or None,
    )
    generator = SitemapGenerator(config=config)

    try:
        generator.run(read_url_records(args.urls_file))
        if args.indexnow:
            IndexNowSubmitter().submit(generator.locations)
    except (
        SitemapError,
        requests.exceptions.RequestException,
        ValueError,
        IOError,
    ) as e:
        print(f"An error occurred during generation: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()

"""Exceptions raised while building sitemaps and sitemap indexes."""


class SitemapError(Exception):
    """Base class for every sitemap building failure."""


class SitemapCapacityError(SitemapError):
    """Raised when a builder has no room left for another URL."""


class SitemapFeatureError(SitemapError):
    """Raised when an extension (images, videos, news) was not enabled."""


class SitemapValidationError(SitemapError, ValueError):
    """Raised when a value or an extension entry is invalid."""


class SitemapIOError(SitemapError, IOError):
    """Raised when a sitemap file cannot be written or moved."""

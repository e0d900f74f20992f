"""Build artifacts derived from the content set: index, feed, sitemap and pages."""

from .feed import build_feed, require_base_url, rfc822_date
from .index import build_index, publication_order, summarize
from .pages import build_environment, render_index_page, render_post_page
from .sitemap import build_sitemap

__all__ = [
    "build_feed",
    "require_base_url",
    "rfc822_date",
    "build_index",
    "publication_order",
    "summarize",
    "build_environment",
    "render_index_page",
    "render_post_page",
    "build_sitemap",
]

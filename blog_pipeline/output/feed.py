"""
RSS 2.0 feed generation.

The feed lists entries in publication order with absolute permalinks, so
it cannot be built without the site's base URL. It references an XSL
stylesheet so browsers display it as a readable page.
"""

from __future__ import annotations

from datetime import date, datetime, time, timezone
from email.utils import format_datetime
from html import escape
from typing import Iterable
from urllib.parse import urlparse
import xml.etree.ElementTree as ET

from ..core.errors import MissingBaseUrlError
from ..core.slug import entry_url
from ..core.types import Entry, SiteMetadata
from .index import publication_order

XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>'


def require_base_url(site: SiteMetadata) -> str:
    """Return the site's base URL without a trailing slash.

    Raises:
        MissingBaseUrlError: If the base URL is absent or not an absolute http(s) URL
    """
    raw = (site.base_url or "").strip()
    if not raw:
        raise MissingBaseUrlError(
            "Site base URL is not configured; set site.base_url or SITE_BASE_URL"
        )
    parsed = urlparse(raw)
    if parsed.scheme not in {"http", "https"} or not parsed.netloc:
        raise MissingBaseUrlError(f"Site base URL must be an absolute http(s) URL, got {raw!r}")
    return raw.rstrip("/")


def rfc822_date(value: date) -> str:
    """Format a calendar date as an RSS pubDate (midnight UTC)."""
    moment = datetime.combine(value, time.min, tzinfo=timezone.utc)
    return format_datetime(moment, usegmt=True)


def build_feed(entries: Iterable[Entry], site: SiteMetadata, limit: int | None = None) -> str:
    """Serialize entries into an RSS 2.0 document.

    Args:
        entries: The loaded content set
        site: Site-wide metadata; base_url is required
        limit: Optional maximum number of items

    Returns:
        The feed XML as a string

    Raises:
        MissingBaseUrlError: If site.base_url is unusable
    """
    base_url = require_base_url(site)
    ordered = publication_order(entries)
    if limit is not None:
        ordered = ordered[: max(0, limit)]

    rss = ET.Element("rss", version="2.0")
    channel = ET.SubElement(rss, "channel")
    _text(channel, "title", site.title)
    _text(channel, "description", site.description)
    _text(channel, "link", f"{base_url}/")
    _text(channel, "language", site.language)

    for entry in ordered:
        meta = entry.metadata
        link = entry_url(base_url, entry.slug)
        item = ET.SubElement(channel, "item")
        _text(item, "title", meta.title)
        _text(item, "link", link)
        guid = _text(item, "guid", link)
        guid.set("isPermaLink", "true")
        _text(item, "description", meta.description)
        _text(item, "pubDate", rfc822_date(meta.published_at))
        for tag in meta.tags:
            _text(item, "category", tag)

    lines = [XML_DECLARATION]
    if site.feed_stylesheet:
        href = escape(site.feed_stylesheet, quote=True)
        lines.append(f'<?xml-stylesheet href="{href}" type="text/xsl"?>')
    lines.append(ET.tostring(rss, encoding="unicode"))
    return "\n".join(lines) + "\n"


def _text(parent: ET.Element, tag: str, value: str) -> ET.Element:
    element = ET.SubElement(parent, tag)
    element.text = value
    return element

"""Sitemap (sitemaps.org protocol) listing the home page, the blog index and every post."""

from __future__ import annotations

from typing import Iterable
import xml.etree.ElementTree as ET

from ..core.slug import BLOG_PREFIX, entry_url
from ..core.types import Entry, SiteMetadata
from .feed import XML_DECLARATION, require_base_url
from .index import publication_order

SITEMAP_NS = "http://www.sitemaps.org/schemas/sitemap/0.9"


def build_sitemap(entries: Iterable[Entry], site: SiteMetadata) -> str:
    base_url = require_base_url(site)
    urlset = ET.Element("urlset", xmlns=SITEMAP_NS)
    _url(urlset, f"{base_url}/")
    _url(urlset, f"{base_url}{BLOG_PREFIX}")
    for entry in publication_order(entries):
        _url(urlset, entry_url(base_url, entry.slug), entry.metadata.published_at.isoformat())
    return XML_DECLARATION + "\n" + ET.tostring(urlset, encoding="unicode") + "\n"


def _url(urlset: ET.Element, loc: str, lastmod: str | None = None) -> None:
    url = ET.SubElement(urlset, "url")
    ET.SubElement(url, "loc").text = loc
    if lastmod:
        ET.SubElement(url, "lastmod").text = lastmod

"""
Core data types for the blog pipeline.

This module defines the structures shared by every build stage:
- EntryMetadata: Validated front matter of one article
- Entry: One validated article plus its derived slug
- ContentSet: The immutable collection produced once per build
- EntrySummary: Body-free view of an entry used by the index
- SiteMetadata: Site-wide values supplied by configuration
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Tuple


@dataclass(frozen=True)
class EntryMetadata:
    """Validated article metadata.

    Attributes:
        title: Non-empty article title
        published_at: Publication calendar date
        description: Short description used by the index and the feed
        tags: Tags in author order; duplicates are kept
        cover_image: Optional path of the cover image, relative to the document
    """

    title: str
    published_at: date
    description: str = ""
    tags: Tuple[str, ...] = ()
    cover_image: str | None = None


@dataclass(frozen=True)
class Entry:
    """A single article loaded from the content directory.

    Attributes:
        source_name: POSIX path of the document relative to the content directory
        slug: URL-safe address derived from source_name
        metadata: Validated front matter
        body: Raw Markdown body, front matter removed
    """

    source_name: str
    slug: str
    metadata: EntryMetadata
    body: str


ContentSet = Tuple[Entry, ...]


@dataclass(frozen=True)
class EntrySummary:
    """What the blog index needs to know about an entry."""

    title: str
    slug: str
    description: str
    published_at: date
    tags: Tuple[str, ...]
    cover_image: str | None = None


@dataclass(frozen=True)
class SiteMetadata:
    """Site-wide values used by the feed and the sitemap.

    Attributes:
        title: Site or blog title
        description: Channel description for the feed
        base_url: Absolute site URL (e.g. "https://example.com"), or None
        language: Feed language code
        feed_stylesheet: Path of the XSL stylesheet referenced by the feed
    """

    title: str
    description: str = ""
    base_url: str | None = None
    language: str = "en-us"
    feed_stylesheet: str = "/rss/styles.xsl"

"""
Address resolution for entries.

A slug is derived only from the document's source name, so the published
URL of an article never changes between builds unless the file is renamed.
"""

from __future__ import annotations

from pathlib import PurePosixPath
import re
import unicodedata
from typing import Iterable

from .errors import InvalidSlugError, SlugCollisionError
from .types import Entry

BLOG_PREFIX = "/blog/"

_SEPARATOR_RE = re.compile(r"[^a-z0-9]+")


def resolve(source_name: str) -> str:
    """Convert a source name to a URL-safe slug.

    The file extension is dropped, accents are folded to ASCII, the result is
    lowercased and every run of other characters (including directory
    separators) collapses to a single hyphen.

    Args:
        source_name: Document path relative to the content directory

    Returns:
        The slug

    Raises:
        InvalidSlugError: If nothing URL-safe is left

    Examples:
        >>> resolve("Hello World.md")
        'hello-world'
        >>> resolve("guides/Intro to K8s.md")
        'guides-intro-to-k8s'
    """
    stem = str(PurePosixPath(source_name).with_suffix(""))
    folded = unicodedata.normalize("NFKD", stem).encode("ascii", "ignore").decode("ascii")
    slug = _SEPARATOR_RE.sub("-", folded.lower()).strip("-")
    if not slug:
        raise InvalidSlugError(source_name)
    return slug


def ensure_unique_slugs(entries: Iterable[Entry]) -> None:
    """Fail if two entries share a slug.

    Raises:
        SlugCollisionError: Naming the slug and both source names
    """
    seen: dict[str, str] = {}
    for entry in entries:
        owner = seen.get(entry.slug)
        if owner is not None and owner != entry.source_name:
            first, second = sorted((owner, entry.source_name))
            raise SlugCollisionError(entry.slug, first, second)
        seen[entry.slug] = entry.source_name


def entry_path(slug: str) -> str:
    """Site-relative route of an entry's page."""
    return f"{BLOG_PREFIX}{slug}/"


def entry_url(base_url: str, slug: str) -> str:
    """Absolute permalink of an entry's page."""
    return base_url.rstrip("/") + entry_path(slug)

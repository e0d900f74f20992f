"""
Blog index listing.

Entries are listed newest first; entries published on the same day are
ordered by source name so the listing is stable across builds.
"""

from __future__ import annotations

from typing import Iterable

from ..core.types import Entry, EntrySummary


def publication_order(entries: Iterable[Entry]) -> list[Entry]:
    """Sort entries by publication date descending, then source name ascending."""
    return sorted(
        entries,
        key=lambda entry: (-entry.metadata.published_at.toordinal(), entry.source_name),
    )


def summarize(entry: Entry) -> EntrySummary:
    meta = entry.metadata
    return EntrySummary(
        title=meta.title,
        slug=entry.slug,
        description=meta.description,
        published_at=meta.published_at,
        tags=meta.tags,
        cover_image=meta.cover_image,
    )


def build_index(entries: Iterable[Entry]) -> tuple[EntrySummary, ...]:
    """Build the ordered, body-free listing of all entries."""
    return tuple(summarize(entry) for entry in publication_order(entries))

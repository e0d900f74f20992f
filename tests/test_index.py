"""Tests for the blog index ordering and summaries."""

from datetime import date

from blog_pipeline.core.slug import resolve
from blog_pipeline.core.types import Entry, EntryMetadata, EntrySummary
from blog_pipeline.output.index import build_index, publication_order


def _entry(source_name: str, published: date, tags: tuple[str, ...] = (), body: str = "body") -> Entry:
    return Entry(
        source_name=source_name,
        slug=resolve(source_name),
        metadata=EntryMetadata(
            title=source_name.upper(),
            published_at=published,
            description=f"About {source_name}",
            tags=tags,
        ),
        body=body,
    )


def test_index_orders_by_date_then_source_name():
    entries = (
        _entry("older.md", date(2025, 1, 1)),
        _entry("b.md", date(2025, 3, 1)),
        _entry("a.md", date(2025, 3, 1)),
    )

    summaries = build_index(entries)

    assert [(s.published_at, s.slug) for s in summaries] == [
        (date(2025, 3, 1), "a"),
        (date(2025, 3, 1), "b"),
        (date(2025, 1, 1), "older"),
    ]


def test_ordering_does_not_depend_on_input_order():
    entries = [
        _entry("a.md", date(2025, 3, 1)),
        _entry("older.md", date(2025, 1, 1)),
        _entry("b.md", date(2025, 3, 1)),
    ]

    forward = [e.source_name for e in publication_order(entries)]
    backward = [e.source_name for e in publication_order(reversed(entries))]

    assert forward == backward == ["a.md", "b.md", "older.md"]


def test_summaries_exclude_body_and_keep_tags():
    entry = _entry("a.md", date(2025, 3, 1), tags=("z", "a", "z"), body="x" * 100_000)

    (summary,) = build_index([entry])

    assert summary == EntrySummary(
        title="A.MD",
        slug="a",
        description="About a.md",
        published_at=date(2025, 3, 1),
        tags=("z", "a", "z"),
        cover_image=None,
    )
    assert not hasattr(summary, "body")


def test_index_of_empty_set_is_empty():
    assert build_index(()) == ()


def test_build_index_does_not_mutate_input():
    entries = [_entry("b.md", date(2025, 1, 1)), _entry("a.md", date(2025, 3, 1))]
    before = list(entries)

    build_index(entries)

    assert entries == before

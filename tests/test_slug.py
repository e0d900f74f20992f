"""Tests for slug resolution and uniqueness."""

from datetime import date

import pytest

from blog_pipeline.core.errors import InvalidSlugError, SlugCollisionError
from blog_pipeline.core.slug import ensure_unique_slugs, entry_path, entry_url, resolve
from blog_pipeline.core.types import Entry, EntryMetadata


def _entry(source_name: str) -> Entry:
    return Entry(
        source_name=source_name,
        slug=resolve(source_name),
        metadata=EntryMetadata(title="T", published_at=date(2025, 1, 1)),
        body="",
    )


@pytest.mark.parametrize(
    "source_name, expected",
    [
        ("a.md", "a"),
        ("Hello World.md", "hello-world"),
        ("Kubernetes -- Tips & Tricks!.md", "kubernetes-tips-tricks"),
        ("Café Crème.md", "cafe-creme"),
        ("guides/Intro.md", "guides-intro"),
        ("2024_recap.md", "2024-recap"),
    ],
)
def test_resolve(source_name, expected):
    assert resolve(source_name) == expected


def test_resolve_is_stable():
    assert resolve("My First Post.md") == resolve("My First Post.md")


def test_resolve_rejects_names_without_safe_characters():
    with pytest.raises(InvalidSlugError):
        resolve("!!!.md")


def test_unique_slugs_pass():
    ensure_unique_slugs([_entry("a.md"), _entry("b.md")])


def test_collision_names_both_sources():
    with pytest.raises(SlugCollisionError) as excinfo:
        ensure_unique_slugs([_entry("hello-world.md"), _entry("Hello World.md")])

    assert excinfo.value.slug == "hello-world"
    assert excinfo.value.first == "Hello World.md"
    assert excinfo.value.second == "hello-world.md"
    assert "Hello World.md" in str(excinfo.value)
    assert "hello-world.md" in str(excinfo.value)


def test_entry_routes():
    assert entry_path("my-post") == "/blog/my-post/"
    assert entry_url("https://example.com/", "my-post") == "https://example.com/blog/my-post/"

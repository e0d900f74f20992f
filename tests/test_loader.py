"""Tests for content discovery and loading."""

import dataclasses
from pathlib import Path

import pytest

from blog_pipeline.core.errors import (
    ContentDirectoryError,
    FrontMatterError,
    SchemaViolationError,
    SlugCollisionError,
)
from blog_pipeline.input.loader import iter_documents, load_entries


def _write_doc(directory: Path, name: str, title: str | None = "Post", date: str = "2025-01-01", extra: str = "") -> Path:
    lines = ["---"]
    if title is not None:
        lines.append(f"title: {title}")
    lines.append(f"date: {date}")
    if extra:
        lines.append(extra)
    lines.append("---")
    lines.append("")
    lines.append(f"Body of {name}")
    path = directory / name
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return path


def test_load_entries_builds_entries_in_source_order(tmp_path: Path):
    _write_doc(tmp_path, "b.md", title="Second", date="2025-03-01")
    _write_doc(tmp_path, "a.md", title="First", date="2025-03-01", extra="tags: [devops, aws]")

    entries = load_entries(tmp_path)

    assert [entry.source_name for entry in entries] == ["a.md", "b.md"]
    first = entries[0]
    assert first.slug == "a"
    assert first.metadata.title == "First"
    assert first.metadata.tags == ("devops", "aws")
    assert first.body == "Body of a.md"


def test_entries_are_immutable(tmp_path: Path):
    _write_doc(tmp_path, "a.md")
    entry = load_entries(tmp_path)[0]

    with pytest.raises(dataclasses.FrozenInstanceError):
        entry.body = "changed"
    with pytest.raises(dataclasses.FrozenInstanceError):
        entry.metadata.title = "changed"


def test_document_without_tags_has_empty_tags(tmp_path: Path):
    _write_doc(tmp_path, "a.md")
    assert load_entries(tmp_path)[0].metadata.tags == ()


def test_other_files_are_ignored(tmp_path: Path):
    _write_doc(tmp_path, "post.md")
    (tmp_path / "notes.txt").write_text("not a post", encoding="utf-8")
    (tmp_path / "cover.png").write_bytes(b"\x89PNG\r\n\x1a\n\x00\x00")
    _write_doc(tmp_path, "_draft.md")
    _write_doc(tmp_path, ".hidden/secret.md")

    names = [doc.source_name for doc in iter_documents(tmp_path)]

    assert names == ["post.md"]


def test_nested_documents_get_path_based_slugs(tmp_path: Path):
    _write_doc(tmp_path, "guides/Getting Started.md")
    entry = load_entries(tmp_path)[0]
    assert entry.source_name == "guides/Getting Started.md"
    assert entry.slug == "guides-getting-started"


def test_iter_documents_rescans_each_call(tmp_path: Path):
    _write_doc(tmp_path, "a.md")
    first = list(iter_documents(tmp_path))
    _write_doc(tmp_path, "b.md")
    second = list(iter_documents(tmp_path))

    assert [doc.source_name for doc in first] == ["a.md"]
    assert [doc.source_name for doc in second] == ["a.md", "b.md"]


def test_extensions_are_configurable(tmp_path: Path):
    _write_doc(tmp_path, "a.md")
    _write_doc(tmp_path, "b.markdown")

    entries = load_entries(tmp_path, extensions=[".md", ".markdown"])

    assert [entry.slug for entry in entries] == ["a", "b"]


def test_missing_title_fails_naming_document_and_field(tmp_path: Path):
    _write_doc(tmp_path, "good.md")
    _write_doc(tmp_path, "broken.md", title=None)

    with pytest.raises(SchemaViolationError) as excinfo:
        load_entries(tmp_path)

    assert excinfo.value.source_name == "broken.md"
    assert excinfo.value.fields == ["title"]
    assert "broken.md" in str(excinfo.value)
    assert "title" in str(excinfo.value)


def test_malformed_date_fails(tmp_path: Path):
    _write_doc(tmp_path, "a.md", date="'someday'")

    with pytest.raises(SchemaViolationError) as excinfo:
        load_entries(tmp_path)

    assert excinfo.value.fields == ["date"]


def test_missing_front_matter_fails(tmp_path: Path):
    (tmp_path / "plain.md").write_text("# Just a body\n", encoding="utf-8")

    with pytest.raises(FrontMatterError) as excinfo:
        load_entries(tmp_path)

    assert excinfo.value.source_name == "plain.md"


def test_slug_collision_aborts(tmp_path: Path):
    _write_doc(tmp_path, "Hello World.md")
    _write_doc(tmp_path, "hello-world.md")

    with pytest.raises(SlugCollisionError) as excinfo:
        load_entries(tmp_path)

    assert {excinfo.value.first, excinfo.value.second} == {"Hello World.md", "hello-world.md"}


def test_parallel_loading_matches_sequential(tmp_path: Path):
    for idx in range(12):
        _write_doc(tmp_path, f"post-{idx:02d}.md", title=f"Post {idx}")

    assert load_entries(tmp_path, workers=4) == load_entries(tmp_path, workers=1)


def test_parallel_loading_reports_first_failure_in_source_order(tmp_path: Path):
    _write_doc(tmp_path, "a.md", title=None)
    _write_doc(tmp_path, "b.md", title=None)
    for idx in range(6):
        _write_doc(tmp_path, f"c-{idx}.md")

    with pytest.raises(SchemaViolationError) as excinfo:
        load_entries(tmp_path, workers=4)

    assert excinfo.value.source_name == "a.md"


def test_missing_content_directory(tmp_path: Path):
    with pytest.raises(ContentDirectoryError):
        load_entries(tmp_path / "nope")


@pytest.mark.parametrize("value", ["2025-02-30", "2025-03-01 10:30:00"])
def test_impossible_or_timestamp_date_names_the_date_field(tmp_path: Path, value):
    _write_doc(tmp_path, "a.md", date=value)

    with pytest.raises(SchemaViolationError) as excinfo:
        load_entries(tmp_path)

    assert excinfo.value.source_name == "a.md"
    assert excinfo.value.fields == ["date"]
    assert "date" in str(excinfo.value)


def test_document_that_is_not_utf8_names_the_document(tmp_path: Path):
    (tmp_path / "a.md").write_bytes(b"\xff\xfe---\ntitle: Hi\n---\n")

    with pytest.raises(FrontMatterError) as excinfo:
        load_entries(tmp_path)

    assert excinfo.value.source_name == "a.md"
    assert "UTF-8" in str(excinfo.value)


def test_control_character_in_title_is_a_schema_violation(tmp_path: Path):
    (tmp_path / "a.md").write_text('---\ntitle: "Bad\\x01title"\ndate: 2025-01-01\n---\nBody\n', encoding="utf-8")

    with pytest.raises(SchemaViolationError) as excinfo:
        load_entries(tmp_path)

    assert excinfo.value.fields == ["title"]


def test_cover_image_outside_document_directory_is_rejected(tmp_path: Path):
    _write_doc(tmp_path, "a.md", extra="image: ../../secret.png")

    with pytest.raises(SchemaViolationError) as excinfo:
        load_entries(tmp_path)

    assert excinfo.value.fields == ["image"]

"""Tests for front matter schema validation."""

from datetime import date, datetime

import pytest

from blog_pipeline.core.errors import MetadataValidationError
from blog_pipeline.core.schema import METADATA_FIELDS, validate_metadata


def _raw(**overrides):
    raw = {"title": "Hello", "date": date(2025, 3, 1)}
    raw.update(overrides)
    return raw


def test_valid_minimal_metadata_uses_defaults():
    meta = validate_metadata(_raw())

    assert meta.title == "Hello"
    assert meta.published_at == date(2025, 3, 1)
    assert meta.description == ""
    assert meta.tags == ()
    assert meta.cover_image is None


def test_declared_fields_cover_contracted_keys():
    assert [rule.key for rule in METADATA_FIELDS] == ["title", "date", "description", "tags", "image"]
    assert {rule.key for rule in METADATA_FIELDS if rule.required} == {"title", "date"}


def test_missing_title_is_reported_by_name():
    raw = _raw()
    del raw["title"]

    with pytest.raises(MetadataValidationError) as excinfo:
        validate_metadata(raw)

    assert excinfo.value.fields == ["title"]
    assert "title" in str(excinfo.value)


def test_every_offending_field_is_reported():
    with pytest.raises(MetadataValidationError) as excinfo:
        validate_metadata({"date": "March 1", "tags": "a, b"})

    assert excinfo.value.fields == ["title", "date", "tags"]


def test_blank_title_is_rejected():
    with pytest.raises(MetadataValidationError) as excinfo:
        validate_metadata(_raw(title="   "))
    assert excinfo.value.fields == ["title"]


def test_title_is_not_coerced_from_number():
    with pytest.raises(MetadataValidationError) as excinfo:
        validate_metadata(_raw(title=2024))
    assert "must be a string" in str(excinfo.value)


def test_iso_date_string_is_accepted():
    meta = validate_metadata(_raw(date="2025-01-01"))
    assert meta.published_at == date(2025, 1, 1)


@pytest.mark.parametrize("value", ["2025-3-1", "2025-02-30", "01/03/2025", "yesterday"])
def test_unparseable_date_strings_are_rejected(value):
    with pytest.raises(MetadataValidationError) as excinfo:
        validate_metadata(_raw(date=value))
    assert excinfo.value.fields == ["date"]


def test_timestamp_is_not_a_calendar_date():
    with pytest.raises(MetadataValidationError) as excinfo:
        validate_metadata(_raw(date=datetime(2025, 1, 1, 10, 30)))
    assert excinfo.value.fields == ["date"]


def test_tags_keep_order_and_duplicates():
    meta = validate_metadata(_raw(tags=["k8s", "aws", "k8s"]))
    assert meta.tags == ("k8s", "aws", "k8s")


def test_null_tags_become_empty():
    assert validate_metadata(_raw(tags=None)).tags == ()


def test_empty_tag_is_rejected():
    with pytest.raises(MetadataValidationError) as excinfo:
        validate_metadata(_raw(tags=["ok", ""]))
    assert "item 1" in str(excinfo.value)


def test_relative_cover_image_is_accepted():
    assert validate_metadata(_raw(image="./cover.png")).cover_image == "./cover.png"


@pytest.mark.parametrize(
    "value",
    ["/images/cover.png", "https://cdn.example.com/cover.png", "", "../../secret.png", "img/../../x.png"],
)
def test_non_relative_cover_image_is_rejected(value):
    with pytest.raises(MetadataValidationError) as excinfo:
        validate_metadata(_raw(image=value))
    assert excinfo.value.fields == ["image"]


def test_unknown_keys_are_ignored():
    meta = validate_metadata(_raw(draft=True, author="someone"))
    assert meta.title == "Hello"


def test_title_and_tags_are_kept_as_written():
    meta = validate_metadata(_raw(title=" Hello ", tags=[" k8s", "aws "]))

    assert meta.title == " Hello "
    assert meta.tags == (" k8s", "aws ")


def test_cover_image_in_subdirectory_is_accepted():
    assert validate_metadata(_raw(image="images/cover.png")).cover_image == "images/cover.png"


def test_characters_not_allowed_in_xml_are_rejected():
    with pytest.raises(MetadataValidationError) as excinfo:
        validate_metadata(_raw(title="Bad\x01title", description="ok\x0b", tags=["fine", "x\x1f"]))

    assert excinfo.value.fields == ["title", "description", "tags"]
    assert "0x01" in str(excinfo.value)
    assert "item 1" in str(excinfo.value)


def test_tabs_and_newlines_are_allowed_in_text():
    meta = validate_metadata(_raw(description="line one\n\tline two"))
    assert meta.description == "line one\n\tline two"

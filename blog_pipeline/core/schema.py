"""
Front matter schema.

METADATA_FIELDS declares the contracted front matter keys; validate_metadata
checks a raw mapping against it. Keys outside the declaration are ignored.
Values are never coerced: a wrongly typed value is an error, not a guess.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
import re
from typing import Any, Mapping

from .errors import FieldError, MetadataValidationError
from .types import EntryMetadata


@dataclass(frozen=True)
class FieldSpec:
    """Declaration of one front matter field.

    Attributes:
        key: Key as written in the front matter
        attribute: EntryMetadata attribute the value is stored in
        kind: One of "text", "date", "tags", "path"
        required: Whether a missing key is an error
        allow_empty: Whether an empty text value is accepted
    """

    key: str
    attribute: str
    kind: str
    required: bool = False
    allow_empty: bool = True


METADATA_FIELDS: tuple[FieldSpec, ...] = (
    FieldSpec("title", "title", "text", required=True, allow_empty=False),
    FieldSpec("date", "published_at", "date", required=True),
    FieldSpec("description", "description", "text"),
    FieldSpec("tags", "tags", "tags"),
    FieldSpec("image", "cover_image", "path"),
)

_ISO_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_URL_SCHEME_RE = re.compile(r"^[a-zA-Z][a-zA-Z0-9+.-]*:")
# Characters outside the XML 1.0 Char production; the feed and sitemap cannot carry them.
_XML_INVALID_RE = re.compile("[\x00-\x08\x0b\x0c\x0e-\x1f\ud800-\udfff\ufffe\uffff]")


def validate_metadata(raw: Mapping[str, Any]) -> EntryMetadata:
    """Validate a raw front matter mapping.

    Args:
        raw: Mapping parsed from a document's front matter

    Returns:
        The validated EntryMetadata

    Raises:
        MetadataValidationError: Listing every offending field
    """
    errors: list[FieldError] = []
    values: dict[str, Any] = {}

    for rule in METADATA_FIELDS:
        value = raw.get(rule.key)
        if value is None:
            if rule.required:
                errors.append(FieldError(rule.key, "is required"))
            continue
        try:
            values[rule.attribute] = _CHECKS[rule.kind](rule, value)
        except ValueError as exc:
            errors.append(FieldError(rule.key, str(exc)))

    if errors:
        raise MetadataValidationError(errors)
    return EntryMetadata(**values)


def _check_text(rule: FieldSpec, value: Any) -> str:
    if not isinstance(value, str):
        raise ValueError(f"must be a string, got {type(value).__name__}")
    if not rule.allow_empty and not value.strip():
        raise ValueError("must not be empty")
    _check_characters(value)
    return value


def _check_date(rule: FieldSpec, value: Any) -> date:
    # datetime is a date subclass; a timestamp is not a calendar date.
    if isinstance(value, datetime):
        raise ValueError("must be a calendar date (YYYY-MM-DD), got a timestamp")
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        if _ISO_DATE_RE.match(text):
            try:
                return date.fromisoformat(text)
            except ValueError:
                pass
        raise ValueError(f"must be an ISO 8601 calendar date (YYYY-MM-DD), got {value!r}")
    raise ValueError(f"must be a calendar date, got {type(value).__name__}")


def _check_tags(rule: FieldSpec, value: Any) -> tuple[str, ...]:
    if not isinstance(value, (list, tuple)):
        raise ValueError(f"must be a list of strings, got {type(value).__name__}")
    tags: list[str] = []
    for idx, item in enumerate(value):
        if not isinstance(item, str):
            raise ValueError(f"item {idx} must be a string, got {type(item).__name__}")
        if not item.strip():
            raise ValueError(f"item {idx} must not be empty")
        _check_characters(item, f"item {idx} ")
        tags.append(item)
    return tuple(tags)


def _check_path(rule: FieldSpec, value: Any) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValueError("must be a non-empty relative path")
    path = value.strip()
    if path.startswith("/") or _URL_SCHEME_RE.match(path):
        raise ValueError(f"must be a relative path, got {value!r}")
    if ".." in re.split(r"[\\/]", path):
        raise ValueError(f"must not leave the document's directory, got {value!r}")
    _check_characters(path)
    return path


def _check_characters(value: str, prefix: str = "") -> None:
    match = _XML_INVALID_RE.search(value)
    if match:
        raise ValueError(f"{prefix}contains a character not allowed in XML ({ord(match.group()):#04x})")


_CHECKS = {
    "text": _check_text,
    "date": _check_date,
    "tags": _check_tags,
    "path": _check_path,
}

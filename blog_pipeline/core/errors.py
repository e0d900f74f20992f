"""
Build errors.

Every fatal condition of a build derives from BuildError so the CLI can
report it and exit without publishing anything. Degraded code or diagram
blocks are not errors and never appear here.
"""

from __future__ import annotations

from dataclasses import dataclass


class BuildError(Exception):
    """Base class for errors that abort a build."""


class ContentDirectoryError(BuildError):
    """The content directory does not exist or is not a directory."""


class FrontMatterError(BuildError):
    """A document's front matter block is missing or unparseable."""

    def __init__(self, source_name: str, reason: str):
        self.source_name = source_name
        self.reason = reason
        super().__init__(f"{source_name}: {reason}")


@dataclass(frozen=True)
class FieldError:
    """A single offending front matter field.

    Attributes:
        field: Front matter key as written by the author (e.g. "title", "date")
        message: Human readable description of the violation
    """

    field: str
    message: str

    def __str__(self) -> str:
        return f"{self.field}: {self.message}"


class MetadataValidationError(BuildError):
    """Raised by the schema when a metadata record is invalid."""

    def __init__(self, errors: list[FieldError]):
        self.errors = list(errors)
        super().__init__("; ".join(str(err) for err in self.errors))

    @property
    def fields(self) -> list[str]:
        return [err.field for err in self.errors]


class SchemaViolationError(BuildError):
    """A document's metadata failed validation."""

    def __init__(self, source_name: str, errors: list[FieldError]):
        self.source_name = source_name
        self.errors = list(errors)
        details = "; ".join(str(err) for err in self.errors)
        super().__init__(f"{source_name}: invalid front matter ({details})")

    @property
    def fields(self) -> list[str]:
        return [err.field for err in self.errors]


class InvalidSlugError(BuildError):
    """A source name produced an empty slug."""

    def __init__(self, source_name: str):
        self.source_name = source_name
        super().__init__(f"{source_name}: cannot derive a URL slug from this name")


class SlugCollisionError(BuildError):
    """Two distinct documents resolved to the same slug."""

    def __init__(self, slug: str, first: str, second: str):
        self.slug = slug
        self.first = first
        self.second = second
        super().__init__(f"Slug collision on '{slug}': {first} and {second}")


class MissingBaseUrlError(BuildError):
    """Absolute links were requested but no usable site base URL is configured."""


class ConfigurationError(BuildError):
    """A configuration value cannot be used."""

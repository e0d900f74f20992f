"""
Core domain models and business logic.

This package contains the data types, the front matter schema, address
resolution and the error taxonomy, independent of any pipeline stage.
"""

from .errors import (
    BuildError,
    ConfigurationError,
    ContentDirectoryError,
    FieldError,
    FrontMatterError,
    InvalidSlugError,
    MetadataValidationError,
    MissingBaseUrlError,
    SchemaViolationError,
    SlugCollisionError,
)
from .schema import METADATA_FIELDS, FieldSpec, validate_metadata
from .slug import ensure_unique_slugs, entry_path, entry_url, resolve
from .types import ContentSet, Entry, EntryMetadata, EntrySummary, SiteMetadata

__all__ = [
    "BuildError",
    "ConfigurationError",
    "ContentDirectoryError",
    "FieldError",
    "FrontMatterError",
    "InvalidSlugError",
    "MetadataValidationError",
    "MissingBaseUrlError",
    "SchemaViolationError",
    "SlugCollisionError",
    "METADATA_FIELDS",
    "FieldSpec",
    "validate_metadata",
    "ensure_unique_slugs",
    "entry_path",
    "entry_url",
    "resolve",
    "ContentSet",
    "Entry",
    "EntryMetadata",
    "EntrySummary",
    "SiteMetadata",
]

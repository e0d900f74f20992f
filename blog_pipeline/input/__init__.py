"""Content loading: front matter parsing and document discovery."""

from .frontmatter import split_front_matter
from .loader import DEFAULT_EXTENSIONS, SourceDocument, iter_documents, load_document, load_entries

__all__ = [
    "split_front_matter",
    "DEFAULT_EXTENSIONS",
    "SourceDocument",
    "iter_documents",
    "load_document",
    "load_entries",
]

"""
Content discovery and loading.

Documents are discovered fresh on every build. Each one is read, split,
validated and given a slug independently of the others; the only
cross-document step is the slug uniqueness check, which runs after every
document has loaded.
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
import logging
from pathlib import Path
from typing import Iterable, Iterator, Sequence

from ..core.errors import (
    ContentDirectoryError,
    FrontMatterError,
    MetadataValidationError,
    SchemaViolationError,
)
from ..core.schema import validate_metadata
from ..core.slug import ensure_unique_slugs, resolve
from ..core.types import ContentSet, Entry
from ..utils.logging import log_event
from .frontmatter import split_front_matter

DEFAULT_EXTENSIONS: tuple[str, ...] = (".md",)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SourceDocument:
    """A discovered document.

    Attributes:
        source_name: POSIX path relative to the content directory
        path: Filesystem path of the document
    """

    source_name: str
    path: Path


def iter_documents(
    content_dir: Path, extensions: Sequence[str] = DEFAULT_EXTENSIONS
) -> Iterator[SourceDocument]:
    """Yield every document under content_dir with a recognized extension.

    Files with other extensions are ignored, as are files and directories
    whose name starts with "_" or ".". Documents are yielded in source name
    order; calling again re-scans the directory.

    Raises:
        ContentDirectoryError: If content_dir is not a directory
    """
    if not content_dir.is_dir():
        raise ContentDirectoryError(f"Content directory not found: {content_dir}")

    allowed = {ext.lower() if ext.startswith(".") else f".{ext.lower()}" for ext in extensions}
    candidates = []
    for path in content_dir.rglob("*"):
        if not path.is_file() or path.suffix.lower() not in allowed:
            continue
        relative = path.relative_to(content_dir)
        if any(part.startswith(("_", ".")) for part in relative.parts):
            continue
        candidates.append(SourceDocument(source_name=relative.as_posix(), path=path))

    yield from sorted(candidates, key=lambda doc: doc.source_name)


def load_document(document: SourceDocument) -> Entry:
    """Parse and validate a single document into an Entry.

    Raises:
        FrontMatterError: If the document is not UTF-8 text or its front
            matter block is malformed
        SchemaViolationError: If the metadata fails validation
        InvalidSlugError: If no slug can be derived from the source name
    """
    try:
        text = document.path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise FrontMatterError(document.source_name, "not valid UTF-8 text") from exc
    raw, body = split_front_matter(text, document.source_name)
    try:
        metadata = validate_metadata(raw)
    except MetadataValidationError as exc:
        raise SchemaViolationError(document.source_name, exc.errors) from exc
    return Entry(
        source_name=document.source_name,
        slug=resolve(document.source_name),
        metadata=metadata,
        body=body,
    )


def load_entries(
    content_dir: Path,
    extensions: Sequence[str] = DEFAULT_EXTENSIONS,
    workers: int = 1,
) -> ContentSet:
    """Load the whole content set.

    Args:
        content_dir: Directory holding the documents
        extensions: Recognized document extensions
        workers: Number of threads used to parse documents

    Returns:
        Entries in source name order

    Raises:
        BuildError: On the first failing document (in source name order) or
            on a slug collision
    """
    documents = list(iter_documents(content_dir, extensions))
    log_event(
        logger,
        "Documents discovered",
        event="documents_discovered",
        content_dir=str(content_dir),
        count=len(documents),
    )
    entries = _load_all(documents, workers)
    ensure_unique_slugs(entries)
    log_event(logger, "Entries loaded", event="entries_loaded", count=len(entries))
    return entries


def _load_all(documents: Iterable[SourceDocument], workers: int) -> ContentSet:
    concurrency = max(1, int(workers))
    if concurrency == 1:
        return tuple(load_document(doc) for doc in documents)
    with ThreadPoolExecutor(max_workers=concurrency) as executor:
        # map() yields in submission order, so the reported failure is deterministic.
        return tuple(executor.map(load_document, documents))

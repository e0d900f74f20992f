"""
Front matter splitting.

A document starts with a "---" line, followed by a YAML mapping and a
closing "---" line; everything after the closing line is the body.
"""

from __future__ import annotations

from typing import Any

import yaml

from ..core.errors import FrontMatterError

DELIMITER = "---"

_TIMESTAMP_TAG = "tag:yaml.org,2002:timestamp"


class FrontMatterLoader(yaml.SafeLoader):
    """SafeLoader that leaves dates as strings so the schema can name a bad date field."""


FrontMatterLoader.yaml_implicit_resolvers = {
    first: [(tag, regexp) for tag, regexp in resolvers if tag != _TIMESTAMP_TAG]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}


def split_front_matter(text: str, source_name: str = "<string>") -> tuple[dict[str, Any], str]:
    """Split a document into its front matter mapping and body.

    Args:
        text: Full document text
        source_name: Document name used in error messages

    Returns:
        A tuple of (metadata, body)

    Raises:
        FrontMatterError: If the block is missing, unterminated, not valid
            YAML, or not a mapping
    """
    lines = text.lstrip("\ufeff").splitlines()
    if not lines or lines[0].strip() != DELIMITER:
        raise FrontMatterError(source_name, "document must start with a '---' front matter block")

    end_index: int | None = None
    for idx in range(1, len(lines)):
        if lines[idx].strip() == DELIMITER:
            end_index = idx
            break
    if end_index is None:
        raise FrontMatterError(source_name, "front matter is not closed with '---'")

    block = "\n".join(lines[1:end_index])
    try:
        metadata = yaml.load(block, Loader=FrontMatterLoader)
    except (yaml.YAMLError, ValueError) as exc:
        # An explicit !!timestamp tag is still constructed and may raise ValueError.
        raise FrontMatterError(source_name, f"invalid YAML front matter: {exc}") from exc

    if metadata is None:
        metadata = {}
    if not isinstance(metadata, dict):
        raise FrontMatterError(source_name, "front matter must be a mapping of keys to values")

    body = "\n".join(lines[end_index + 1:]).lstrip("\n")
    return {str(key): value for key, value in metadata.items()}, body

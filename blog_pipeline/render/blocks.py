"""
Tagged results of the special-block sub-renderers.

A sub-renderer never raises for bad input: it returns Rendered with the
finished markup, or Degraded carrying the raw source so the block can be
echoed as plain text while the rest of the document still publishes.
"""

from __future__ import annotations

from dataclasses import dataclass
from html import escape
from typing import Union

CODE = "code"
DIAGRAM = "diagram"


@dataclass(frozen=True)
class Rendered:
    """A block rendered successfully.

    Attributes:
        kind: "code" or "diagram"
        language: Fence language tag ("" when none was given)
        html: Finished markup for the block
    """

    kind: str
    language: str
    html: str


@dataclass(frozen=True)
class Degraded:
    """A block that could not be rendered and falls back to its source.

    Attributes:
        kind: "code" or "diagram"
        language: Fence language tag
        source: Raw block content, echoed verbatim (escaped) in the page
        reason: Why rendering was not possible
    """

    kind: str
    language: str
    source: str
    reason: str


BlockResult = Union[Rendered, Degraded]


def block_html(result: BlockResult) -> str:
    """Return the markup for a block result, falling back for Degraded ones."""
    if isinstance(result, Rendered):
        return result.html
    if isinstance(result, Degraded):
        return _fallback_html(result)
    raise TypeError(f"Unsupported block result: {result!r}")


def _fallback_html(result: Degraded) -> str:
    source = escape(result.source.rstrip("\n"))
    reason = escape(result.reason, quote=True)
    if result.kind == DIAGRAM:
        return (
            f'<pre class="diagram-source" data-diagram-error="{reason}">'
            f"<code>{source}</code></pre>"
        )
    language = escape(result.language)
    return (
        '<div class="code-block code-block--plain">\n'
        f'    <span class="code-language-tag">{language}</span>\n'
        f"    <pre><code>{source}</code></pre>\n"
        "</div>"
    )

"""
Markdown body rendering using mistune.

render_body turns an entry's Markdown body into HTML. Fenced code and
diagram blocks are handed to their sub-renderers; every special block's
tagged result is kept on the returned RenderedBody so callers can report
degraded blocks. A fresh renderer is built per call, so rendering has no
shared state.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Sequence

import mistune

from .blocks import BlockResult, Degraded, block_html
from .diagram import render_diagram
from .highlight import highlight_block

MARKDOWN_PLUGINS = ["table", "strikethrough", "task_lists", "footnotes", "url"]


@dataclass(frozen=True)
class RenderOptions:
    """Rendering settings.

    Attributes:
        code_style: Pygments style name
        wrap_code: Soft-wrap long code lines
        diagram_languages: Fence tags handed to the diagram renderer
    """

    code_style: str = "monokai"
    wrap_code: bool = True
    diagram_languages: Sequence[str] = ("mermaid",)


@dataclass(frozen=True)
class RenderedBody:
    """Output of render_body.

    Attributes:
        html: Rendered HTML fragment
        blocks: Tagged results of every code and diagram block, in document order
    """

    html: str
    blocks: tuple[BlockResult, ...] = field(default_factory=tuple)

    @property
    def degraded(self) -> tuple[Degraded, ...]:
        return tuple(block for block in self.blocks if isinstance(block, Degraded))


class _BlockCollectingRenderer(mistune.HTMLRenderer):
    def __init__(self, options: RenderOptions):
        super().__init__(escape=False)
        self._options = options
        self._diagram_languages = {lang.lower() for lang in options.diagram_languages}
        self.blocks: list[BlockResult] = []

    def block_code(self, code: str, info: Optional[str] = None) -> str:
        language = info.strip().split(None, 1)[0] if info and info.strip() else ""
        if language.lower() in self._diagram_languages:
            result = render_diagram(code, language)
        else:
            result = highlight_block(
                code,
                language,
                style=self._options.code_style,
                wrap=self._options.wrap_code,
            )
        self.blocks.append(result)
        return block_html(result) + "\n"


def render_body(body: str, options: RenderOptions | None = None) -> RenderedBody:
    """Render a Markdown body to HTML.

    Args:
        body: Raw Markdown, front matter already removed
        options: Rendering settings (defaults when omitted)

    Returns:
        The HTML fragment with the tagged special-block results
    """
    renderer = _BlockCollectingRenderer(options or RenderOptions())
    markdown = mistune.create_markdown(renderer=renderer, plugins=MARKDOWN_PLUGINS)
    html = markdown(body)
    return RenderedBody(html=html, blocks=tuple(renderer.blocks))

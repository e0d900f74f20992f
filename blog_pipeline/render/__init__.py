"""Body rendering: Markdown to HTML with code and diagram sub-renderers."""

from .blocks import BlockResult, Degraded, Rendered, block_html
from .diagram import find_diagram_error, render_diagram
from .highlight import code_stylesheet, ensure_style, highlight_block
from .markdown import RenderedBody, RenderOptions, render_body

__all__ = [
    "BlockResult",
    "Degraded",
    "Rendered",
    "block_html",
    "find_diagram_error",
    "render_diagram",
    "code_stylesheet",
    "ensure_style",
    "highlight_block",
    "RenderedBody",
    "RenderOptions",
    "render_body",
]

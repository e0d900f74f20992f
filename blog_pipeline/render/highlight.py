"""
Code block highlighting using Pygments.

Fenced code is highlighted by its declared language tag. A fence without a
tag renders as plain preformatted text; an unknown tag degrades to plain
text instead of failing the document.
"""

from __future__ import annotations

from html import escape

from pygments import highlight
from pygments.formatters import HtmlFormatter
from pygments.lexers import get_lexer_by_name
from pygments.styles import get_all_styles
from pygments.util import ClassNotFound

from ..core.errors import ConfigurationError
from .blocks import CODE, BlockResult, Degraded, Rendered

HIGHLIGHT_CLASS = "highlight"
_WRAP_STYLE = ' style="white-space: pre-wrap;"'


def highlight_block(code: str, language: str, style: str = "monokai", wrap: bool = True) -> BlockResult:
    """Highlight a fenced code block.

    Args:
        code: The source code
        language: Declared language tag, may be empty
        style: Pygments style name
        wrap: Soft-wrap long lines

    Returns:
        Rendered markup, or Degraded when the language is unknown
    """
    code = code.rstrip("\n")
    if not language:
        return Rendered(CODE, "", _format_block(escape(code), "text", wrap))

    try:
        lexer = get_lexer_by_name(language, stripnl=False)
    except ClassNotFound:
        return Degraded(CODE, language, code, f"unknown language '{language}'")

    formatter = HtmlFormatter(style=style, nowrap=True)
    highlighted = highlight(code, lexer, formatter).rstrip("\n")
    return Rendered(CODE, language, _format_block(highlighted, language, wrap))


def _format_block(inner_html: str, language: str, wrap: bool) -> str:
    lang = escape(language)
    wrap_attr = _WRAP_STYLE if wrap else ""
    return (
        '<div class="code-block">\n'
        f'    <span class="code-language-tag">{lang}</span>\n'
        f'    <pre class="{HIGHLIGHT_CLASS}"{wrap_attr}><code class="language-{lang}">{inner_html}</code></pre>\n'
        "</div>"
    )


def ensure_style(style: str) -> str:
    """Check that a Pygments style exists.

    Raises:
        ConfigurationError: If the style is unknown
    """
    if style not in set(get_all_styles()):
        raise ConfigurationError(f"Unknown code highlighting style: {style}")
    return style


def code_stylesheet(style: str = "monokai") -> str:
    """CSS rules for highlighted blocks in the given style."""
    return HtmlFormatter(style=ensure_style(style)).get_style_defs(f".{HIGHLIGHT_CLASS}")

"""
Blog Pipeline - static-site content pipeline.

This package loads a directory of Markdown articles with YAML front matter,
validates their metadata, derives stable URL slugs, renders the bodies and
emits the blog index, an RSS feed and a sitemap.

Main entry point is the CLI via `blog-pipeline build` command.

Example:
    $ blog-pipeline build -i content/blog -o dist --base-url https://example.com
"""

__all__ = [
    "__version__",
    "load_entries",
    "resolve",
    "render_body",
    "build_index",
    "build_feed",
]
__version__ = "0.1.0"

from .core.slug import resolve
from .input.loader import load_entries
from .output.feed import build_feed
from .output.index import build_index
from .render.markdown import render_body

"""
HTML page rendering for posts and the blog index.

Pages are produced with Jinja2 templates shipped in the package. The page
chrome is deliberately minimal; sites replace the templates to theme it.
"""

from __future__ import annotations

from pathlib import Path, PurePosixPath
from typing import Iterable

from jinja2 import Environment, FileSystemLoader, select_autoescape
from markupsafe import Markup

from ..core.slug import BLOG_PREFIX, entry_path
from ..core.types import Entry, EntrySummary, SiteMetadata
from ..render.blocks import DIAGRAM, Rendered
from ..render.markdown import RenderedBody

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"
CODE_STYLESHEET_PATH = "styles/code.css"


def build_environment(templates_dir: Path = TEMPLATES_DIR) -> Environment:
    env = Environment(
        loader=FileSystemLoader(str(templates_dir)),
        autoescape=select_autoescape(["html", "xml", "xsl"]),
    )
    env.filters["isodate"] = lambda value: value.isoformat()
    env.filters["longdate"] = lambda value: f"{value:%B} {value.day}, {value.year}"
    return env


def cover_path(slug: str, cover_image: str | None) -> str | None:
    """Site-relative URL of an entry's cover image, copied next to its page."""
    if not cover_image:
        return None
    return entry_path(slug) + PurePosixPath(cover_image).name


def post_page_path(slug: str) -> str:
    return f"{BLOG_PREFIX.strip('/')}/{slug}/index.html"


def render_post_page(env: Environment, entry: Entry, rendered: RenderedBody, site: SiteMetadata) -> str:
    template = env.get_template("blog/post.html")
    has_diagrams = any(
        isinstance(block, Rendered) and block.kind == DIAGRAM for block in rendered.blocks
    )
    return template.render(
        site=site,
        entry=entry,
        meta=entry.metadata,
        content=Markup(rendered.html),
        cover_url=cover_path(entry.slug, entry.metadata.cover_image),
        has_diagrams=has_diagrams,
        code_css=f"/{CODE_STYLESHEET_PATH}",
    )


def render_index_page(env: Environment, summaries: Iterable[EntrySummary], site: SiteMetadata) -> str:
    template = env.get_template("blog/index.html")
    items = [
        {
            "summary": summary,
            "url": entry_path(summary.slug),
            "cover_url": cover_path(summary.slug, summary.cover_image),
        }
        for summary in summaries
    ]
    return template.render(site=site, items=items, total=len(items))


def render_feed_stylesheet(env: Environment, site: SiteMetadata) -> str:
    return env.get_template("rss/styles.xsl").render(site=site)

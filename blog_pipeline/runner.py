"""
Build orchestration for the blog pipeline.

This module coordinates one build:
1. Load and validate every document (fail-fast)
2. Check slug uniqueness across the content set
3. Render each body, reporting degraded code/diagram blocks
4. Build the index, the feed and the sitemap
5. Write every artifact

Artifacts are computed in memory first and only written once every stage
has succeeded, so a failing build never publishes part of a site.
"""

from __future__ import annotations

from dataclasses import dataclass, field
import logging
from pathlib import Path, PurePosixPath
import shutil

from rich.console import Console
from rich.progress import BarColumn, Progress, SpinnerColumn, TaskProgressColumn, TextColumn

from .config import AppConfig, site_metadata
from .core.types import ContentSet
from .input.loader import load_entries
from .output.feed import build_feed
from .output.index import build_index
from .output.pages import (
    CODE_STYLESHEET_PATH,
    build_environment,
    cover_path,
    post_page_path,
    render_feed_stylesheet,
    render_index_page,
    render_post_page,
)
from .output.sitemap import build_sitemap
from .render.highlight import code_stylesheet, ensure_style
from .render.markdown import RenderedBody, RenderOptions, render_body
from .utils.logging import log_event, setup_logging


@dataclass
class BuildResult:
    """Outcome of a successful build.

    Attributes:
        output_dir: Directory the site was written to
        entries: Number of published entries
        degraded_blocks: Code or diagram blocks that fell back to plain text
        written: Every file written, including copied cover images
    """

    output_dir: Path
    entries: int = 0
    degraded_blocks: int = 0
    written: list[Path] = field(default_factory=list)


def check_content(cfg: AppConfig) -> ContentSet:
    """Load and validate the content set without rendering or writing anything."""
    return load_entries(
        Path(cfg.content.directory),
        cfg.content.extensions,
        workers=cfg.content.workers,
    )


def run_build(cfg: AppConfig, show_progress: bool = True, console: Console | None = None) -> BuildResult:
    """Run a complete build.

    Args:
        cfg: Application configuration
        show_progress: Whether to display progress bars
        console: Rich console for output (creates default if None)

    Returns:
        BuildResult describing what was written

    Raises:
        BuildError: On any fatal condition; nothing is written in that case
    """
    logger = setup_logging(cfg.logging)
    output_dir = Path(cfg.output.directory)
    site = site_metadata(cfg)
    options = RenderOptions(
        code_style=ensure_style(cfg.render.code_style),
        wrap_code=cfg.render.wrap_code,
        diagram_languages=tuple(cfg.render.diagram_languages),
    )
    log_event(
        logger,
        "Build start",
        event="build_start",
        content_dir=cfg.content.directory,
        output=str(output_dir),
    )

    progress = Progress(
        SpinnerColumn(),
        TextColumn("{task.description}"),
        BarColumn(),
        TaskProgressColumn(),
        console=console or Console(),
        disable=not show_progress,
    )

    with progress:
        stage_task = progress.add_task("Stages", total=4)

        entries = check_content(cfg)
        progress.advance(stage_task, 1)

        render_task = progress.add_task("Render", total=len(entries))
        rendered: dict[str, RenderedBody] = {}
        degraded = 0
        for entry in entries:
            body = render_body(entry.body, options)
            for block in body.degraded:
                degraded += 1
                log_event(
                    logger,
                    f"{entry.source_name}: {block.kind} block rendered as plain text ({block.reason})",
                    level=logging.WARNING,
                    event="block_degraded",
                    source_name=entry.source_name,
                    kind=block.kind,
                    language=block.language,
                    reason=block.reason,
                )
            rendered[entry.slug] = body
            progress.advance(render_task, 1)
        progress.advance(stage_task, 1)

        summaries = build_index(entries)
        feed = build_feed(entries, site, limit=cfg.output.feed_limit)
        sitemap = build_sitemap(entries, site) if cfg.output.sitemap else None
        progress.advance(stage_task, 1)

        artifacts: dict[str, str] = {cfg.output.feed_filename: feed}
        if sitemap is not None:
            artifacts["sitemap.xml"] = sitemap
        env = build_environment()
        stylesheet = _local_path(site.feed_stylesheet)
        if stylesheet:
            artifacts[stylesheet] = render_feed_stylesheet(env, site)
        assets: list[tuple[Path, str]] = []
        if cfg.output.pages:
            for entry in entries:
                artifacts[post_page_path(entry.slug)] = render_post_page(
                    env, entry, rendered[entry.slug], site
                )
            artifacts["blog/index.html"] = render_index_page(env, summaries, site)
            artifacts[CODE_STYLESHEET_PATH] = code_stylesheet(options.code_style)
            assets = _cover_assets(entries, Path(cfg.content.directory), logger)

        written = _write_artifacts(output_dir, artifacts, assets, logger)
        progress.advance(stage_task, 1)

    log_event(
        logger,
        "Build complete",
        event="build_complete",
        output=str(output_dir),
        entries=len(entries),
        files=len(written),
        degraded_blocks=degraded,
    )
    return BuildResult(
        output_dir=output_dir,
        entries=len(entries),
        degraded_blocks=degraded,
        written=written,
    )


def _local_path(href: str | None) -> str | None:
    """Output-relative path of a site-local URL path, or None for external URLs."""
    if not href or not href.startswith("/") or href.startswith("//"):
        return None
    return href.lstrip("/")


def _cover_assets(entries: ContentSet, content_dir: Path, logger: logging.Logger) -> list[tuple[Path, str]]:
    assets: list[tuple[Path, str]] = []
    for entry in entries:
        image = entry.metadata.cover_image
        if not image:
            continue
        source = content_dir / PurePosixPath(entry.source_name).parent / image
        if not source.is_file():
            log_event(
                logger,
                f"{entry.source_name}: cover image not found: {image}",
                level=logging.WARNING,
                event="cover_image_missing",
                source_name=entry.source_name,
                image=image,
            )
            continue
        assets.append((source, cover_path(entry.slug, image).lstrip("/")))
    return assets


def _write_artifacts(
    output_dir: Path,
    artifacts: dict[str, str],
    assets: list[tuple[Path, str]],
    logger: logging.Logger,
) -> list[Path]:
    written: list[Path] = []
    for relative, content in artifacts.items():
        target = output_dir / relative
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(content, encoding="utf-8")
        written.append(target)
    for source, relative in assets:
        target = output_dir / relative
        target.parent.mkdir(parents=True, exist_ok=True)
        shutil.copyfile(source, target)
        written.append(target)
    for target in written:
        log_event(logger, "Artifact written", level=logging.DEBUG, event="artifact_written", path=str(target))
    return written

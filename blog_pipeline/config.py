"""
Configuration management using YAML files and dataclasses.

This module defines all configuration dataclasses and provides loading
from YAML files with defaults. Configuration sections:
- SiteConfig: Site-wide metadata used by the feed and the sitemap
- ContentConfig: Where documents live and how they are discovered
- RenderConfig: Code highlighting and diagram settings
- OutputConfig: Which artifacts are written and where
- LoggingConfig: Logging behavior
- AppConfig: Root configuration container
"""

from __future__ import annotations

from dataclasses import dataclass, field
import os
from typing import Any

import yaml

from .core.types import SiteMetadata

BASE_URL_ENV = "SITE_BASE_URL"


@dataclass
class SiteConfig:
    """Site-wide metadata.

    Attributes:
        title: Site title, used as the feed channel title
        description: Site description, used as the feed channel description
        base_url: Absolute site URL; required for the feed and the sitemap
        language: Language code emitted in the feed
        feed_stylesheet: Path of the XSL stylesheet referenced by the feed
    """

    title: str = "Blog"
    description: str = ""
    base_url: str | None = None
    language: str = "en-us"
    feed_stylesheet: str = "/rss/styles.xsl"


@dataclass
class ContentConfig:
    """Content discovery settings.

    Attributes:
        directory: Directory containing the Markdown documents
        extensions: Recognized document extensions
        workers: Number of threads used to parse documents
    """

    directory: str = "content/blog"
    extensions: list[str] = field(default_factory=lambda: [".md"])
    workers: int = 1


@dataclass
class RenderConfig:
    """Body rendering settings.

    Attributes:
        code_style: Pygments style used for highlighted code blocks
        wrap_code: Soft-wrap long code lines instead of scrolling
        diagram_languages: Fence tags rendered as diagrams
    """

    code_style: str = "monokai"
    wrap_code: bool = True
    diagram_languages: list[str] = field(default_factory=lambda: ["mermaid"])


@dataclass
class OutputConfig:
    """Artifact output settings.

    Attributes:
        directory: Build output directory
        feed_filename: File name of the feed, relative to the output directory
        feed_limit: Maximum number of feed items, or None for all entries
        sitemap: Whether to write sitemap.xml
        pages: Whether to write the HTML pages
    """

    directory: str = "dist"
    feed_filename: str = "rss.xml"
    feed_limit: int | None = None
    sitemap: bool = True
    pages: bool = True


@dataclass
class LoggingConfig:
    """Configuration for logging behavior.

    Attributes:
        level: Logging level ("DEBUG", "INFO", "WARNING", "ERROR")
        console: Whether to log to console
        file: Whether to log to file
        format: Log file format ("jsonl" or "plain")
        filename: Name of the log file
        directory: Directory the log file is written to (kept out of the output)
    """

    level: str = "INFO"
    console: bool = True
    file: bool = False
    format: str = "jsonl"
    filename: str = "build.jsonl"
    directory: str = ".build-logs"


@dataclass
class AppConfig:
    """Root configuration container aggregating all config sections."""

    site: SiteConfig = field(default_factory=SiteConfig)
    content: ContentConfig = field(default_factory=ContentConfig)
    render: RenderConfig = field(default_factory=RenderConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def default_config() -> AppConfig:
    return AppConfig()


def load_config(path: str | None) -> AppConfig:
    """Load configuration from a YAML file with defaults."""
    if not path:
        return default_config()

    with open(path, "r", encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}

    return _merge_config(default_config(), raw)


def _merge_config(base: AppConfig, raw: dict[str, Any]) -> AppConfig:
    """Merge raw YAML config into base AppConfig."""
    data = _asdict(base)
    for key, value in raw.items():
        if key not in data:
            continue
        if isinstance(value, dict) and isinstance(data[key], dict):
            data[key].update({k: v for k, v in value.items() if k in data[key]})
        else:
            data[key] = value
    return _fromdict(data)


def _asdict(cfg: AppConfig) -> dict[str, Any]:
    """Convert AppConfig to nested dictionary."""
    return {
        "site": {
            "title": cfg.site.title,
            "description": cfg.site.description,
            "base_url": cfg.site.base_url,
            "language": cfg.site.language,
            "feed_stylesheet": cfg.site.feed_stylesheet,
        },
        "content": {
            "directory": cfg.content.directory,
            "extensions": list(cfg.content.extensions),
            "workers": cfg.content.workers,
        },
        "render": {
            "code_style": cfg.render.code_style,
            "wrap_code": cfg.render.wrap_code,
            "diagram_languages": list(cfg.render.diagram_languages),
        },
        "output": {
            "directory": cfg.output.directory,
            "feed_filename": cfg.output.feed_filename,
            "feed_limit": cfg.output.feed_limit,
            "sitemap": cfg.output.sitemap,
            "pages": cfg.output.pages,
        },
        "logging": {
            "level": cfg.logging.level,
            "console": cfg.logging.console,
            "file": cfg.logging.file,
            "format": cfg.logging.format,
            "filename": cfg.logging.filename,
            "directory": cfg.logging.directory,
        },
    }


def _fromdict(data: dict[str, Any]) -> AppConfig:
    """Reconstruct AppConfig from nested dictionary."""
    return AppConfig(
        site=SiteConfig(**data["site"]),
        content=ContentConfig(**data["content"]),
        render=RenderConfig(**data["render"]),
        output=OutputConfig(**data["output"]),
        logging=LoggingConfig(**data["logging"]),
    )


def get_base_url(cfg: SiteConfig) -> str | None:
    """Get the base URL from inline config or environment variable."""
    if cfg.base_url:
        return cfg.base_url
    return os.getenv(BASE_URL_ENV) or None


def site_metadata(cfg: AppConfig) -> SiteMetadata:
    """Build the SiteMetadata handed to the feed and sitemap builders."""
    return SiteMetadata(
        title=cfg.site.title,
        description=cfg.site.description,
        base_url=get_base_url(cfg.site),
        language=cfg.site.language,
        feed_stylesheet=cfg.site.feed_stylesheet,
    )

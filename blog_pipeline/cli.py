"""
Command-line interface for the blog pipeline.

Uses Typer to provide `build` and `check` commands with options for the
most common configuration settings. Supports loading .env files so the
site base URL can come from SITE_BASE_URL.
"""

from __future__ import annotations

from pathlib import Path

from dotenv import load_dotenv
from rich.console import Console
from rich.table import Table
import typer

from .config import BASE_URL_ENV, AppConfig, load_config
from .core.errors import BuildError
from .runner import check_content, run_build

app = typer.Typer(add_completion=False, help="Build a static blog from Markdown documents.")
console = Console()


def _load(
    config: Path | None,
    content: Path | None,
    output: Path | None = None,
    log_level: str | None = None,
) -> AppConfig:
    load_dotenv()
    cfg = load_config(str(config) if config else None)
    if content is not None:
        cfg.content.directory = str(content)
    if output is not None:
        cfg.output.directory = str(output)
    if log_level:
        cfg.logging.level = log_level
    return cfg


@app.command()
def build(
    config: Path | None = typer.Option(None, "--config", "-c", exists=True, dir_okay=False),
    content: Path | None = typer.Option(None, "--content", "-i", help="Content directory."),
    output: Path | None = typer.Option(None, "--output", "-o", help="Output directory."),
    base_url: str | None = typer.Option(
        None,
        "--base-url",
        envvar=BASE_URL_ENV,
        help=f"Absolute site URL used for feed and sitemap links (or set {BASE_URL_ENV} / .env).",
    ),
    workers: int | None = typer.Option(None, "--workers", min=1, help="Threads used to parse documents."),
    progress: bool = typer.Option(True, "--progress/--no-progress"),
    log_level: str | None = typer.Option(None, "--log-level", help="Logging level."),
    log_file: bool | None = typer.Option(
        None, "--log-file/--no-log-file", help="Enable or disable file logging."
    ),
):
    """Build the site: pages, blog index, RSS feed and sitemap.

    Args:
        config: Optional path to YAML config file
        content: Content directory override
        output: Output directory override
        base_url: Site base URL override
        workers: Document parsing threads
        progress: Whether to show progress bars
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
        log_file: Enable/disable file logging
    """
    cfg = _load(config, content, output, log_level)
    if base_url:
        cfg.site.base_url = base_url
    if workers is not None:
        cfg.content.workers = workers
    if log_file is not None:
        cfg.logging.file = log_file

    try:
        result = run_build(cfg, show_progress=progress, console=console)
    except BuildError as exc:
        console.print(f"[bold red]Build failed:[/] {exc}")
        raise typer.Exit(code=1)

    console.print(f"Built {result.entries} entries into {result.output_dir}")
    if result.degraded_blocks:
        console.print(
            f"[yellow]{result.degraded_blocks} block(s) rendered as plain text; see warnings above.[/]"
        )


@app.command()
def check(
    config: Path | None = typer.Option(None, "--config", "-c", exists=True, dir_okay=False),
    content: Path | None = typer.Option(None, "--content", "-i", help="Content directory."),
):
    """Validate front matter and slugs without writing anything."""
    cfg = _load(config, content)
    try:
        entries = check_content(cfg)
    except BuildError as exc:
        console.print(f"[bold red]Check failed:[/] {exc}")
        raise typer.Exit(code=1)

    table = Table(title=f"{len(entries)} entries")
    table.add_column("Source")
    table.add_column("Slug")
    table.add_column("Date")
    table.add_column("Title")
    for entry in entries:
        table.add_row(
            entry.source_name,
            entry.slug,
            entry.metadata.published_at.isoformat(),
            entry.metadata.title,
        )
    console.print(table)


if __name__ == "__main__":
    app()

"""CLI command implementations"""

import logging
from pathlib import Path
from typing import Annotated, Optional

import typer

from mdcompile.config import Settings, load_config
from mdcompile.core.models import CleanUrlsMode
from mdcompile.core.parse import discover_pages
from mdcompile.core.pipeline import run_build, run_compile


def _fail(msg: str, cause: Exception = None) -> None:
    """Print a user-friendly error to stderr and exit 1."""
    typer.echo(f"Error: {msg}", err=True)
    if cause:
        typer.echo(f"  {cause}", err=True)
    raise typer.Exit(1)


def _settings(overrides: dict = None) -> Settings:
    """Load config with standard CLI error handling."""
    try:
        return load_config(overrides=overrides)
    except ValueError as e:
        _fail(str(e))


def main_callback(
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Show debug output")] = False,
    ):
    """Configure logging for every command."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )


def build_cmd(
    path: Annotated[Optional[str], typer.Argument(help="Source directory (defaults to src_dir)")] = None,
    out: Annotated[Optional[str], typer.Option("--out-dir", help="Output directory")] = None,
    clean_urls: Annotated[Optional[CleanUrlsMode], typer.Option("--clean-urls", help="Link output mode")] = None,
    last_updated: Annotated[Optional[bool], typer.Option("--last-updated/--no-last-updated", help="Include git timestamps")] = None,
    production: Annotated[Optional[bool], typer.Option("--production/--dev", help="Guard build-time constants")] = None,
    ignore_dead_links: Annotated[Optional[bool], typer.Option("--ignore-dead-links", help="Do not fail on dead links")] = None,
    ):
    """Compile every page under the source directory into .vue units + page data JSON."""
    settings = _settings(overrides={
        "src_dir": path, "out_dir": out, "clean_urls": clean_urls,
        "last_updated": last_updated, "is_build": production,
        "ignore_dead_links": ignore_dead_links,
    })
    output_dir = Path(settings.out_dir)
    try:
        results = run_build(settings, output_dir)
    except RuntimeError as e:
        _fail(str(e))

    dead = 0
    for result, unit in results:
        typer.echo(f"  {result.page_data.relative_path} -> {unit}")
        dead += len(result.dead_links)
    typer.echo(f"Compiled {len(results)} page(s) to {output_dir}/")

    if dead:
        typer.echo(f"Found {dead} dead link(s).", err=True)
        if not settings.ignore_dead_links:
            raise typer.Exit(1)


def compile_cmd(
    file: Annotated[Path, typer.Argument(exists=True, dir_okay=False, readable=True, help="Markdown file to compile")],
    src: Annotated[Optional[str], typer.Option("--src-dir", help="Source root used for page lookup")] = None,
    out: Annotated[Optional[Path], typer.Option("--out", "-o", help="Write the unit here instead of stdout")] = None,
    production: Annotated[Optional[bool], typer.Option("--production/--dev", help="Guard build-time constants")] = None,
    ):
    """Compile one markdown file and print its component source."""
    settings = _settings(overrides={"src_dir": src, "is_build": production})
    try:
        result = run_compile(settings, file)
    except RuntimeError as e:
        _fail(str(e))

    if out:
        out.parent.mkdir(parents=True, exist_ok=True)
        out.write_text(result.unit_source, encoding="utf-8")
        typer.echo(f"  {file} -> {out}")
    else:
        typer.echo(result.unit_source)


def pages_cmd(
    path: Annotated[Optional[str], typer.Argument(help="Source directory (defaults to src_dir)")] = None,
    ):
    """List the pages known to dead-link validation."""
    settings = _settings(overrides={"src_dir": path})
    src_dir = Path(settings.src_dir)
    if not src_dir.is_dir():
        _fail(f"Source directory not found: {settings.src_dir}")
    pages = discover_pages(src_dir, exclude=[settings.public_dir])
    if not pages:
        typer.echo("No pages found.")
        raise typer.Exit(1)
    for page in pages:
        typer.echo(page)

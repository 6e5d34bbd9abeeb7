"""Command-line interface for marc.

This module defines the ``marc`` command using the Click framework. It takes
a single site directory and renders every Markdown document in it.
"""

from __future__ import annotations

from pathlib import Path

import click

from . import __version__
from .build import build_site, load_config
from .errors import BuildError


@click.command()
@click.version_option(version=__version__, prog_name="marc")
@click.argument(
    "site_dir",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
)
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="YAML file overriding the build settings.",
)
def cli(site_dir: Path, config_path: Path | None):
    """Render the Markdown documents under SITE_DIR to HTML."""
    config = load_config(config_path)
    try:
        result = build_site(site_dir, config)
    except BuildError as exc:
        click.echo(click.style("Build failed:", fg="red", bold=True), err=True)
        click.echo(click.style(f"  File: {exc.source_path}", fg="yellow"), err=True)
        click.echo(click.style(f"  Error: {exc.message}", fg="white"), err=True)
        raise SystemExit(1) from None
    click.echo(f"Built {len(result.documents)} pages")


def main():
    """Entry point for the CLI application."""
    cli()

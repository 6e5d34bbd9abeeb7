"""Site building functionality for marc.

This module ties the pipeline together: it resolves the layout, loads and
orders the documents, converts and renders each one, and writes the
results next to their sources.

Key functions:
- build_site: Main function to build the entire site.
- load_config: Loads optional build settings from a YAML file.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any

import click
import yaml
from .collections import DocumentCollection, build_registry
from .content import ContentProcessor, Document
from .errors import ConversionError, RenderError, WriteError
from .protocols import BodyConverter, LayoutRenderer
from .renderers import MarkdownConverter
from .templates import DEFAULT_LAYOUT_FILE, LayoutResolver, TemplateEngine
from .utils import write_file

DEFAULT_CONFIG = {
    "source_extension": ".md",
    "layout_file": DEFAULT_LAYOUT_FILE,
    "output_mode": 0o600,
}


@dataclass
class BuildResult:
    """Result of a site build operation.

    Attributes:
        documents: All documents in registry order.
        site_dir: Site root that was built.
        layout_is_default: Whether the built-in layout was used.
    """

    documents: DocumentCollection
    site_dir: Path
    layout_is_default: bool


def load_config(config_path: Path | None = None) -> dict[str, Any]:
    """Load build settings, applying defaults.

    Args:
        config_path: Optional YAML file overriding DEFAULT_CONFIG.

    Returns:
        Dictionary containing configuration values.
    """
    config = DEFAULT_CONFIG.copy()
    if config_path is not None:
        with open(config_path, encoding="utf-8") as f:
            loaded = yaml.safe_load(f) or {}
            if isinstance(loaded, dict):
                config.update(loaded)
    return config


def build_site(
    site_dir: Path,
    config: dict[str, Any] | None = None,
    converter: BodyConverter | None = None,
) -> BuildResult:
    """Build the entire static site.

    Documents are processed one at a time in registry order. The first
    failure aborts the build; files written before it stay on disk.

    Args:
        site_dir: Site root containing the source documents.
        config: Build settings; defaults to DEFAULT_CONFIG.
        converter: Markdown converter; defaults to MarkdownConverter.

    Returns:
        BuildResult with the ordered documents.

    Raises:
        BuildError: On the first discovery, conversion, render or write failure.
    """
    settings = DEFAULT_CONFIG.copy()
    settings.update(config or {})
    site_dir = site_dir.resolve()
    converter = converter or MarkdownConverter()

    resolver = LayoutResolver(site_dir, settings["layout_file"])
    engine = TemplateEngine(resolver.resolve())

    documents = build_registry(
        ContentProcessor(site_dir, extension=settings["source_extension"]).load()
    )
    rendered_bodies: list[str] = []
    for document in documents:
        click.echo(f"* {document.output_path}")
        html = _convert_document(document, converter)
        # the listing in `pages` stays unrendered until the pass completes
        current = replace(document, rendered_body=html)
        rendered = _render_document(current, documents, engine)
        _write_document(document, rendered, settings["output_mode"])
        rendered_bodies.append(html)

    for document, html in zip(documents, rendered_bodies):
        document.rendered_body = html

    return BuildResult(
        documents=documents,
        site_dir=site_dir,
        layout_is_default=resolver.used_default,
    )


def _convert_document(document: Document, converter: BodyConverter) -> str:
    try:
        return converter.convert(document.body)
    except Exception as exc:
        raise ConversionError(
            document.source_path,
            f"failed to convert markdown: {_format_error_message(exc)}",
            exc,
        ) from exc


def _render_document(
    document: Document,
    documents: DocumentCollection,
    engine: LayoutRenderer,
) -> str:
    try:
        return engine.render_document(document, documents)
    except Exception as exc:
        raise RenderError(
            document.source_path,
            f"failed to render page: {_format_error_message(exc)}",
            exc,
        ) from exc


def _format_error_message(exc: Exception) -> str:
    """Format an exception into a user-friendly error message.

    Args:
        exc: The exception to format.

    Returns:
        A human-readable error message.
    """
    error_type = type(exc).__name__
    error_msg = str(exc)

    if error_type == "UndefinedError":
        return f"Undefined variable: {error_msg}"
    if error_type == "UnknownFormatError":
        return f"Date format error: {error_msg}"
    if error_type == "UnicodeDecodeError":
        return f"Invalid UTF-8: {error_msg}"

    return f"{error_type}: {error_msg}"


def _write_document(document: Document, rendered: str, mode: int) -> None:
    """Write a rendered document next to its source.

    Args:
        document: Document that was rendered.
        rendered: Rendered HTML.
        mode: Permission bits for newly created files.
    """
    try:
        write_file(document.output_path, rendered.encode("utf-8"), mode)
    except OSError as exc:
        raise WriteError(
            document.source_path, f"failed to write file: {exc}", exc
        ) from exc

"""Layout templates for marc.

This module uses Jinja2 to compile the site layout and render documents
through it.

Key classes:
- LayoutResolver: Picks the user's layout or the built-in one.
- TemplateEngine: Renders documents with the compiled layout.
"""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Any

import click
from jinja2 import Environment, StrictUndefined, Template, TemplateSyntaxError

from .collections import DocumentCollection
from .content import Document
from .extractors import Metadata
from .functions import default_template_functions

__all__ = [
    "DEFAULT_LAYOUT_FILE",
    "LayoutEnvironment",
    "LayoutResolver",
    "TemplateEngine",
]

DEFAULT_LAYOUT_FILE = "base.tmpl"
STYLE_PLACEHOLDER = "STYLE_PLACEHOLDER"

# Path to the built-in layout and stylesheet
_DEFAULTS_DIR = Path(__file__).parent / "defaults"


class LayoutEnvironment(Environment):
    """Jinja2 environment that reads preamble values before dict attributes.

    ``page.metadata.update`` renders the ``update:`` preamble value, not the
    bound ``dict.update`` method.
    """

    def getattr(self, obj: Any, attribute: str) -> Any:
        if isinstance(obj, Metadata):
            return obj[attribute]
        return super().getattr(obj, attribute)


def default_layout_source() -> str:
    """Return the built-in layout with the built-in stylesheet inlined."""
    layout = (_DEFAULTS_DIR / "default.html.jinja").read_text(encoding="utf-8")
    css = (_DEFAULTS_DIR / "default.css").read_text(encoding="utf-8")
    return layout.replace(STYLE_PLACEHOLDER, css, 1)


class LayoutResolver:
    """Resolves the layout template of a site.

    The user's layout lives at ``<site_dir>/<layout_file>``. When it is
    missing, unreadable, or does not compile, the built-in layout is used
    instead; a layout that fails to compile also produces a warning.

    Attributes:
        site_dir: Site root.
        layout_path: Location of the user layout.
        functions: Functions installed as template globals.
        used_default: Whether the last resolve() fell back to the built-in layout.
    """

    def __init__(
        self,
        site_dir: Path,
        layout_file: str = DEFAULT_LAYOUT_FILE,
        functions: Mapping[str, Any] | None = None,
    ):
        self.site_dir = site_dir
        self.layout_path = site_dir / layout_file
        self.functions = (
            functions if functions is not None else default_template_functions
        )
        self.used_default = False

    def _environment(self) -> Environment:
        env = LayoutEnvironment(autoescape=True, undefined=StrictUndefined)
        env.globals.update(self.functions)
        return env

    def resolve(self) -> Template:
        """Compile and return the layout template.

        Returns:
            Compiled Jinja2 template with the template functions bound.
        """
        env = self._environment()
        source = self._read_user_layout()
        if source is not None:
            try:
                template = env.from_string(source)
            except TemplateSyntaxError as exc:
                click.echo(
                    click.style(
                        f"Warning: {self.layout_path} line {exc.lineno}: "
                        f"{exc.message}; using the built-in layout.",
                        fg="yellow",
                    ),
                    err=True,
                )
            else:
                self.used_default = False
                return template
        self.used_default = True
        return env.from_string(default_layout_source())

    def _read_user_layout(self) -> str | None:
        try:
            return self.layout_path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError):
            return None


class TemplateEngine:
    """Renders documents through a compiled layout.

    Attributes:
        template: Compiled layout template.
    """

    def __init__(self, template: Template):
        self.template = template

    def render_document(self, document: Document, documents: DocumentCollection) -> str:
        """Render a document with the layout.

        Args:
            document: Document being rendered; exposed as ``page``.
            documents: Every document of the site; exposed as ``pages``.

        Returns:
            Rendered HTML string.
        """
        return self.template.render(page=document, pages=documents)


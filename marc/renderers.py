"""Markdown conversion for marc.

Key classes:
- MarkdownConverter: Converts document bodies to HTML fragments.
"""

from __future__ import annotations

import re

import mistune
from pygments import highlight
from pygments.formatters import HtmlFormatter
from pygments.lexers import get_lexer_by_name
from pygments.util import ClassNotFound

TAG_RE = re.compile(r"<[^>]+>")

DEFAULT_PLUGINS = ("strikethrough", "footnotes", "table", "url")


def _generate_heading_id(text: str) -> str:
    """Generate a URL-friendly ID from heading text.

    Args:
        text: The heading text, possibly containing inline HTML.

    Returns:
        URL-friendly slug suitable for anchor links.
    """
    slug = TAG_RE.sub("", text).lower().strip()
    slug = re.sub(r"[^\w\s-]", "", slug)
    slug = re.sub(r"[-\s]+", "-", slug)
    return slug.strip("-") or "heading"


class _HighlightRenderer(mistune.HTMLRenderer):
    """HTML renderer adding heading anchors and Pygments highlighting.

    Raw HTML in the source is passed through untouched.
    """

    def __init__(self):
        super().__init__(escape=False)
        self._heading_id_counts: dict[str, int] = {}

    def heading(self, text: str, level: int, **attrs) -> str:
        base_id = _generate_heading_id(text)
        if base_id in self._heading_id_counts:
            self._heading_id_counts[base_id] += 1
            heading_id = f"{base_id}-{self._heading_id_counts[base_id]}"
        else:
            self._heading_id_counts[base_id] = 0
            heading_id = base_id
        return f'<h{level} id="{heading_id}">{text}</h{level}>\n'

    def block_code(self, code: str, info: str | None = None) -> str:
        """Render a code block, highlighted when the language is known.

        Args:
            code: The code content.
            info: Language identifier (e.g., 'python', 'go').

        Returns:
            HTML string with the code block.
        """
        lang = info.split()[0] if info and info.strip() else None
        if lang:
            try:
                lexer = get_lexer_by_name(lang, stripall=True)
            except ClassNotFound:
                lexer = None
            if lexer is not None:
                formatter = HtmlFormatter(nowrap=False, cssclass="highlight")
                return highlight(code, lexer, formatter)
        escaped = code.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")
        lang_class = f' class="language-{lang}"' if lang else ""
        return f"<pre><code{lang_class}>{escaped}</code></pre>\n"


class MarkdownConverter:
    """Converts Markdown document bodies to HTML.

    A fresh renderer is created per call so heading ids are unique per
    document, not per site.

    Attributes:
        plugins: Mistune plugin names to enable.
    """

    def __init__(self, plugins: tuple[str, ...] = DEFAULT_PLUGINS):
        self.plugins = plugins

    def convert(self, body: bytes) -> str:
        """Convert a Markdown body to an HTML fragment.

        Args:
            body: Raw Markdown bytes, UTF-8 encoded.

        Returns:
            Rendered HTML.

        Raises:
            UnicodeDecodeError: If the body is not valid UTF-8.
        """
        text = body.decode("utf-8")
        markdown = mistune.create_markdown(
            renderer=_HighlightRenderer(), plugins=list(self.plugins)
        )
        return markdown(text)

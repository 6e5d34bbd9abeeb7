"""Functions available to layout templates.

The registry is a fixed capability object handed to the template engine;
layouts cannot add to it at runtime.

Key names:
- DATE_FORMATS: Closed mapping of format names to strftime patterns.
- dateformat: Convert a date string between two named formats.
- TemplateFunctions: Read-only mapping of template function names.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator, Mapping
from datetime import datetime, timezone
from types import MappingProxyType
from typing import Any

from .errors import UnknownFormatError

DATE_FORMATS: Mapping[str, str] = MappingProxyType(
    {
        "rfc822": "%d %b %y %H:%M %Z",
        "yyyy-mm-dd": "%Y-%m-%d",
        "shortdate": "%d %b %Y",
    }
)

ZERO_TIME = datetime(1, 1, 1, tzinfo=timezone.utc)


def lookup_format(name: str) -> str:
    """Return the strftime pattern registered under ``name``.

    Raises:
        UnknownFormatError: If the name is not registered.
    """
    try:
        return DATE_FORMATS[name]
    except KeyError:
        raise UnknownFormatError(name) from None


def dateformat(source_format: str, dest_format: str, value: str) -> str:
    """Reformat a date string from one named format to another.

    A value that does not match the source format is treated as the zero
    time (``0001-01-01 00:00 UTC``) instead of failing the render.

    Args:
        source_format: Name of the format ``value`` is written in.
        dest_format: Name of the format to produce.
        value: Date string to convert.

    Returns:
        The formatted date.

    Raises:
        UnknownFormatError: If either format name is unknown.

    Examples:
        >>> dateformat("yyyy-mm-dd", "shortdate", "2024-05-01")
        '01 May 2024'
    """
    src = lookup_format(source_format)
    dst = lookup_format(dest_format)
    try:
        parsed = datetime.strptime(value, src)
    except (TypeError, ValueError):
        parsed = ZERO_TIME
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    # strftime does not zero-pad years below 1000 on every platform
    return parsed.strftime(dst.replace("%Y", f"{parsed.year:04d}"))


def _pygments_css() -> str:
    """Return Pygments CSS styles for highlighted code blocks."""
    from pygments.formatters import HtmlFormatter

    return HtmlFormatter().get_style_defs(".highlight")


class TemplateFunctions(Mapping[str, Callable[..., Any]]):
    """Named functions exposed to layouts.

    Instances are immutable; the engine installs them as Jinja globals
    before compiling any template.
    """

    def __init__(self, functions: Mapping[str, Callable[..., Any]] | None = None):
        if functions is None:
            functions = {"dateformat": dateformat, "pygments_css": _pygments_css}
        self._functions = MappingProxyType(dict(functions))

    def __getitem__(self, name: str) -> Callable[..., Any]:
        return self._functions[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._functions)

    def __len__(self) -> int:
        return len(self._functions)

    def __repr__(self) -> str:  # pragma: no cover - for debugging
        return f"TemplateFunctions({', '.join(self._functions)})"


default_template_functions = TemplateFunctions()

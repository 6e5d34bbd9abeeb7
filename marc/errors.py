"""Error types for marc.

Every fatal condition during a build is a BuildError subclass carrying the
source document it concerns, so the CLI can report the file and the cause.
"""

from __future__ import annotations

from pathlib import Path


class BuildError(Exception):
    """Error during site build with file context.

    Attributes:
        source_path: Path to the source file that caused the error.
        message: Human-readable error message.
        original_error: The original exception that was caught.
    """

    def __init__(
        self,
        source_path: Path,
        message: str,
        original_error: Exception | None = None,
    ):
        self.source_path = source_path
        self.message = message
        self.original_error = original_error
        super().__init__(f"{source_path}: {message}")


class DiscoveryError(BuildError):
    """Walking the site root or reading a source file failed."""


class PathError(BuildError):
    """A discovered file does not live under the site root."""


class ConversionError(BuildError):
    """The Markdown converter rejected a document body."""


class RenderError(BuildError):
    """The layout template failed while rendering a document."""


class WriteError(BuildError):
    """An output file could not be created or written."""


class UnknownFormatError(ValueError):
    """A date format name is not in the date format registry."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"unknown date format: {name}")

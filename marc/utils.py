"""Utility functions for marc.

Key functions:
    is_source_file: Check whether a path is a source document.
    html_sibling: Path of the HTML file written next to a source file.
    strip_index: Drop a trailing ``index.html`` component from a URL.
    write_file: Write bytes, creating new files with restricted permissions.
"""

from __future__ import annotations

import os
from pathlib import Path

INDEX_NAME = "index.html"


def is_source_file(path: Path, extension: str = ".md") -> bool:
    """Check if a path is a source document.

    The comparison is case-sensitive: ``notes.MD`` is not a source file
    when the extension is ``.md``.

    Args:
        path: Path to check.
        extension: Designated source extension, including the dot.

    Returns:
        True if the path is a regular file with the given extension.
    """
    return path.suffix == extension and path.is_file()


def html_sibling(path: Path) -> Path:
    """Return ``path`` with its extension replaced by ``.html``.

    Examples:
        >>> html_sibling(Path("site/posts/hello.md"))
        PosixPath('site/posts/hello.html')
    """
    return path.with_suffix(".html")


def strip_index(url: str) -> str:
    """Remove a final ``index.html`` component from a URL.

    Only a whole trailing component is removed, so ``myindex.html`` and
    ``index.html/extra`` are left alone.

    Examples:
        >>> strip_index("blog/index.html")
        'blog/'
        >>> strip_index("index.html")
        ''
    """
    if url == INDEX_NAME:
        return ""
    if url.endswith("/" + INDEX_NAME):
        return url[: -len(INDEX_NAME)]
    return url


def write_file(path: Path, data: bytes, mode: int = 0o600) -> None:
    """Write ``data`` to ``path``, truncating any existing file.

    A newly created file gets ``mode`` (subject to the umask); an existing
    file keeps its permissions.

    Args:
        path: Destination file.
        data: Bytes to write.
        mode: Permission bits for newly created files.
    """
    fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, mode)
    with os.fdopen(fd, "wb") as f:
        f.write(data)

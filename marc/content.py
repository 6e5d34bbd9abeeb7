"""Content discovery and loading for marc.

This module finds source documents under a site root, splits their
preambles, and derives their URLs and output locations.

Key classes:
- Document: Dataclass representing one source document.
- FileContentLoader: Discovers source files in walk order.
- PathMapper: Derives relative paths, URLs and output paths.
- DocumentLoader: Builds a Document from a source file.
- ContentProcessor: Facade loading every document of a site.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from pathlib import Path

from markupsafe import Markup

from .errors import DiscoveryError, PathError
from .extractors import Metadata, PreambleExtractor, default_preamble_extractor
from .utils import html_sibling, is_source_file, strip_index


@dataclass
class Document:
    """One discovered source document.

    Attributes:
        metadata: Preamble values (absent keys read as empty strings).
        body: Raw bytes following the preamble.
        url: Site-relative URL, e.g. ``posts/hello.html`` or ``posts/``.
        source_path: Absolute path to the source file.
        relative_path: Source path relative to the site root.
        output_path: Where the rendered HTML is written.
        rendered_body: HTML produced by the converter during the build.
    """

    metadata: Metadata
    body: bytes
    url: str
    source_path: Path
    relative_path: Path
    output_path: Path
    rendered_body: str = field(default="", repr=False)

    @property
    def html(self) -> Markup:
        """Return the converted body, marked safe for the layout."""
        return Markup(self.rendered_body)

    @property
    def sort_key(self) -> str:
        return self.metadata.get("date", "")


class FileContentLoader:
    """Discovers source files below a site root.

    Directories are walked depth first and the entries of each directory
    are visited in lexical order, so the discovery order only depends on
    file names.

    Attributes:
        site_dir: Directory containing site content.
        extension: Designated source extension.
    """

    def __init__(self, site_dir: Path, extension: str = ".md"):
        self.site_dir = site_dir
        self.extension = extension

    def iter_files(self) -> list[Path]:
        """Return all source files in walk order.

        Raises:
            DiscoveryError: If a directory cannot be listed.
        """
        return list(self._walk(self.site_dir))

    def _walk(self, directory: Path) -> Iterator[Path]:
        try:
            entries = sorted(directory.iterdir(), key=lambda p: p.name)
        except OSError as exc:
            raise DiscoveryError(
                directory, f"failed to list directory: {exc}", exc
            ) from exc
        for path in entries:
            if path.is_dir() and not path.is_symlink():
                yield from self._walk(path)
            elif is_source_file(path, self.extension):
                yield path


class PathMapper:
    """Maps source file locations to URLs and output files."""

    def map_path(self, path: Path, site_dir: Path) -> tuple[Path, str]:
        """Derive the relative path and URL of a source file.

        Args:
            path: Absolute path of the source file.
            site_dir: Site root.

        Returns:
            Tuple of (relative path, URL).

        Raises:
            PathError: If ``path`` is not under ``site_dir``.
        """
        try:
            rel = path.relative_to(site_dir)
        except ValueError as exc:
            raise PathError(path, f"not under site root {site_dir}", exc) from exc
        url = strip_index(html_sibling(rel).as_posix())
        return rel, url

    def output_path(self, path: Path) -> Path:
        """Return the HTML file written alongside ``path``."""
        return html_sibling(path)


class DocumentLoader:
    """Builds Document objects from source files.

    Attributes:
        site_dir: Site root.
        extractor: Preamble extractor.
        path_mapper: Path mapper instance.
    """

    def __init__(
        self,
        site_dir: Path,
        extractor: PreambleExtractor | None = None,
        path_mapper: PathMapper | None = None,
    ):
        self.site_dir = site_dir
        self.extractor = extractor or default_preamble_extractor
        self.path_mapper = path_mapper or PathMapper()

    def load(self, path: Path) -> Document:
        """Read a source file and build its Document.

        Args:
            path: Path to the source file.

        Returns:
            Document with metadata, body and derived locations.

        Raises:
            DiscoveryError: If the file cannot be read.
            PathError: If the file is not under the site root.
        """
        try:
            raw = path.read_bytes()
        except OSError as exc:
            raise DiscoveryError(path, f"failed to read page: {exc}", exc) from exc
        metadata, body = self.extractor.extract(raw)
        rel, url = self.path_mapper.map_path(path, self.site_dir)
        return Document(
            metadata=metadata,
            body=body,
            url=url,
            source_path=path,
            relative_path=rel,
            output_path=self.path_mapper.output_path(path),
        )


class ContentProcessor:
    """Facade for discovering and loading every document of a site.

    Attributes:
        site_dir: Site root.
    """

    def __init__(
        self,
        site_dir: Path,
        content_loader: FileContentLoader | None = None,
        document_loader: DocumentLoader | None = None,
        extension: str = ".md",
    ):
        self.site_dir = site_dir
        self._content_loader = content_loader or FileContentLoader(
            site_dir, extension
        )
        self._document_loader = document_loader or DocumentLoader(site_dir)

    def load(self) -> list[Document]:
        """Load all source documents in discovery order.

        Returns:
            List of Document objects.
        """
        return [
            self._document_loader.load(path)
            for path in self._content_loader.iter_files()
        ]

"""Protocol definitions for marc.

The build depends on the Markdown converter and the layout renderer only
through these interfaces, so either can be replaced in tests.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from .collections import DocumentCollection
    from .content import Document


@runtime_checkable
class BodyConverter(Protocol):
    """Protocol for converting a document body to an HTML fragment."""

    @abstractmethod
    def convert(self, body: bytes) -> str:
        """Convert a raw body.

        Args:
            body: Raw document body.

        Returns:
            HTML fragment.
        """
        ...


@runtime_checkable
class LayoutRenderer(Protocol):
    """Protocol for rendering a document through the site layout."""

    @abstractmethod
    def render_document(
        self, document: Document, documents: DocumentCollection
    ) -> str:
        """Render a document with its layout.

        Args:
            document: Document being rendered.
            documents: Every document of the site, in registry order.

        Returns:
            Rendered HTML string.
        """
        ...

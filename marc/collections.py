from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence

from .content import Document


class DocumentCollection(Sequence[Document]):
    """Read-only sequence of Documents used by the build and by layouts."""

    def __init__(self, documents: Iterable[Document]):
        self._documents = tuple(documents)

    def __iter__(self) -> Iterator[Document]:
        return iter(self._documents)

    def __len__(self) -> int:
        return len(self._documents)

    def __getitem__(self, item):
        if isinstance(item, slice):
            return DocumentCollection(self._documents[item])
        return self._documents[item]

    def with_meta(self, key: str, value: str) -> DocumentCollection:
        return DocumentCollection(
            d for d in self._documents if d.metadata.get(key) == value
        )

    def latest(self, count: int = 5) -> DocumentCollection:
        return self[:count]

    def __repr__(self) -> str:  # pragma: no cover - for debugging
        return f"DocumentCollection({len(self._documents)} documents)"


def build_registry(documents: Iterable[Document]) -> DocumentCollection:
    """Sort documents newest first by their ``date`` preamble value.

    Dates are compared as plain strings, so ordering is only chronological
    when every document uses the same sortable format such as ISO 8601.
    Documents without a date sort last. ``sorted`` is stable, so documents
    with equal dates keep their discovery order.

    Args:
        documents: Documents in discovery order.

    Returns:
        A DocumentCollection in registry order.
    """
    return DocumentCollection(
        sorted(documents, key=lambda d: d.sort_key, reverse=True)
    )

"""Preamble extraction for marc.

A document may start with a block of ``key: value`` lines fenced by ``---``
delimiters. This module splits that block from the body.

Key names:
- Metadata: Mapping of preamble keys to values.
- extract_metadata: Split raw bytes into (metadata, body).
- PreambleExtractor: Injectable wrapper used by the document loader.
"""

from __future__ import annotations

DELIMITER = b"---"


class Metadata(dict):
    """Preamble values keyed by name.

    Keys that were not declared stay absent (``"date" in meta`` is False),
    but looking one up returns an empty string so layouts can reference
    optional fields such as ``page.metadata.title`` without failing.
    """

    def __missing__(self, key: str) -> str:
        return ""


def extract_metadata(raw: bytes) -> tuple[Metadata, bytes]:
    """Split a raw document into its preamble metadata and body.

    Documents without an opening delimiter, or whose preamble is never
    closed, have no metadata and are returned unchanged as body.

    Args:
        raw: Raw file content.

    Returns:
        Tuple of (metadata, remaining body bytes).
    """
    if not raw.startswith(DELIMITER):
        return Metadata(), raw
    end = raw.find(DELIMITER, len(DELIMITER))
    if end == -1:
        return Metadata(), raw

    meta = Metadata()
    preamble = raw[len(DELIMITER) : end].decode("utf-8", errors="replace")
    for line in preamble.split("\n"):
        key, sep, value = line.partition(":")
        if not sep:
            continue
        meta[key.strip()] = value.strip()
    return meta, raw[end + len(DELIMITER) :]


class PreambleExtractor:
    """Extracts ``---`` delimited preambles from document bytes."""

    def extract(self, raw: bytes) -> tuple[Metadata, bytes]:
        """Extract metadata and body.

        Args:
            raw: Raw file content.

        Returns:
            Tuple of (metadata, body).
        """
        return extract_metadata(raw)


# Default extractor instance
default_preamble_extractor = PreambleExtractor()

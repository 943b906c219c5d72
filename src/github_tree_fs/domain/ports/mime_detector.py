"""Port: MIME-type detection — defined by the domain, implemented by infrastructure."""

from __future__ import annotations

from typing import Protocol


class MimeTypeDetector(Protocol):
    """Abstract contract for guessing a file's MIME type."""

    def detect_by_extension(self, path: str) -> str | None:
        """Return the MIME type for *path*'s extension, or ``None`` if unknown."""
        ...

    def detect_by_content(self, content: bytes) -> str:
        """Sniff the MIME type from the file's bytes."""
        ...

"""MIME sniffer — implements the MimeTypeDetector port."""

from __future__ import annotations

import mimetypes
import posixpath

import filetype

_TEXT_PLAIN = "text/plain"
_OCTET_STREAM = "application/octet-stream"


class MimeSniffer:
    """Extension lookup via :mod:`mimetypes`, magic-byte sniffing via ``filetype``."""

    def detect_by_extension(self, path: str) -> str | None:
        basename = posixpath.basename(path)
        # dotfiles such as ".gitignore" have no extension
        if basename.rfind(".") < 1:
            return None
        mime_type, _ = mimetypes.guess_type(basename, strict=False)
        return mime_type

    def detect_by_content(self, content: bytes) -> str:
        if not content:
            return "application/x-empty"

        kind = filetype.guess(content)
        if kind is not None:
            return kind.mime

        if b"\x00" in content[:8192]:
            return _OCTET_STREAM
        try:
            content[:8192].decode("utf-8")
        except UnicodeDecodeError as exc:
            # a multi-byte sequence cut at the sniff boundary is still text
            if exc.start < len(content[:8192]) - 3:
                return _OCTET_STREAM
        return _TEXT_PLAIN

"""Uploaded files and MIME type inference from filenames."""

from __future__ import annotations

import mimetypes
import os
from dataclasses import dataclass, field
from io import BytesIO
from typing import BinaryIO

OCTET_STREAM = "application/octet-stream"

# Isolated registry: built from Python's default table only, so results do
# not depend on the host's /etc/mime.types.
_registry = mimetypes.MimeTypes()

# Alternative types browsers send that the default table does not list.
_EXTRA_TYPES: dict[str, tuple[str, ...]] = {
    ".md": ("text/markdown",),
    ".markdown": ("text/markdown",),
    ".rtf": ("text/rtf",),
}


@dataclass
class UploadedFile:
    """A file part from a multipart submission.

    Attributes:
        original_filename: Filename as sent by the client.
        content_type: Declared media type of the part.
        file: Binary stream holding the part's content.
    """

    original_filename: str
    content_type: str
    file: BinaryIO = field(default_factory=BytesIO)

    @property
    def size(self) -> int:
        """Content length in bytes (the stream position is preserved)."""
        position = self.file.tell()
        self.file.seek(0, os.SEEK_END)
        size = self.file.tell()
        self.file.seek(position)
        return size

    def read(self) -> bytes:
        self.file.seek(0)
        return self.file.read()

    def __repr__(self) -> str:
        return (
            f"UploadedFile(original_filename={self.original_filename!r}, "
            f"content_type={self.content_type!r}, size={self.size})"
        )


def normalize_media_type(value: str | None) -> str:
    """``"Text/Plain; charset=utf-8"`` -> ``"text/plain"``."""
    if not value:
        return ""
    return value.split(";", 1)[0].strip().lower()


def filename_types(filename: str) -> list[str]:
    """Media types inferred from *filename*'s extension, most likely first."""
    candidates = [
        _registry.guess_type(filename, strict=True)[0],
        _registry.guess_type(filename, strict=False)[0],
    ]
    extension = os.path.splitext(filename)[1].lower()
    candidates.extend(_EXTRA_TYPES.get(extension, ()))

    types: list[str] = []
    for candidate in candidates:
        if candidate and candidate not in types:
            types.append(candidate)
    return types

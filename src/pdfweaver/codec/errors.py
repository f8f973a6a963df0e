"""Codec errors."""

from __future__ import annotations

from pathlib import Path


class DocumentError(RuntimeError):
    """Base class for document load/save failures."""

    def __init__(self, message: str, *, path: Path | str | None = None) -> None:
        super().__init__(message)
        self.path = Path(path) if path is not None else None


class DocumentNotFoundError(DocumentError):
    pass


class MalformedDocumentError(DocumentError):
    pass


class DocumentWriteError(DocumentError):
    pass

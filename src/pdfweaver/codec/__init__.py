"""Document codec (pypdf) and compressor."""

from __future__ import annotations

from pdfweaver.codec.compressor import compress, deflate_stream
from pdfweaver.codec.errors import (
    DocumentError,
    DocumentNotFoundError,
    DocumentWriteError,
    MalformedDocumentError,
)
from pdfweaver.codec.reader import from_pdf_object, load
from pdfweaver.codec.writer import save, serialize, to_pdf_object

__all__ = [
    "DocumentError",
    "DocumentNotFoundError",
    "DocumentWriteError",
    "MalformedDocumentError",
    "compress",
    "deflate_stream",
    "from_pdf_object",
    "load",
    "save",
    "serialize",
    "to_pdf_object",
]

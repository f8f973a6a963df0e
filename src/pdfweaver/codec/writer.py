"""Document serialization.

Values are rendered with pypdf's generic objects; the file layout (header, body, classic
cross-reference table, trailer) is laid out here.
"""

from __future__ import annotations

import contextlib
import io
from pathlib import Path
from typing import IO

from pypdf.generic import (
    ArrayObject,
    BooleanObject,
    ByteStringObject,
    DictionaryObject,
    FloatObject,
    IndirectObject,
    NameObject,
    NullObject,
    NumberObject,
    PdfObject,
    TextStringObject,
)

from pdfweaver.codec.errors import DocumentWriteError
from pdfweaver.graph.document import Graph
from pdfweaver.graph.objects import Name, ObjectId, PdfValue, Stream
from pdfweaver.logging import get_logger

logger = get_logger(__name__)

_BINARY_MARKER = b"%\xe2\xe3\xcf\xd3\n"


def to_pdf_object(value: PdfValue) -> PdfObject:
    """Convert a model value to a pypdf generic object."""

    if value is None:
        return NullObject()
    if isinstance(value, bool):
        return BooleanObject(value)
    if isinstance(value, ObjectId):
        return IndirectObject(value.number, value.generation, None)
    if isinstance(value, Name):
        return NameObject("/" + value)
    if isinstance(value, str):
        return TextStringObject(value)
    if isinstance(value, bytes):
        return ByteStringObject(value)
    if isinstance(value, int):
        return NumberObject(value)
    if isinstance(value, float):
        return FloatObject(value)
    if isinstance(value, dict):
        out = DictionaryObject()
        for key, v in value.items():
            out[NameObject("/" + key)] = to_pdf_object(v)
        return out
    if isinstance(value, list):
        return ArrayObject(to_pdf_object(v) for v in value)
    if isinstance(value, Stream):
        raise TypeError("streams must be indirect objects")
    raise TypeError(f"cannot serialize {type(value).__name__}")


def _write_object(out: IO[bytes], value: PdfValue) -> None:
    if isinstance(value, Stream):
        d = to_pdf_object(value.dictionary)
        d[NameObject("/Length")] = NumberObject(len(value.content))
        d.write_to_stream(out, None)
        out.write(b"\nstream\n")
        out.write(value.content)
        out.write(b"\nendstream")
    else:
        to_pdf_object(value).write_to_stream(out, None)


def serialize(graph: Graph) -> bytes:
    """Render ``graph`` as a complete PDF file."""

    out = io.BytesIO()
    out.write(f"%PDF-{graph.version}\n".encode("ascii"))
    out.write(_BINARY_MARKER)

    offsets: dict[int, tuple[int, int]] = {}
    for oid in sorted(graph.objects):
        offsets[oid.number] = (out.tell(), oid.generation)
        out.write(f"{oid.number} {oid.generation} obj\n".encode("ascii"))
        _write_object(out, graph.objects[oid])
        out.write(b"\nendobj\n")

    size = max([graph.max_id, *offsets]) + 1
    xref_offset = out.tell()
    out.write(f"xref\n0 {size}\n".encode("ascii"))
    out.write(b"0000000000 65535 f \n")
    for number in range(1, size):
        entry = offsets.get(number)
        if entry is None:
            out.write(b"0000000000 00000 f \n")
        else:
            out.write(f"{entry[0]:010d} {entry[1]:05d} n \n".encode("ascii"))

    trailer = {k: v for k, v in graph.trailer.items() if k != "Size"}
    trailer["Size"] = size
    out.write(b"trailer\n")
    to_pdf_object(trailer).write_to_stream(out, None)
    out.write(f"\nstartxref\n{xref_offset}\n%%EOF\n".encode("ascii"))
    return out.getvalue()


def save(graph: Graph, path: Path | str) -> Path:
    """Serialize ``graph`` to ``path``.

    The file is written to a sibling temporary file first and moved into place, so a failed
    write never leaves a partial document at ``path``.

    Raises:
        DocumentWriteError: If the file cannot be written.
    """

    path = Path(path)
    try:
        data = serialize(graph)
    except (TypeError, ValueError) as exc:
        raise DocumentWriteError(f"Failed to write output file {path}: {exc}", path=path) from exc

    tmp = path.with_name(path.name + ".part")
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        tmp.write_bytes(data)
        tmp.replace(path)
    except OSError as exc:
        with contextlib.suppress(OSError):
            tmp.unlink()
        raise DocumentWriteError(f"Failed to write output file {path}", path=path) from exc

    logger.debug("Wrote %s (%d bytes, %d objects)", path, len(data), len(graph.objects))
    return path

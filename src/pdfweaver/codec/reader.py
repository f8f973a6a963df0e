"""Document loading via pypdf.

pypdf parses the file and its cross-reference data; this module walks every in-use indirect
object and converts pypdf's generic objects into the in-memory model.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pypdf import PdfReader
from pypdf.errors import PyPdfError
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
    StreamObject,
    TextStringObject,
)

from pdfweaver.codec.errors import DocumentNotFoundError, MalformedDocumentError
from pdfweaver.graph.document import Graph
from pdfweaver.graph.objects import Name, ObjectId, PdfValue, Stream
from pdfweaver.logging import get_logger

logger = get_logger(__name__)

# Re-encoded on save as a classic xref table
_SKIPPED_TYPES = {"XRef", "ObjStm"}
_TRAILER_KEYS = ("Root", "Info", "ID")


def from_pdf_object(obj: Any) -> PdfValue:
    """Convert a pypdf generic object to a model value. References are not resolved."""

    if obj is None or isinstance(obj, NullObject):
        return None
    if isinstance(obj, IndirectObject):
        return ObjectId(obj.idnum, obj.generation)
    if isinstance(obj, BooleanObject):
        return bool(obj.value)
    if isinstance(obj, NameObject):
        return Name(str(obj)[1:])
    if isinstance(obj, TextStringObject):
        return bytes(obj.get_original_bytes())
    if isinstance(obj, ByteStringObject):
        return bytes(obj)
    if isinstance(obj, NumberObject):
        return int(obj)
    if isinstance(obj, FloatObject):
        return float(obj)
    if isinstance(obj, StreamObject):
        dictionary = _convert_dict(obj)
        # recomputed from the payload on save; may itself be an indirect reference
        dictionary.pop("Length", None)
        # raw encoded bytes (get_data() decodes them); _data is private, hence the pypdf pin
        return Stream(dictionary=dictionary, content=bytes(obj._data))
    if isinstance(obj, DictionaryObject):
        return _convert_dict(obj)
    if isinstance(obj, ArrayObject):
        return [from_pdf_object(v) for v in list.__iter__(obj)]
    raise MalformedDocumentError(f"Unsupported PDF object {type(obj).__name__}")


def _convert_dict(obj: DictionaryObject) -> dict[str, PdfValue]:
    # dict.items() keeps IndirectObject values unresolved
    return {str(k)[1:]: from_pdf_object(v) for k, v in dict.items(obj)}


def _in_use_ids(reader: PdfReader) -> list[tuple[int, int]]:
    ids: set[tuple[int, int]] = set()
    free = reader.xref_free_entry
    for generation, entries in reader.xref.items():
        for number in entries:
            if free.get(generation, {}).get(number):
                continue
            ids.add((number, generation))
    for number in reader.xref_objStm:
        ids.add((number, 0))
    return sorted(n for n in ids if n[0] > 0)


def _version(reader: PdfReader) -> str:
    header = reader.pdf_header or ""
    if header.startswith("%PDF-"):
        return header[len("%PDF-"):].strip() or "1.5"
    return "1.5"


def load(path: Path | str, *, strict: bool = False) -> Graph:
    """Parse the document at ``path`` into a :class:`Graph`.

    Raises:
        DocumentNotFoundError: If ``path`` does not exist or is not a file.
        MalformedDocumentError: If the file cannot be parsed or is encrypted.
    """

    path = Path(path)
    if not path.is_file():
        raise DocumentNotFoundError(f"File not found: {path}", path=path)

    try:
        reader = PdfReader(path, strict=strict)
        if reader.is_encrypted:
            raise MalformedDocumentError(f"Encrypted documents are not supported: {path}", path=path)

        graph = Graph(version=_version(reader), source=path)
        for number, generation in _in_use_ids(reader):
            obj = reader.get_object(IndirectObject(number, generation, reader))
            if obj is None or isinstance(obj, NullObject):
                logger.debug("%s: object %d %d could not be resolved", path, number, generation)
                continue
            value = from_pdf_object(obj)
            if isinstance(value, Stream) and value.dictionary.get("Type") in _SKIPPED_TYPES:
                continue
            graph.objects[ObjectId(number, generation)] = value

        trailer = from_pdf_object(reader.trailer)
        size = trailer.get("Size")
    except (PyPdfError, ValueError, KeyError, TypeError, IndexError) as exc:
        raise MalformedDocumentError(f"Malformed PDF {path}: {exc}", path=path) from exc
    except OSError as exc:
        raise DocumentNotFoundError(f"File not readable: {path}: {exc}", path=path) from exc

    graph.trailer = {k: trailer[k] for k in _TRAILER_KEYS if k in trailer}
    present = max((oid.number for oid in graph.objects), default=0)
    graph.max_id = size - 1 if isinstance(size, int) and size > 0 else present

    logger.debug("Loaded %s: %d objects, max id %d", path, len(graph.objects), graph.max_id)
    return graph

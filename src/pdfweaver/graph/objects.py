"""In-memory PDF object model.

Values are plain Python objects wherever possible:

- ``None``, ``bool``, ``int``, ``float`` map to their PDF counterparts.
- ``bytes`` is a PDF string (raw bytes, as stored in the file).
- :class:`Name` is a PDF name, stored without its leading slash.
- ``list`` is an array, ``dict`` (``str`` keys) is a dictionary.
- :class:`Stream` is a dictionary plus an opaque payload.
- :class:`ObjectId` used as a value is an indirect reference.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterator, Union


@dataclass(frozen=True, order=True)
class ObjectId:
    """Identifier of an indirect object: ``(number, generation)``."""

    number: int
    generation: int = 0

    def __str__(self) -> str:
        return f"{self.number} {self.generation} R"


class Name(str):
    """A PDF name such as ``/Type``."""

    def __repr__(self) -> str:
        return f"/{str.__str__(self)}"


@dataclass
class Stream:
    """A stream object: dictionary plus (possibly encoded) payload."""

    dictionary: dict[str, Any] = field(default_factory=dict)
    content: bytes = b""


PdfValue = Union[None, bool, int, float, bytes, str, Name, ObjectId, list, dict, Stream]


def as_dict(value: PdfValue) -> dict[str, Any] | None:
    """Return the dictionary part of a dictionary or stream value."""

    if isinstance(value, Stream):
        return value.dictionary
    if isinstance(value, dict):
        return value
    return None


def type_name(value: PdfValue) -> str | None:
    """Return the ``Type`` tag of a dictionary-like value, if it is a name."""

    d = as_dict(value)
    if d is None:
        return None
    tag = d.get("Type")
    if isinstance(tag, str):
        return str(tag)
    return None


def iter_references(value: PdfValue) -> Iterator[ObjectId]:
    """Yield every reference nested anywhere inside ``value``."""

    stack = [value]
    while stack:
        current = stack.pop()
        if isinstance(current, ObjectId):
            yield current
        elif isinstance(current, Stream):
            stack.extend(current.dictionary.values())
        elif isinstance(current, dict):
            stack.extend(current.values())
        elif isinstance(current, list):
            stack.extend(current)


def text_string(text: str) -> bytes:
    """Encode ``text`` as a PDF text string.

    ASCII-compatible text is stored as-is, anything else as UTF-16BE with a byte order mark.
    """

    try:
        return text.encode("latin-1")
    except UnicodeEncodeError:
        return b"\xfe\xff" + text.encode("utf-16-be")


def copy_value(value: PdfValue) -> PdfValue:
    """Deep-copy container values; scalars and identifiers are immutable."""

    if isinstance(value, Stream):
        return Stream(dictionary=copy_value(value.dictionary), content=value.content)
    if isinstance(value, dict):
        return {k: copy_value(v) for k, v in value.items()}
    if isinstance(value, list):
        return [copy_value(v) for v in value]
    return value

"""Size reduction for object graphs.

Unfiltered streams are Flate-encoded when that makes them smaller, and objects nothing
reaches from the trailer can be pruned. Both are reference-preserving and never add objects.
"""

from __future__ import annotations

from pypdf.filters import FlateDecode

from pdfweaver.graph.document import Graph
from pdfweaver.graph.objects import Name, ObjectId, PdfValue, Stream, copy_value
from pdfweaver.graph.renumber import compact
from pdfweaver.logging import get_logger

logger = get_logger(__name__)


def deflate_stream(stream: Stream, *, level: int = 6) -> Stream | None:
    """Return a Flate-encoded copy of ``stream``, or ``None`` when it would not shrink."""

    if "Filter" in stream.dictionary or not stream.content:
        return None
    encoded = FlateDecode.encode(stream.content, level)
    if len(encoded) >= len(stream.content):
        return None
    dictionary = copy_value(stream.dictionary)
    dictionary.pop("DecodeParms", None)
    dictionary["Filter"] = Name("FlateDecode")
    return Stream(dictionary=dictionary, content=encoded)


def compress(
    graph: Graph,
    *,
    level: int = 6,
    streams: bool = True,
    prune: bool = True,
) -> Graph:
    """Return a smaller, behaviourally equivalent copy of ``graph``.

    Args:
        graph: Source graph; left untouched.
        level: Flate compression level (0-9).
        streams: Flate-encode unfiltered streams.
        prune: Drop objects unreachable from the trailer and renumber densely.
    """

    objects: dict[ObjectId, PdfValue] = {}
    encoded = 0
    saved = 0
    # without a root everything would look unreachable
    keep = graph.reachable_ids() if prune and graph.catalog_id is not None else None
    for oid, value in graph.objects.items():
        if keep is not None and oid not in keep:
            continue
        if streams and isinstance(value, Stream):
            smaller = deflate_stream(value, level=level)
            if smaller is not None:
                saved += len(value.content) - len(smaller.content)
                encoded += 1
                value = smaller
        objects[oid] = value

    out = Graph(
        objects=objects,
        trailer=copy_value(graph.trailer),
        max_id=graph.max_id,
        version=graph.version,
        source=graph.source,
    )
    pruned = len(graph.objects) - len(objects)
    if pruned:
        compact(out)

    logger.info(
        "Compressed %d streams (%d bytes saved), pruned %d unreachable objects",
        encoded,
        saved,
        pruned,
    )
    return out

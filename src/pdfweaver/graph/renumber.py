"""Identifier space management.

Two operations share one reference-rewrite primitive:

- :func:`renumber` shifts every identifier by a constant offset, used to separate the
  identifier spaces of independently numbered inputs before they are combined.
- :func:`compact` reassigns identifiers to the dense range ``1..N`` in ascending order,
  used once after consolidation has decided which objects survive.
"""

from __future__ import annotations

from typing import Callable, Optional

from pdfweaver.graph.document import Graph
from pdfweaver.graph.objects import ObjectId, PdfValue, Stream
from pdfweaver.logging import get_logger

logger = get_logger(__name__)

Remap = Callable[[ObjectId], Optional[ObjectId]]


def rewrite_references(value: PdfValue, remap: Remap) -> PdfValue:
    """Return ``value`` with every nested reference passed through ``remap``.

    A reference for which ``remap`` returns ``None`` becomes ``null``.
    """

    if isinstance(value, ObjectId):
        return remap(value)
    if isinstance(value, Stream):
        return Stream(dictionary=rewrite_references(value.dictionary, remap), content=value.content)
    if isinstance(value, dict):
        return {k: rewrite_references(v, remap) for k, v in value.items()}
    if isinstance(value, list):
        return [rewrite_references(v, remap) for v in value]
    return value


def _apply(graph: Graph, remap: Remap) -> None:
    graph.objects = {remap(oid): rewrite_references(value, remap) for oid, value in graph.objects.items()}
    graph.trailer = rewrite_references(graph.trailer, remap)


def renumber(graph: Graph, offset: int) -> tuple[Graph, int]:
    """Shift every identifier of ``graph`` up by ``offset``, in place.

    References to absent objects are shifted too, so they stay unresolvable instead of
    landing on another input's objects. Generations are reset to 0.

    Returns:
        The graph and its new maximum identifier (declared maximum plus ``offset``).
    """

    def shift(oid: ObjectId) -> ObjectId:
        return ObjectId(oid.number + offset, 0)

    _apply(graph, shift)
    graph.max_id += offset
    return graph, graph.max_id


def compact(graph: Graph) -> dict[ObjectId, ObjectId]:
    """Renumber ``graph`` in place to the dense range ``1..len(graph)``.

    Ascending identifier order is preserved. References whose target is missing are
    replaced with ``null``.

    Returns:
        Mapping from old to new identifiers.
    """

    mapping = {oid: ObjectId(n, 0) for n, oid in enumerate(sorted(graph.objects), start=1)}
    dropped = 0

    def dense(oid: ObjectId) -> ObjectId | None:
        nonlocal dropped
        new = mapping.get(oid)
        if new is None:
            dropped += 1
        return new

    _apply(graph, dense)
    graph.max_id = len(mapping)
    if dropped:
        logger.debug("Compaction replaced %d dangling references with null", dropped)
    return mapping

"""Page tree traversal."""

from __future__ import annotations

from pdfweaver.graph.document import Graph
from pdfweaver.graph.objects import ObjectId, PdfValue, as_dict, type_name
from pdfweaver.logging import get_logger

logger = get_logger(__name__)


def pages_of(graph: Graph) -> list[tuple[ObjectId, PdfValue]]:
    """Enumerate page nodes reachable from the page-tree root, in document order.

    Intermediate nodes are recognised by ``Type /Pages`` or by carrying ``Kids``; any other
    dictionary reached through ``Kids`` is treated as a page. Each node is visited at most
    once, and ``Parent`` back-references are never followed.
    """

    catalog = graph.catalog()
    if catalog is None:
        return []
    root = catalog.get("Pages")
    if not isinstance(root, ObjectId):
        return []

    pages: list[tuple[ObjectId, PdfValue]] = []
    visited: set[ObjectId] = set()
    stack: list[ObjectId] = [root]
    while stack:
        oid = stack.pop()
        if oid in visited:
            logger.debug("Page tree revisits %s; skipping", oid)
            continue
        visited.add(oid)

        node = graph.get(oid)
        d = as_dict(node)
        if d is None:
            continue
        if type_name(node) == "Pages" or "Kids" in d:
            kids = d.get("Kids")
            if isinstance(kids, list):
                # reversed so the leftmost kid is popped first
                stack.extend(k for k in reversed(kids) if isinstance(k, ObjectId))
            continue
        pages.append((oid, node))
    return pages


def page_count(graph: Graph) -> int:
    return len(pages_of(graph))

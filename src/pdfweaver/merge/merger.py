"""Graph merge driver."""

from __future__ import annotations

from typing import Iterable

from pdfweaver.graph.document import Graph
from pdfweaver.logging import get_logger
from pdfweaver.merge.assembler import MergeResult, assemble
from pdfweaver.merge.consolidate import consolidate
from pdfweaver.merge.state import MergeAccumulator
from pdfweaver.models.bookmark import BLUE

logger = get_logger(__name__)


def merge_graphs(
    graphs: Iterable[Graph],
    *,
    label_template: str = "Page_{n}",
    color: tuple[float, float, float] = BLUE,
    version: str = "1.5",
) -> MergeResult:
    """Merge input graphs, in the given order, into one composite graph.

    Inputs are renumbered in place and must not be reused afterwards.

    Args:
        graphs: Input graphs in the order their pages should appear.
        label_template: Bookmark label; ``{n}`` is the 1-based number of the input among
            inputs that have pages.
        color: Bookmark RGB color.
        version: PDF version recorded on the composite.

    Returns:
        A :class:`MergeResult`. When no catalog or page-tree root exists across all inputs
        the outcome says so and no graph is attached.
    """

    acc = MergeAccumulator(label_template=label_template, color=color)
    for graph in graphs:
        acc.absorb(graph)

    logger.info("Collected %s", acc.snapshot())
    consolidation = consolidate(acc.objects)
    return assemble(acc, consolidation, version=version)

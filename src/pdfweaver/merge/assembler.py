"""Composite graph assembly.

Runs after every input has been absorbed and consolidated: re-parents pages under the single
page-tree root, finalizes the catalog, compacts identifiers and materializes bookmarks.
"""

from __future__ import annotations

from dataclasses import dataclass

from pdfweaver.graph.document import Graph
from pdfweaver.graph.objects import ObjectId, as_dict, copy_value
from pdfweaver.graph.renumber import compact
from pdfweaver.logging import get_logger
from pdfweaver.merge.consolidate import Consolidation
from pdfweaver.merge.state import MergeAccumulator
from pdfweaver.models.summary import MergeOutcome, MergeSummary

logger = get_logger(__name__)


@dataclass
class MergeResult:
    """Merge outcome plus the composite graph when one was produced."""

    outcome: MergeOutcome
    summary: MergeSummary
    graph: Graph | None = None

    @property
    def ok(self) -> bool:
        return self.outcome is MergeOutcome.MERGED


def assemble(acc: MergeAccumulator, consolidation: Consolidation, *, version: str = "1.5") -> MergeResult:
    """Build the composite graph from consolidated objects and collected pages."""

    summary = MergeSummary(documents=acc.documents, pages=len(acc.pages))
    objects = consolidation.objects

    if consolidation.page_tree is None:
        summary.message = "Pages root not found."
        logger.warning(summary.message)
        return MergeResult(MergeOutcome.NO_PAGE_TREE, summary)

    pages_id = consolidation.page_tree.object_id
    kids: list[ObjectId] = []
    for oid, page in acc.pages:
        page = copy_value(page)
        as_dict(page)["Parent"] = pages_id
        objects[oid] = page
        kids.append(oid)

    if consolidation.catalog is None:
        summary.message = "Catalog root not found."
        logger.warning(summary.message)
        return MergeResult(MergeOutcome.NO_CATALOG, summary)

    page_tree = dict(consolidation.page_tree.value)
    page_tree["Count"] = len(kids)
    page_tree["Kids"] = list(kids)
    # intermediate nodes folded into the root bring their Parent along; the root has none
    page_tree.pop("Parent", None)
    objects[pages_id] = page_tree

    catalog_id = consolidation.catalog.object_id
    catalog = copy_value(consolidation.catalog.value)
    catalog_dict = as_dict(catalog)
    if catalog_dict is not None:
        catalog_dict["Pages"] = pages_id
        catalog_dict.pop("Outlines", None)
    objects[catalog_id] = catalog

    graph = Graph(objects=objects, trailer={"Root": catalog_id}, version=version)
    # coarse bound; compaction below makes it exact
    graph.max_id = len(objects)
    mapping = compact(graph)

    forest = acc.forest
    forest.remap_targets(mapping)
    valid_pages = {mapping[oid] for oid in kids}
    dropped = forest.resolve_targets(valid_pages.__contains__)
    if dropped:
        logger.info("Dropped %d bookmarks without a valid target page", dropped)

    outlines_id = forest.materialize(graph)
    new_catalog = graph.get_dict(mapping[catalog_id])
    if outlines_id is not None and new_catalog is not None:
        new_catalog["Outlines"] = outlines_id

    summary.pages = len(kids)
    summary.bookmarks = len(forest)
    summary.objects = len(graph)
    return MergeResult(MergeOutcome.MERGED, summary, graph)

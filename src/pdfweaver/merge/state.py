from __future__ import annotations

from dataclasses import dataclass, field

from pdfweaver.graph.document import Graph
from pdfweaver.graph.objects import ObjectId, PdfValue
from pdfweaver.graph.pages import pages_of
from pdfweaver.graph.renumber import renumber
from pdfweaver.logging import get_logger
from pdfweaver.merge.bookmarks import BookmarkForest
from pdfweaver.models.bookmark import BLUE, Bookmark

logger = get_logger(__name__)


@dataclass
class MergeAccumulator:
    """State carried across the sequential fold over input graphs."""

    label_template: str = "Page_{n}"
    color: tuple[float, float, float] = BLUE

    next_offset: int = 0
    documents: int = 0
    bookmark_number: int = 1
    pages: list[tuple[ObjectId, PdfValue]] = field(default_factory=list)
    objects: dict[ObjectId, PdfValue] = field(default_factory=dict)
    forest: BookmarkForest = field(default_factory=BookmarkForest)

    def absorb(self, graph: Graph) -> None:
        """Fold one input graph into the accumulator.

        The graph is renumbered in place into the composite identifier space, its pages are
        collected, its first page gets a bookmark, and its objects join the composite set.
        """

        _, max_id = renumber(graph, self.next_offset)
        self.next_offset = max_id + 1
        self.documents += 1

        pages = pages_of(graph)
        if pages:
            first_id = pages[0][0]
            title = self.label_template.format(n=self.bookmark_number)
            self.forest.add(Bookmark(title=title, color=self.color, page=first_id))
            self.bookmark_number += 1
        else:
            logger.info("Input %s has no pages; no bookmark created", graph.source or self.documents)

        self.pages.extend(pages)
        self.objects.update(graph.objects)
        logger.debug(
            "Absorbed input #%d: %d objects, %d pages, next offset %d",
            self.documents,
            len(graph.objects),
            len(pages),
            self.next_offset,
        )

    def snapshot(self) -> dict[str, int]:
        return {
            "documents": self.documents,
            "pages": len(self.pages),
            "bookmarks": len(self.forest),
            "objects": len(self.objects),
            "next_offset": self.next_offset,
        }

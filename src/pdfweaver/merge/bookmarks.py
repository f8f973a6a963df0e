"""Bookmark forest.

Bookmarks are collected while inputs are folded into the composite, then written into the
graph as linked outline items under a fresh ``/Outlines`` root.
"""

from __future__ import annotations

from typing import Callable, Iterator, Mapping

from pdfweaver.graph.document import Graph
from pdfweaver.graph.objects import Name, ObjectId, text_string
from pdfweaver.logging import get_logger
from pdfweaver.models.bookmark import Bookmark

logger = get_logger(__name__)


class BookmarkForest:
    """Ordered forest of bookmarks addressed by forest-local integer ids."""

    def __init__(self) -> None:
        self._roots: list[Bookmark] = []
        self._by_id: dict[int, Bookmark] = {}
        self._next_id = 1

    def __len__(self) -> int:
        return len(self._by_id)

    def __bool__(self) -> bool:
        return bool(self._roots)

    @property
    def roots(self) -> list[Bookmark]:
        return list(self._roots)

    def add(self, bookmark: Bookmark, parent: int | None = None) -> int:
        """Append ``bookmark`` at top level or as the last child of ``parent``.

        Returns:
            The id assigned to the bookmark.

        Raises:
            KeyError: If ``parent`` is not a known bookmark id.
        """

        bookmark.id = self._next_id
        self._next_id += 1
        if parent is None:
            bookmark.level = 0
            self._roots.append(bookmark)
        else:
            owner = self._by_id[parent]
            bookmark.level = owner.level + 1
            owner.children.append(bookmark)
        self._by_id[bookmark.id] = bookmark
        return bookmark.id

    def get(self, bookmark_id: int) -> Bookmark:
        return self._by_id[bookmark_id]

    def walk(self) -> Iterator[Bookmark]:
        """Depth-first, pre-order traversal."""

        stack = list(reversed(self._roots))
        while stack:
            bm = stack.pop()
            yield bm
            stack.extend(reversed(bm.children))

    def remap_targets(self, mapping: Mapping[ObjectId, ObjectId]) -> None:
        """Translate page targets through an identifier mapping; unmapped targets become ``None``."""

        for bm in self.walk():
            if bm.page is not None:
                bm.page = mapping.get(bm.page)

    def resolve_targets(self, is_valid: Callable[[ObjectId], bool]) -> int:
        """Redirect or drop bookmarks whose target is not a valid page.

        An invalid target takes the next sibling's (resolved) target, else the parent's,
        else the bookmark is removed together with its subtree.

        Returns:
            Number of bookmarks removed.
        """

        removed = self._resolve_level(self._roots, None, is_valid)
        if removed:
            self._by_id = {bm.id: bm for bm in self.walk()}
        return removed

    def _resolve_level(
        self,
        siblings: list[Bookmark],
        parent_target: ObjectId | None,
        is_valid: Callable[[ObjectId], bool],
    ) -> int:
        removed = 0
        kept: list[Bookmark] = []
        next_target: ObjectId | None = None
        for bm in reversed(siblings):
            if bm.page is None or not is_valid(bm.page):
                fallback = next_target or parent_target
                if fallback is None:
                    logger.debug("Dropping bookmark %r: no valid page to point at", bm.title)
                    removed += 1 + sum(1 for _ in _descendants(bm))
                    continue
                logger.debug("Redirecting bookmark %r to %s", bm.title, fallback)
                bm.page = fallback
            next_target = bm.page
            kept.append(bm)
        kept.reverse()
        siblings[:] = kept

        for bm in kept:
            removed += self._resolve_level(bm.children, bm.page, is_valid)
        return removed

    def materialize(self, graph: Graph) -> ObjectId | None:
        """Write the forest into ``graph`` as outline items.

        Returns:
            Identifier of the new ``/Outlines`` root, or ``None`` when the forest is empty.
        """

        if not self._roots:
            return None

        outlines_id = graph.new_object_id()
        first, last, count = self._materialize_level(graph, outlines_id, self._roots)
        graph.objects[outlines_id] = {
            "Type": Name("Outlines"),
            "First": first,
            "Last": last,
            "Count": count,
        }
        return outlines_id

    def _materialize_level(
        self, graph: Graph, parent: ObjectId, siblings: list[Bookmark]
    ) -> tuple[ObjectId, ObjectId, int]:
        ids = [graph.new_object_id() for _ in siblings]
        count = len(siblings)
        for i, (oid, bm) in enumerate(zip(ids, siblings)):
            item: dict = {
                "Title": text_string(bm.title),
                "Parent": parent,
                "Dest": [bm.page, Name("Fit")],
                "C": [float(c) for c in bm.color],
                "F": bm.style,
            }
            if i > 0:
                item["Prev"] = ids[i - 1]
            if i < len(ids) - 1:
                item["Next"] = ids[i + 1]
            if bm.children:
                first, last, sub = self._materialize_level(graph, oid, bm.children)
                item["First"] = first
                item["Last"] = last
                item["Count"] = sub
                count += sub
            graph.objects[oid] = item
        return ids[0], ids[-1], count


def _descendants(bm: Bookmark) -> Iterator[Bookmark]:
    for child in bm.children:
        yield child
        yield from _descendants(child)

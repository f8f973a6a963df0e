"""Object graph of a single document."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator

from pdfweaver.graph.objects import ObjectId, PdfValue, as_dict, iter_references


@dataclass
class Graph:
    """A document: identifier-to-object mapping plus trailer.

    ``max_id`` is the declared maximum object number. It is only a counter for
    :meth:`new_object_id` and is not guaranteed to be tight.
    """

    objects: dict[ObjectId, PdfValue] = field(default_factory=dict)
    trailer: dict[str, PdfValue] = field(default_factory=dict)
    max_id: int = 0
    version: str = "1.5"
    source: Path | None = None

    def __len__(self) -> int:
        return len(self.objects)

    def new_object_id(self) -> ObjectId:
        """Reserve the next free identifier."""

        self.max_id += 1
        return ObjectId(self.max_id, 0)

    def add_object(self, value: PdfValue) -> ObjectId:
        """Insert ``value`` under a fresh identifier and return it."""

        oid = self.new_object_id()
        self.objects[oid] = value
        return oid

    def get(self, oid: ObjectId) -> PdfValue:
        return self.objects.get(oid)

    def get_dict(self, oid: ObjectId) -> dict | None:
        """Return the dictionary stored under ``oid``, or ``None``."""

        return as_dict(self.objects.get(oid))

    @property
    def catalog_id(self) -> ObjectId | None:
        root = self.trailer.get("Root")
        return root if isinstance(root, ObjectId) else None

    def catalog(self) -> dict | None:
        oid = self.catalog_id
        if oid is None:
            return None
        return self.get_dict(oid)

    def iter_references(self) -> Iterator[tuple[ObjectId | None, ObjectId]]:
        """Yield ``(holder, target)`` for every reference; holder ``None`` is the trailer."""

        for target in iter_references(self.trailer):
            yield None, target
        for oid, value in self.objects.items():
            for target in iter_references(value):
                yield oid, target

    def dangling_references(self) -> list[tuple[ObjectId | None, ObjectId]]:
        """List references whose target is not present in the graph."""

        return [(holder, target) for holder, target in self.iter_references() if target not in self.objects]

    def reachable_ids(self) -> set[ObjectId]:
        """Identifiers reachable from the trailer."""

        seen: set[ObjectId] = set()
        stack = list(iter_references(self.trailer))
        while stack:
            oid = stack.pop()
            if oid in seen or oid not in self.objects:
                continue
            seen.add(oid)
            stack.extend(iter_references(self.objects[oid]))
        return seen

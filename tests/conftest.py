"""Shared fixtures: small in-memory documents."""

from __future__ import annotations

from pathlib import Path
from typing import Callable

import pytest

from pdfweaver.codec import save
from pdfweaver.graph import Graph, Name, ObjectId, Stream


def build_document(
    label: str = "A",
    pages: int = 2,
    *,
    page_tree: bool = True,
    catalog_type: bool = True,
    outlines: bool = False,
    page_tree_fields: dict | None = None,
    catalog_fields: dict | None = None,
) -> Graph:
    """Build a document numbered from 1, the way a freshly loaded file looks.

    Each page has a content stream reading ``<label> page <n>`` so tests can tell pages apart.
    """

    graph = Graph()
    catalog_id = graph.new_object_id()
    catalog: dict = {}
    if catalog_type:
        catalog["Type"] = Name("Catalog")
    catalog.update(catalog_fields or {})
    graph.objects[catalog_id] = catalog
    graph.trailer["Root"] = catalog_id

    if page_tree:
        pages_id = graph.new_object_id()
        kids: list[ObjectId] = []
        for n in range(1, pages + 1):
            content_id = graph.add_object(Stream(content=f"{label} page {n}".encode()))
            page_id = graph.add_object(
                {
                    "Type": Name("Page"),
                    "Parent": pages_id,
                    "MediaBox": [0, 0, 612, 792],
                    "Contents": content_id,
                }
            )
            kids.append(page_id)
        pages_dict = {"Type": Name("Pages"), "Kids": kids, "Count": len(kids)}
        pages_dict.update(page_tree_fields or {})
        graph.objects[pages_id] = pages_dict
        catalog["Pages"] = pages_id

    if outlines:
        outlines_id = graph.new_object_id()
        item_id = graph.new_object_id()
        graph.objects[outlines_id] = {"Type": Name("Outlines"), "First": item_id, "Last": item_id, "Count": 1}
        graph.objects[item_id] = {"Type": Name("Outline"), "Title": b"Old", "Parent": outlines_id}
        catalog["Outlines"] = outlines_id

    info_id = graph.add_object({"Producer": f"builder {label}".encode()})
    graph.trailer["Info"] = info_id
    return graph


def page_label(graph: Graph, page_id: ObjectId) -> str:
    """Return the text of a page built by :func:`build_document`."""

    page = graph.get(page_id)
    return graph.get(page["Contents"]).content.decode()


@pytest.fixture
def make_document() -> Callable[..., Graph]:
    return build_document


@pytest.fixture
def labels() -> Callable[[Graph, ObjectId], str]:
    return page_label


@pytest.fixture
def write_pdf(tmp_path: Path) -> Callable[..., Path]:
    """Save a built document under ``tmp_path`` and return its path."""

    def _write(name: str, pages: int = 2, **kwargs) -> Path:
        return save(build_document(name, pages, **kwargs), tmp_path / f"{name}.pdf")

    return _write

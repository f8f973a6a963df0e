"""Object graph model, identifier space management and page tree traversal."""

from __future__ import annotations

from pdfweaver.graph.document import Graph
from pdfweaver.graph.objects import (
    Name,
    ObjectId,
    PdfValue,
    Stream,
    as_dict,
    copy_value,
    iter_references,
    text_string,
    type_name,
)
from pdfweaver.graph.pages import page_count, pages_of
from pdfweaver.graph.renumber import compact, renumber, rewrite_references

__all__ = [
    "Graph",
    "Name",
    "ObjectId",
    "PdfValue",
    "Stream",
    "as_dict",
    "compact",
    "copy_value",
    "iter_references",
    "page_count",
    "pages_of",
    "renumber",
    "rewrite_references",
    "text_string",
    "type_name",
]

"""Merging of independently numbered object graphs into one composite document."""

from __future__ import annotations

from pdfweaver.merge.assembler import MergeResult, assemble
from pdfweaver.merge.bookmarks import BookmarkForest
from pdfweaver.merge.consolidate import (
    Consolidation,
    ObjectRole,
    RootCandidate,
    classify,
    consolidate,
    keep_first_id_last_content,
    merge_fields_first_wins,
)
from pdfweaver.merge.merger import merge_graphs
from pdfweaver.merge.state import MergeAccumulator

__all__ = [
    "BookmarkForest",
    "Consolidation",
    "MergeAccumulator",
    "MergeResult",
    "ObjectRole",
    "RootCandidate",
    "assemble",
    "classify",
    "consolidate",
    "keep_first_id_last_content",
    "merge_fields_first_wins",
    "merge_graphs",
]

"""Pydantic models used across the project."""

from __future__ import annotations

from pdfweaver.models.bookmark import Bookmark
from pdfweaver.models.summary import MergeOutcome, MergeSummary

__all__ = [
    "Bookmark",
    "MergeOutcome",
    "MergeSummary",
]

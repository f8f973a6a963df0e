"""Merge outcome models."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field


class MergeOutcome(str, Enum):
    """How a merge ended."""

    MERGED = "merged"
    NO_PAGE_TREE = "no_page_tree"
    NO_CATALOG = "no_catalog"


class MergeSummary(BaseModel):
    """Counters reported after a merge."""

    documents: int = Field(default=0, ge=0)
    pages: int = Field(default=0, ge=0)
    bookmarks: int = Field(default=0, ge=0)
    objects: int = Field(default=0, ge=0)
    message: str | None = None

"""Bookmark models."""

from __future__ import annotations

from pydantic import BaseModel, Field

from pdfweaver.graph.objects import ObjectId

BLUE: tuple[float, float, float] = (0.0, 0.0, 1.0)


class Bookmark(BaseModel):
    """A navigation entry pointing at a page.

    Bookmarks only live during a merge; they become outline items when the forest is
    materialized into the composite graph. ``page`` may be ``None`` (or stale) until target
    resolution redirects or drops the bookmark.
    """

    title: str
    color: tuple[float, float, float] = BLUE
    style: int = Field(default=0, ge=0, le=3)
    level: int = Field(default=0, ge=0)
    page: ObjectId | None = None

    id: int = 0
    children: list["Bookmark"] = Field(default_factory=list)

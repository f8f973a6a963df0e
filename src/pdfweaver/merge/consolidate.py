"""Root consolidation.

Every input contributes its own catalog and page-tree root. Consolidation folds the
accumulated objects in ascending identifier order (input order, then intra-input order) and
keeps exactly one of each. The two roles deliberately use opposite tie-breaks; see
:func:`keep_first_id_last_content` and :func:`merge_fields_first_wins`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Mapping, NamedTuple, Optional

from pdfweaver.graph.objects import ObjectId, PdfValue, as_dict, copy_value, type_name
from pdfweaver.logging import get_logger

logger = get_logger(__name__)


class ObjectRole(str, Enum):
    """Role of an object during consolidation, derived from its ``Type`` tag."""

    CATALOG = "catalog"
    PAGE_TREE = "page_tree"
    PAGE = "page"
    OUTLINES = "outlines"
    OUTLINE_ITEM = "outline_item"
    OPAQUE = "opaque"


_ROLES_BY_TYPE = {
    "Catalog": ObjectRole.CATALOG,
    "Pages": ObjectRole.PAGE_TREE,
    "Page": ObjectRole.PAGE,
    "Outlines": ObjectRole.OUTLINES,
    "Outline": ObjectRole.OUTLINE_ITEM,
}


def classify(value: PdfValue) -> ObjectRole:
    """Classify a value; untagged or unknown values are opaque and pass through verbatim."""

    return _ROLES_BY_TYPE.get(type_name(value) or "", ObjectRole.OPAQUE)


class RootCandidate(NamedTuple):
    """Identifier and content retained so far for one root role."""

    object_id: ObjectId
    value: PdfValue


Policy = Callable[[Optional[RootCandidate], ObjectId, PdfValue], Optional[RootCandidate]]


def keep_first_id_last_content(
    current: RootCandidate | None, oid: ObjectId, value: PdfValue
) -> RootCandidate:
    """Catalog policy: identity of the first catalog, content of the last one."""

    object_id = current.object_id if current is not None else oid
    return RootCandidate(object_id, copy_value(value))


def merge_fields_first_wins(
    current: RootCandidate | None, oid: ObjectId, value: PdfValue
) -> RootCandidate | None:
    """Page-tree policy: identity of the first node, union of fields where earlier nodes win.

    Non-dictionary values are ignored.
    """

    incoming = as_dict(value)
    if incoming is None:
        return current
    if current is None:
        return RootCandidate(oid, copy_value(dict(incoming)))

    merged = dict(current.value)
    for key, v in incoming.items():
        if key not in merged:
            merged[key] = copy_value(v)
    return RootCandidate(current.object_id, merged)


@dataclass
class Consolidation:
    """Outcome of the consolidation fold."""

    catalog: RootCandidate | None = None
    page_tree: RootCandidate | None = None
    objects: dict[ObjectId, PdfValue] = field(default_factory=dict)
    dropped: int = 0


def consolidate(
    objects: Mapping[ObjectId, PdfValue],
    *,
    catalog_policy: Policy = keep_first_id_last_content,
    page_tree_policy: Policy = merge_fields_first_wins,
) -> Consolidation:
    """Fold ``objects`` in ascending identifier order into a :class:`Consolidation`.

    Pages are skipped (the assembler re-inserts them), outline roots and items are dropped,
    everything else is carried over unchanged.
    """

    result = Consolidation()
    for oid in sorted(objects):
        value = objects[oid]
        role = classify(value)
        if role is ObjectRole.CATALOG:
            result.catalog = catalog_policy(result.catalog, oid, value)
        elif role is ObjectRole.PAGE_TREE:
            result.page_tree = page_tree_policy(result.page_tree, oid, value)
        elif role is ObjectRole.PAGE:
            continue
        elif role in (ObjectRole.OUTLINES, ObjectRole.OUTLINE_ITEM):
            result.dropped += 1
        else:
            result.objects[oid] = value

    logger.debug(
        "Consolidated %d objects: catalog=%s page_tree=%s dropped=%d",
        len(objects),
        result.catalog.object_id if result.catalog else None,
        result.page_tree.object_id if result.page_tree else None,
        result.dropped,
    )
    return result

"""Tests for root consolidation."""

from __future__ import annotations

from pdfweaver.graph import Name, ObjectId, Stream
from pdfweaver.merge import (
    ObjectRole,
    RootCandidate,
    classify,
    consolidate,
    keep_first_id_last_content,
    merge_fields_first_wins,
)


def test_classify_by_type_tag() -> None:
    assert classify({"Type": Name("Catalog")}) is ObjectRole.CATALOG
    assert classify({"Type": Name("Pages")}) is ObjectRole.PAGE_TREE
    assert classify({"Type": Name("Page")}) is ObjectRole.PAGE
    assert classify({"Type": Name("Outlines")}) is ObjectRole.OUTLINES
    assert classify({"Type": Name("Outline")}) is ObjectRole.OUTLINE_ITEM
    assert classify({"Type": Name("Font")}) is ObjectRole.OPAQUE
    assert classify({"NoType": 1}) is ObjectRole.OPAQUE
    assert classify(Stream()) is ObjectRole.OPAQUE
    assert classify(42) is ObjectRole.OPAQUE


def test_catalog_policy_keeps_first_id_and_last_content() -> None:
    first = keep_first_id_last_content(None, ObjectId(1), {"Lang": b"en"})
    second = keep_first_id_last_content(first, ObjectId(9), {"Lang": b"de"})
    assert second == RootCandidate(ObjectId(1), {"Lang": b"de"})


def test_page_tree_policy_merges_first_wins() -> None:
    first = merge_fields_first_wins(None, ObjectId(2), {"MediaBox": [0, 0, 1, 1], "Rotate": 0})
    second = merge_fields_first_wins(first, ObjectId(8), {"MediaBox": [0, 0, 9, 9], "CropBox": [0, 0, 5, 5]})
    assert second.object_id == ObjectId(2)
    assert second.value == {"MediaBox": [0, 0, 1, 1], "Rotate": 0, "CropBox": [0, 0, 5, 5]}
    assert merge_fields_first_wins(second, ObjectId(9), [1, 2]) is second


def test_consolidate_folds_in_identifier_order() -> None:
    """It should fold in ascending id order whatever the mapping's insertion order."""

    objects = {
        ObjectId(12): {"Type": Name("Catalog"), "Marker": b"second"},
        ObjectId(13): {"Type": Name("Pages"), "Rotate": 90, "Resources": ObjectId(5)},
        ObjectId(1): {"Type": Name("Catalog"), "Marker": b"first"},
        ObjectId(2): {"Type": Name("Pages"), "Rotate": 0},
        ObjectId(3): {"Type": Name("Page")},
        ObjectId(4): {"Type": Name("Outlines")},
        ObjectId(5): {"Font": ObjectId(6)},
        ObjectId(6): {"Type": Name("Outline")},
    }
    result = consolidate(objects)

    assert result.catalog == RootCandidate(ObjectId(1), {"Type": Name("Catalog"), "Marker": b"second"})
    assert result.page_tree.object_id == ObjectId(2)
    assert result.page_tree.value["Rotate"] == 0
    assert result.page_tree.value["Resources"] == ObjectId(5)
    assert set(result.objects) == {ObjectId(5)}
    assert result.dropped == 2


def test_consolidate_reports_missing_roots() -> None:
    result = consolidate({ObjectId(1): {"Type": Name("Font")}})
    assert result.catalog is None
    assert result.page_tree is None
    assert list(result.objects) == [ObjectId(1)]

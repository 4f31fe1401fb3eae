"""Techpack Store: snapshot ownership and revision tracking."""

import pytest

from engine.techpack.seed import seed_document
from engine.techpack.store import DocumentStore
from engine.techpack.types import OrderQuantity, SetField, TechpackDocument


class TestDocumentStore:
    def test_starts_from_seed(self):
        store = DocumentStore()
        assert store.snapshot == seed_document()
        assert store.revision == 0

    def test_accepts_explicit_document(self):
        doc = TechpackDocument(brand="nova")
        store = DocumentStore(doc)
        assert store.snapshot is doc

    def test_dispatch_swaps_snapshot(self):
        store = DocumentStore()
        before = store.snapshot
        result = store.dispatch(SetField(key="category", value="MEN"))
        assert result.accepted
        assert store.snapshot is result.document
        assert store.snapshot.category == "MEN"
        assert before.category == "WOMEN"
        assert store.revision == 1

    def test_rejection_keeps_snapshot(self):
        store = DocumentStore()
        before = store.snapshot
        result = store.set_field("nope", "x")
        assert not result.accepted
        assert store.snapshot is before
        assert store.revision == 0

    def test_noop_does_not_bump_revision(self):
        store = DocumentStore()
        result = store.set_color_code(0, "id", "7")
        assert result.accepted
        assert store.revision == 0

    def test_convenience_methods(self):
        store = DocumentStore()
        store.set_row_field("measurements", 0, "description", "Waist")
        store.set_row_size("order_quantities", 0, "3XL", "60")
        store.set_color_code(2, "code", "18-1664 TCX")

        snap = store.snapshot
        assert snap.measurements[0].description == "Waist"
        assert snap.order_quantities[0].total == 1500
        assert snap.color_codes[2].code == "18-1664 TCX"
        assert store.revision == 3

    def test_snapshot_sizes_are_read_only(self):
        store = DocumentStore()
        row = store.snapshot.order_quantities[0]

        with pytest.raises(TypeError):
            row.sizes["XS"] = 1

        assert row.sizes["XS"] == 240
        assert row.total == 1440

    def test_sizes_copied_from_caller_mapping(self):
        sizes = {"S": 5}
        row = OrderQuantity(colorway="Z", sizes=sizes, total=5)
        sizes["S"] = 99

        assert row.sizes["S"] == 5
        assert row.to_dict()["sizes"] == {"S": 5}

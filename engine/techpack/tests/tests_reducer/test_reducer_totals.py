"""
Techpack Reducer: Derived Total Tests

The order row `total` is recomputed on every size edit of that row and on
nothing else. Unparseable or empty cells count as zero.
"""

import pytest

from engine.techpack.reducer import grand_total, parse_quantity, reduce, reduce_all, row_total
from engine.techpack.seed import seed_document
from engine.techpack.types import SetRowField, SetRowSize, TechpackDocument


@pytest.fixture
def doc():
    return seed_document()


class TestParseQuantity:
    @pytest.mark.parametrize(
        "value, expected",
        [
            (240, 240),
            ("60", 60),
            (" 12 ", 12),
            ("2.5", 2.5),
            ("", 0),
            (None, 0),
            ("abc", 0),
            ("nan", 0),
            ("inf", 0),
            (True, 0),
        ],
    )
    def test_values(self, value, expected):
        assert parse_quantity(value) == expected


class TestRowTotal:
    def test_mixed_values(self):
        assert row_total({"S": 10, "M": "5", "L": "", "XL": "x"}) == 15

    def test_fractions_coerced_to_int(self):
        assert row_total({"S": "1.5", "M": "1.2"}) == 2

    def test_empty(self):
        assert row_total({}) == 0


class TestOrderTotals:
    def test_seed_total(self, doc):
        assert doc.order_quantities[0].total == 1440
        assert all(row.total == 0 for row in doc.order_quantities[1:])

    def test_size_update_recomputes(self, doc):
        result = reduce(doc, SetRowSize(collection="order_quantities", index=0, size="3XL", value="60"))
        assert result.accepted
        assert result.document.order_quantities[0].total == 1500

    def test_invalid_entry_counts_as_zero(self, doc):
        result = reduce(doc, SetRowSize(collection="order_quantities", index=0, size="XS", value="lots"))
        assert result.document.order_quantities[0].total == 1200

    def test_empty_entry_counts_as_zero(self, doc):
        result = reduce(doc, SetRowSize(collection="order_quantities", index=0, size="S", value=""))
        assert result.document.order_quantities[0].total == 1200

    def test_new_key_included(self, doc):
        result = reduce(doc, SetRowSize(collection="order_quantities", index=1, size="4XL", value="7"))
        assert result.document.order_quantities[1].total == 7

    def test_other_rows_untouched(self, doc):
        result = reduce(doc, SetRowSize(collection="order_quantities", index=2, size="M", value="30"))
        new = result.document
        assert new.order_quantities[2].total == 30
        assert new.order_quantities[0] is doc.order_quantities[0]
        assert new.order_quantities[3] is doc.order_quantities[3]

    def test_colorway_edit_does_not_recompute(self, doc):
        loaded = TechpackDocument.from_dict(
            {**doc.to_dict(), "order_quantities": [{"colorway": "A", "sizes": {"S": 5}, "total": 99}]}
        )
        renamed = reduce(loaded, SetRowField(collection="order_quantities", index=0, field="colorway", value="B"))
        assert renamed.document.order_quantities[0].total == 99

        resized = reduce(renamed.document, SetRowSize(collection="order_quantities", index=0, size="M", value="1"))
        assert resized.document.order_quantities[0].total == 6

    def test_assorti_has_no_total(self, doc):
        result = reduce(doc, SetRowSize(collection="assorti_pack", index=0, size="S", value="9"))
        assert not hasattr(result.document.assorti_pack[0], "total")

    def test_total_always_matches_sizes(self, doc):
        values = ["1", "", "x", "12", "3.9", "-4", " 8 ", "0"]
        sizes = ["XS", "S", "M", "L", "XL", "2XL", "3XL"]
        actions = [
            SetRowSize(collection="order_quantities", index=i % 4, size=sizes[i % 7], value=values[i % 8])
            for i in range(60)
        ]
        snapshot = doc
        for action in actions:
            snapshot = reduce(snapshot, action).document
            for row in snapshot.order_quantities:
                assert row.total == row_total(row.sizes)


class TestGrandTotal:
    def test_seed(self, doc):
        assert grand_total(doc) == 1440

    def test_tracks_row_totals(self, doc):
        final = reduce_all(
            doc,
            [
                SetRowSize(collection="order_quantities", index=1, size="M", value="100"),
                SetRowSize(collection="order_quantities", index=3, size="L", value="25"),
                SetRowSize(collection="order_quantities", index=0, size="3XL", value="60"),
            ],
        )
        assert grand_total(final) == 1500 + 100 + 25
        assert grand_total(final) == sum(row.total for row in final.order_quantities)

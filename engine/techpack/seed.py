"""Literal values the techpack starts from when the editor launches."""

from __future__ import annotations

from engine.techpack.types import (
    AssortiPackRow,
    ColorCode,
    Measurement,
    OrderQuantity,
    TechpackDocument,
)

MEASUREMENT_POINTS = 17

SEWING_MAPS_TEMPLATE = """Style: Slim Fit Jogger – Elastic Waist & Cuffs – Welt Back Pocket - Drawcord
Category: Women
Fabric: Knit – Fleece / Ponte (final fabric to be confirmed)
Sizes: XXS-5XL

Key Features:
Elastic waistband with functional drawcord
Front functional pockets
Single welt pocket at back
Rib cuffs at ankle
Clean silhouette, soft hand feel

Manufacturing Overview (Short)
Standard jogger assembly (front + back + waistband + cuffs)
Waistband includes inside elastic + drawcord exit holes
Welt pocket on back (decorative or functional depending on order)
Rib cuffs provide fitted ankle shape
All main seams sewn on overlock + coverstitch for stretch comfort

Quality Expectations
Flat, smooth waistband – no twisting or rolling
Pocket bags clean inside, not visible from outside
Rib cuffs stretch evenly and recover well
No wavy seams, no needle marks, no skipped stitches
Fabric + drawcord + thread color must match approved swatch

Production Notes (Client-facing)
Can be produced in single color or seasonal color range
Optional branded metal tip on drawcord
Optional "fake welt pocket" version for cost reduction
Works for loungewear, athleisure, travel comfort line

Labeling & Packaging
Standard woven brand label at waistband
Size label inside back waist
Care label option: inside welt pocket or side seam
Folded + polybag packed, barcode on size sticker"""

FABRIC_INFO = "30/1 2 Thread\nCompact penye\nGSM\n%92 Cotton-% 8 EA"


def _assorti(colorway: str, qty: int) -> AssortiPackRow:
    return AssortiPackRow(
        colorway=colorway,
        sizes={"S": qty, "M": qty, "L": qty, "XL": qty, "2XL": qty, "3XL": qty},
    )


def _order(colorway: str, sizes: dict[str, int]) -> OrderQuantity:
    return OrderQuantity(colorway=colorway, sizes=sizes, total=sum(sizes.values()))


def seed_document() -> TechpackDocument:
    """Build the document every editing session starts with."""
    color_codes = (
        ColorCode(id=1, code="16-5820 TCX", tcx="00-0000 TCX"),
        ColorCode(id=2, code="00-0000 TCX", tcx="00-0000 TCX"),
        *(ColorCode(id=i) for i in range(3, 10)),
    )

    measurements = tuple(Measurement(point=chr(ord("A") + i)) for i in range(MEASUREMENT_POINTS))

    empty_order = {"XS": 0, "S": 0, "M": 0, "L": 0, "XL": 0, "2XL": 0, "3XL": 0}

    return TechpackDocument(
        brand="samo",
        category="WOMEN",
        garment_type="TROUSERS",
        garment_fabric="FRENCH TERRY COTTON",
        model_code="WT44255",
        sizes="XXS-XS-S-M-L-XL-2XL-3XL",
        colors="",
        description="WOMEN TROUSERS",
        fabric_info=FABRIC_INFO,
        sewing_maps=SEWING_MAPS_TEMPLATE,
        color_codes=color_codes,
        measurements=measurements,
        assorti_pack=(
            _assorti("A Green", 2),
            _assorti("B", 0),
            _assorti("C", 0),
            _assorti("D", 0),
        ),
        order_quantities=(
            _order("A Green", {"XS": 240, "S": 240, "M": 240, "L": 240, "XL": 240, "2XL": 240, "3XL": 0}),
            _order("B", dict(empty_order)),
            _order("C", dict(empty_order)),
            _order("D", dict(empty_order)),
        ),
    )

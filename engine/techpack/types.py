"""
Techpack Engine: Shared Types

Data classes used across the reducer, store, and renderer.
These are the contracts that bind the engine together.

The document is immutable: every dataclass is frozen, ordered collections
are tuples, and updates build new values with `dataclasses.replace`.
Untouched rows and collections are shared between snapshots.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Literal

# ---------------------------------------------------------------------------
# Field registries
# ---------------------------------------------------------------------------

TEXT_FIELDS: tuple[str, ...] = (
    "brand",
    "category",
    "garment_type",
    "garment_fabric",
    "model_code",
    "sizes",
    "colors",
    "description",
    "fabric_info",
    "sewing_maps",
)

IMAGE_SLOTS: tuple[str, ...] = (
    "product_photo",
    "technical_drawing_front",
    "technical_drawing_back",
    "fabric_sample",
    "woven_label",
    "wash_care_label",
    "card_label",
    "print_aplique_info",
    "packaging_info",
)

CollectionKey = Literal["color_codes", "measurements", "assorti_pack", "order_quantities"]

COLLECTIONS: tuple[str, ...] = ("color_codes", "measurements", "assorti_pack", "order_quantities")

# Quantity cells hold the seeded int or the text the user last typed.
Quantity = int | str


# ---------------------------------------------------------------------------
# Rows
# ---------------------------------------------------------------------------


def _freeze_sizes(row: Any) -> None:
    """Store `sizes` as a read-only copy so snapshots cannot be edited in place."""
    if not isinstance(row.sizes, MappingProxyType):
        object.__setattr__(row, "sizes", MappingProxyType(dict(row.sizes)))


@dataclass(frozen=True)
class ColorCode:
    """One swatch of the 3×3 color grid. `id` never changes after creation."""

    id: int
    code: str = ""
    tcx: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "code": self.code, "tcx": self.tcx}

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> ColorCode:
        return cls(id=int(d["id"]), code=d.get("code", ""), tcx=d.get("tcx", ""))


@dataclass(frozen=True)
class Measurement:
    """One point of measure. `point` is a single letter assigned at creation."""

    point: str
    description: str = ""
    tolerance: str = ""
    sizes: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        _freeze_sizes(self)

    def to_dict(self) -> dict[str, Any]:
        return {
            "point": self.point,
            "description": self.description,
            "tolerance": self.tolerance,
            "sizes": dict(self.sizes),
        }

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> Measurement:
        return cls(
            point=d["point"],
            description=d.get("description", ""),
            tolerance=d.get("tolerance", ""),
            sizes=dict(d.get("sizes", {})),
        )


@dataclass(frozen=True)
class AssortiPackRow:
    """Per-colorway size distribution used for packing."""

    colorway: str
    sizes: Mapping[str, Quantity] = field(default_factory=dict)

    def __post_init__(self) -> None:
        _freeze_sizes(self)

    def to_dict(self) -> dict[str, Any]:
        return {"colorway": self.colorway, "sizes": dict(self.sizes)}

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> AssortiPackRow:
        return cls(colorway=d.get("colorway", ""), sizes=dict(d.get("sizes", {})))


@dataclass(frozen=True)
class OrderQuantity:
    """
    Ordered quantities for one colorway.

    `total` is derived from `sizes`. The reducer recomputes it on every
    size edit; nothing else writes it.
    """

    colorway: str
    sizes: Mapping[str, Quantity] = field(default_factory=dict)
    total: int = 0

    def __post_init__(self) -> None:
        _freeze_sizes(self)

    def to_dict(self) -> dict[str, Any]:
        return {"colorway": self.colorway, "sizes": dict(self.sizes), "total": self.total}

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> OrderQuantity:
        return cls(
            colorway=d.get("colorway", ""),
            sizes=dict(d.get("sizes", {})),
            total=int(d.get("total", 0)),
        )


# ---------------------------------------------------------------------------
# Document
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class TechpackDocument:
    """
    The techpack being edited: the single unit of truth.

    Structure:
    - header scalars: brand, category, garment_type, garment_fabric,
      model_code, sizes, colors
    - free text: description, fabric_info, sewing_maps
    - nine image slots: data URL or None
    - four fixed-length collections: color_codes, measurements,
      assorti_pack, order_quantities
    """

    brand: str = ""
    category: str = ""
    garment_type: str = ""
    garment_fabric: str = ""
    model_code: str = ""
    sizes: str = ""
    colors: str = ""

    product_photo: str | None = None
    technical_drawing_front: str | None = None
    technical_drawing_back: str | None = None
    fabric_sample: str | None = None
    woven_label: str | None = None
    wash_care_label: str | None = None
    card_label: str | None = None
    print_aplique_info: str | None = None
    packaging_info: str | None = None

    description: str = ""
    fabric_info: str = ""
    sewing_maps: str = ""

    color_codes: tuple[ColorCode, ...] = ()
    measurements: tuple[Measurement, ...] = ()
    assorti_pack: tuple[AssortiPackRow, ...] = ()
    order_quantities: tuple[OrderQuantity, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {key: getattr(self, key) for key in TEXT_FIELDS}
        d.update({slot: getattr(self, slot) for slot in IMAGE_SLOTS})
        d["color_codes"] = [c.to_dict() for c in self.color_codes]
        d["measurements"] = [m.to_dict() for m in self.measurements]
        d["assorti_pack"] = [a.to_dict() for a in self.assorti_pack]
        d["order_quantities"] = [o.to_dict() for o in self.order_quantities]
        return d

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> TechpackDocument:
        kwargs: dict[str, Any] = {key: d.get(key, "") for key in TEXT_FIELDS}
        kwargs.update({slot: d.get(slot) for slot in IMAGE_SLOTS})
        return cls(
            **kwargs,
            color_codes=tuple(ColorCode.from_dict(c) for c in d.get("color_codes", [])),
            measurements=tuple(Measurement.from_dict(m) for m in d.get("measurements", [])),
            assorti_pack=tuple(AssortiPackRow.from_dict(a) for a in d.get("assorti_pack", [])),
            order_quantities=tuple(OrderQuantity.from_dict(o) for o in d.get("order_quantities", [])),
        )


# ---------------------------------------------------------------------------
# Actions
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class SetField:
    """Replace one header, free-text, or image-slot field."""

    key: str
    value: str | None


@dataclass(frozen=True)
class SetRowField:
    """Replace one non-`sizes` field of one row in a collection."""

    collection: CollectionKey
    index: int
    field: str
    value: str


@dataclass(frozen=True)
class SetRowSize:
    """Replace (or insert) one entry of a row's `sizes` mapping."""

    collection: CollectionKey
    index: int
    size: str
    value: str


@dataclass(frozen=True)
class SetColorCode:
    """Replace `code` or `tcx` of one color-code row. Edits to `id` are ignored."""

    index: int
    field: str
    value: str


Action = SetField | SetRowField | SetRowSize | SetColorCode


@dataclass(frozen=True)
class ReduceResult:
    """
    Result of applying one action to a document.
    The reducer never throws: it always returns one of these.
    """

    document: TechpackDocument
    accepted: bool
    reason: str | None = None


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------

DEFAULT_FOOTER = "ALL THE DESIGN ARE THE PROPERTY OF SAMO UNLESS OTHERWISE STATED COPYRIGHT © 2023-2033"


@dataclass(frozen=True)
class RenderOptions:
    """Options controlling what the renderer includes in output."""

    editable: bool = True  # inputs for the editor, plain text for export
    footer: str = DEFAULT_FOOTER


@dataclass(frozen=True)
class RenderedPage:
    """One fixed-layout page: a single `.techpack-page` HTML node."""

    number: int
    kind: str  # "cover", "trims", "measurements", "order"
    html: str

"""
Techpack Engine: Reducer

Pure function: (document, action) → ReduceResult

The document is frozen, so the input is never modified. Each handler builds
the new document with `dataclasses.replace`, touching only the changed row
and its collection; everything else is shared with the previous snapshot.

Two update paths exist for rows and they are deliberately asymmetric:
- SetRowField replaces a plain field and never touches `total`
- SetRowSize replaces one size entry and, for order quantities,
  recomputes `total` from the updated mapping
"""

from __future__ import annotations

import math
from collections.abc import Callable, Mapping
from dataclasses import replace
from typing import Any

from engine.techpack.types import (
    IMAGE_SLOTS,
    TEXT_FIELDS,
    Action,
    OrderQuantity,
    ReduceResult,
    SetColorCode,
    SetField,
    SetRowField,
    SetRowSize,
    TechpackDocument,
)

# ---------------------------------------------------------------------------
# Collection rules
# ---------------------------------------------------------------------------

# Identity fields are fixed at creation; edits to them are silently dropped.
IDENTITY_FIELDS: dict[str, str] = {
    "color_codes": "id",
    "measurements": "point",
}

# Plain text fields each collection accepts through SetRowField.
ROW_TEXT_FIELDS: dict[str, frozenset[str]] = {
    "color_codes": frozenset({"code", "tcx"}),
    "measurements": frozenset({"description", "tolerance"}),
    "assorti_pack": frozenset({"colorway"}),
    "order_quantities": frozenset({"colorway"}),
}

SIZED_COLLECTIONS: frozenset[str] = frozenset({"measurements", "assorti_pack", "order_quantities"})


# ---------------------------------------------------------------------------
# Derived fields
# ---------------------------------------------------------------------------


def parse_quantity(value: Any) -> float:
    """
    Read a quantity cell as a number.

    Empty, unparseable, NaN, and infinite values count as 0.
    """
    if isinstance(value, bool):
        return 0.0
    if isinstance(value, int | float):
        number = float(value)
    else:
        text = str(value).strip() if value is not None else ""
        if not text:
            return 0.0
        try:
            number = float(text)
        except ValueError:
            return 0.0
    if not math.isfinite(number):
        return 0.0
    return number


def row_total(sizes: Mapping[str, Any]) -> int:
    """Sum of a row's size quantities, coerced to int."""
    return int(sum(parse_quantity(v) for v in sizes.values()))


def grand_total(document: TechpackDocument) -> int:
    """Sum of every order row's `total`."""
    return sum(row.total for row in document.order_quantities)


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _reject(doc: TechpackDocument, reason: str) -> ReduceResult:
    return ReduceResult(document=doc, accepted=False, reason=reason)


def _ok(doc: TechpackDocument) -> ReduceResult:
    return ReduceResult(document=doc, accepted=True)


def _check_row(doc: TechpackDocument, collection: str, index: int) -> str | None:
    """Return a rejection reason if `collection[index]` does not exist."""
    if collection not in ROW_TEXT_FIELDS:
        return f"UNKNOWN_COLLECTION: '{collection}'"
    rows = getattr(doc, collection)
    if isinstance(index, bool) or not isinstance(index, int) or not 0 <= index < len(rows):
        return f"INDEX_OUT_OF_RANGE: {collection}[{index}] (length {len(rows)})"
    return None


def _with_row(doc: TechpackDocument, collection: str, index: int, row: Any) -> TechpackDocument:
    rows = getattr(doc, collection)
    new_rows = rows[:index] + (row,) + rows[index + 1 :]
    return replace(doc, **{collection: new_rows})


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def reduce(document: TechpackDocument, action: Action) -> ReduceResult:
    """
    Apply one action to the current document.
    Returns ReduceResult with the new document + accepted flag.

    Pure function. The input document is never modified.
    """
    handler = _HANDLERS.get(type(action))
    if handler is None:
        return _reject(document, f"UNKNOWN_ACTION: {type(action).__name__}")
    return handler(document, action)


def reduce_all(document: TechpackDocument, actions: list[Action]) -> TechpackDocument:
    """
    Apply a sequence of actions.
    Rejections are silently skipped.
    Returns the final document.
    """
    for action in actions:
        result = reduce(document, action)
        if result.accepted:
            document = result.document
    return document


# ---------------------------------------------------------------------------
# Handlers
# ---------------------------------------------------------------------------


def _handle_set_field(doc: TechpackDocument, action: SetField) -> ReduceResult:
    key, value = action.key, action.value

    if key in TEXT_FIELDS:
        if not isinstance(value, str):
            return _reject(doc, f"INVALID_TYPE: '{key}' takes text")
    elif key in IMAGE_SLOTS:
        if value is not None and not isinstance(value, str):
            return _reject(doc, f"INVALID_TYPE: image slot '{key}' takes a data URL or null")
    else:
        return _reject(doc, f"UNKNOWN_FIELD: '{key}'")

    return _ok(replace(doc, **{key: value}))


def _handle_set_row_field(doc: TechpackDocument, action: SetRowField) -> ReduceResult:
    collection, index, field_name = action.collection, action.index, action.field

    reason = _check_row(doc, collection, index)
    if reason:
        return _reject(doc, reason)

    if IDENTITY_FIELDS.get(collection) == field_name:
        return _ok(doc)
    if field_name == "total" and collection == "order_quantities":
        return _reject(doc, "DERIVED_FIELD: 'total' is computed from sizes")
    if field_name not in ROW_TEXT_FIELDS[collection]:
        return _reject(doc, f"UNKNOWN_FIELD: {collection} rows have no editable field '{field_name}'")
    if not isinstance(action.value, str):
        return _reject(doc, f"INVALID_TYPE: '{field_name}' takes text")

    row = getattr(doc, collection)[index]
    return _ok(_with_row(doc, collection, index, replace(row, **{field_name: action.value})))


def _handle_set_row_size(doc: TechpackDocument, action: SetRowSize) -> ReduceResult:
    collection, index = action.collection, action.index

    reason = _check_row(doc, collection, index)
    if reason:
        return _reject(doc, reason)
    if collection not in SIZED_COLLECTIONS:
        return _reject(doc, f"NO_SIZES: {collection} rows have no sizes")
    if not isinstance(action.size, str) or not action.size:
        return _reject(doc, "INVALID_TYPE: size label must be non-empty text")

    row = getattr(doc, collection)[index]
    sizes = {**row.sizes, action.size: action.value}

    if isinstance(row, OrderQuantity):
        new_row = replace(row, sizes=sizes, total=row_total(sizes))
    else:
        new_row = replace(row, sizes=sizes)

    return _ok(_with_row(doc, collection, index, new_row))


def _handle_set_color_code(doc: TechpackDocument, action: SetColorCode) -> ReduceResult:
    return _handle_set_row_field(
        doc,
        SetRowField(collection="color_codes", index=action.index, field=action.field, value=action.value),
    )


_HANDLERS: dict[type, Callable[[TechpackDocument, Any], ReduceResult]] = {
    SetField: _handle_set_field,
    SetRowField: _handle_set_row_field,
    SetRowSize: _handle_set_row_size,
    SetColorCode: _handle_set_color_code,
}

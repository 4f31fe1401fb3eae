"""Techpack document API models."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel

from engine.techpack.types import Action, SetColorCode, SetField, SetRowField, SetRowSize


class SetFieldRequest(BaseModel):
    """Replace a header, free-text, or image-slot field."""

    model_config = {"extra": "forbid"}

    op: Literal["set_field"]
    key: str
    value: str | None


class SetRowFieldRequest(BaseModel):
    """Replace a plain field of one collection row."""

    model_config = {"extra": "forbid"}

    op: Literal["set_row_field"]
    collection: str
    index: int
    field: str
    value: str


class SetRowSizeRequest(BaseModel):
    """Replace one size cell of one collection row."""

    model_config = {"extra": "forbid"}

    op: Literal["set_row_size"]
    collection: str
    index: int
    size: str
    value: str


class SetColorCodeRequest(BaseModel):
    """Replace `code` or `tcx` of one color-code row."""

    model_config = {"extra": "forbid"}

    op: Literal["set_color_code"]
    index: int
    field: str
    value: str


# Discriminated on `op` by the route (`Body(discriminator="op")`)
ActionRequest = SetFieldRequest | SetRowFieldRequest | SetRowSizeRequest | SetColorCodeRequest


def to_action(req: ActionRequest) -> Action:
    """Convert a validated request into an engine action."""
    if isinstance(req, SetFieldRequest):
        return SetField(key=req.key, value=req.value)
    if isinstance(req, SetRowFieldRequest):
        return SetRowField(collection=req.collection, index=req.index, field=req.field, value=req.value)  # type: ignore[arg-type]
    if isinstance(req, SetRowSizeRequest):
        return SetRowSize(collection=req.collection, index=req.index, size=req.size, value=req.value)  # type: ignore[arg-type]
    return SetColorCode(index=req.index, field=req.field, value=req.value)


class TechpackResponse(BaseModel):
    """What GET /api/techpack returns."""

    document: dict[str, Any]
    revision: int
    grand_total: int


class ActionResponse(BaseModel):
    """What an accepted action returns."""

    accepted: bool
    revision: int
    changed: bool

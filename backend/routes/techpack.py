"""Techpack document routes: read, edit, image slots, page HTML."""

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import APIRouter, Body, Depends, HTTPException, Request, UploadFile
from fastapi.responses import HTMLResponse

from backend.config import settings
from backend.models.techpack import ActionRequest, ActionResponse, TechpackResponse, to_action
from backend.utils.images import InvalidImageError, sniff_image, to_data_url
from engine.techpack.reducer import grand_total
from engine.techpack.renderer import render_pages, render_pages_html
from engine.techpack.store import DocumentStore
from engine.techpack.types import IMAGE_SLOTS, RenderOptions

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/techpack", tags=["techpack"])


def get_store(request: Request) -> DocumentStore:
    return request.app.state.store


def _editor_options() -> RenderOptions:
    return RenderOptions(editable=True, footer=settings.COPYRIGHT_FOOTER)


def _check_slot(slot: str) -> None:
    if slot not in IMAGE_SLOTS:
        raise HTTPException(status_code=404, detail=f"Unknown image slot: {slot}")


@router.get("", response_model=TechpackResponse)
async def get_techpack(store: DocumentStore = Depends(get_store)) -> TechpackResponse:
    """Current document, its revision, and the order grand total."""
    doc = store.snapshot
    return TechpackResponse(document=doc.to_dict(), revision=store.revision, grand_total=grand_total(doc))


@router.post("/actions", response_model=ActionResponse)
async def apply_action(
    req: Annotated[ActionRequest, Body(discriminator="op")],
    store: DocumentStore = Depends(get_store),
) -> ActionResponse:
    """
    Apply one edit action.

    Rejected actions leave the document unchanged and answer 422 with the
    reducer's reason code.
    """
    before = store.revision
    result = store.dispatch(to_action(req))
    if not result.accepted:
        logger.info("techpack: rejected %s (%s)", req.op, result.reason)
        raise HTTPException(status_code=422, detail=result.reason)
    return ActionResponse(accepted=True, revision=store.revision, changed=store.revision != before)


@router.put("/images/{slot}", response_model=ActionResponse)
async def upload_image(slot: str, file: UploadFile, store: DocumentStore = Depends(get_store)) -> ActionResponse:
    """Store an uploaded image in a slot as a data URL."""
    _check_slot(slot)
    data = await file.read()
    try:
        mime = sniff_image(data, settings.MAX_UPLOAD_BYTES)
    except InvalidImageError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e

    before = store.revision
    result = store.set_field(slot, to_data_url(data, mime))
    logger.info("techpack: image slot=%s mime=%s bytes=%d", slot, mime, len(data))
    return ActionResponse(accepted=result.accepted, revision=store.revision, changed=store.revision != before)


@router.delete("/images/{slot}", response_model=ActionResponse)
async def clear_image(slot: str, store: DocumentStore = Depends(get_store)) -> ActionResponse:
    """Clear a slot back to its placeholder."""
    _check_slot(slot)
    before = store.revision
    result = store.set_field(slot, None)
    return ActionResponse(accepted=result.accepted, revision=store.revision, changed=store.revision != before)


@router.get("/pages", response_class=HTMLResponse)
async def get_pages(store: DocumentStore = Depends(get_store)) -> HTMLResponse:
    """All four editable page nodes, for refreshing the editor in place."""
    return HTMLResponse(render_pages_html(store.snapshot, _editor_options()))


@router.get("/pages/{number}", response_class=HTMLResponse)
async def get_page(number: int, store: DocumentStore = Depends(get_store)) -> HTMLResponse:
    """One page node by its 1-based number."""
    pages = render_pages(store.snapshot, _editor_options())
    if not 1 <= number <= len(pages):
        raise HTTPException(status_code=404, detail=f"Page {number} not found")
    return HTMLResponse(pages[number - 1].html)

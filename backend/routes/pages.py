"""Page serving: GET / returns the techpack editor, GET /image-edit the image editor."""

from __future__ import annotations

from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse

from backend.config import settings
from backend.services.image_edit_page import PAGE_PATH, render_image_editor
from engine.techpack.renderer import render
from engine.techpack.types import RenderOptions

router = APIRouter(tags=["pages"])


@router.get("/", response_class=HTMLResponse)
async def serve_editor(request: Request) -> HTMLResponse:
    """
    Serve the editor: four editable pages plus the export toolbar.

    The share button is only present when a share target was detected
    at startup.
    """
    html = render(
        request.app.state.store.snapshot,
        RenderOptions(editable=True, footer=settings.COPYRIGHT_FOOTER),
        share_available=request.app.state.exporter.share_supported,
    )
    return HTMLResponse(
        content=html,
        headers={"Cache-Control": "no-store", "X-Content-Type-Options": "nosniff"},
    )


@router.get(PAGE_PATH, response_class=HTMLResponse)
async def serve_image_editor(request: Request) -> HTMLResponse:
    """Serve the image-edit panel, showing its current image, prompt, and result."""
    html = render_image_editor(request.app.state.image_edit.state())
    return HTMLResponse(
        content=html,
        headers={"Cache-Control": "no-store", "X-Content-Type-Options": "nosniff"},
    )

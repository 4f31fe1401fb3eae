"""Image-edit panel routes."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Request, UploadFile
from fastapi.responses import Response

from backend.config import settings
from backend.models.image_edit import ImageEditState, SubmitEditRequest
from backend.services.ai_provider import SourceImage
from backend.services.image_edit_panel import ImageEditInProgressError, ImageEditPanel
from backend.utils.images import InvalidImageError, sniff_image

router = APIRouter(prefix="/api/image-edit", tags=["image-edit"])


def get_panel(request: Request) -> ImageEditPanel:
    return request.app.state.image_edit


@router.get("", response_model=ImageEditState)
async def get_state(panel: ImageEditPanel = Depends(get_panel)) -> ImageEditState:
    return ImageEditState(**panel.state())


@router.put("/image", response_model=ImageEditState)
async def select_image(file: UploadFile, panel: ImageEditPanel = Depends(get_panel)) -> ImageEditState:
    """Pick the image to edit. Clears any previous result."""
    data = await file.read()
    try:
        mime = sniff_image(data, settings.MAX_UPLOAD_BYTES)
    except InvalidImageError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e

    panel.select_image(SourceImage(data=data, mime_type=mime, filename=file.filename or "image"))
    return ImageEditState(**panel.state())


@router.post("/submit", response_model=ImageEditState)
async def submit_edit(req: SubmitEditRequest, panel: ImageEditPanel = Depends(get_panel)) -> ImageEditState:
    """
    Run the edit with the given prompt.

    Precondition and provider failures come back in `error`; the request
    itself succeeds.
    """
    try:
        await panel.submit(req.prompt)
    except ImageEditInProgressError as e:
        raise HTTPException(status_code=409, detail=str(e)) from e
    return ImageEditState(**panel.state())


@router.get("/result")
async def download_result(panel: ImageEditPanel = Depends(get_panel)) -> Response:
    """The edited image as `edited-image.png`."""
    try:
        filename, data = panel.download()
    except LookupError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e
    return Response(
        content=data,
        media_type="image/png",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )

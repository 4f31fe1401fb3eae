"""Export routes: PDF download and share."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import JSONResponse, Response

from backend.models.export import ExportCapabilities, ShareResponse
from backend.services.exporter import (
    PDF_CONTENT_TYPE,
    ExportInProgressError,
    ExportResult,
    ExportService,
)

router = APIRouter(prefix="/api/export", tags=["export"])


def get_exporter(request: Request) -> ExportService:
    return request.app.state.exporter


def _pdf_response(result: ExportResult) -> Response:
    return Response(
        content=result.pdf,
        media_type=PDF_CONTENT_TYPE,
        headers={"Content-Disposition": f'attachment; filename="{result.filename}"'},
    )


def _to_response(result: ExportResult) -> Response:
    """Map an export outcome onto HTTP."""
    if result.status == "saved":
        return _pdf_response(result)
    if result.status == "empty":
        return Response(status_code=204)
    if result.status == "failed":
        raise HTTPException(status_code=502, detail=result.message)
    return JSONResponse(ShareResponse(status=result.status, url=result.url).model_dump())


@router.get("/capabilities", response_model=ExportCapabilities)
async def get_capabilities(exporter: ExportService = Depends(get_exporter)) -> ExportCapabilities:
    return ExportCapabilities(share=exporter.share_supported, action_in_progress=exporter.action_in_progress)


@router.post("/download")
async def download_pdf(exporter: ExportService = Depends(get_exporter)) -> Response:
    """Render, rasterize, and return `Techpack.pdf` as an attachment."""
    try:
        result = await exporter.save()
    except ExportInProgressError as e:
        raise HTTPException(status_code=409, detail=str(e)) from e
    return _to_response(result)


@router.post("/share")
async def share_pdf(exporter: ExportService = Depends(get_exporter)) -> Response:
    """
    Share the PDF through the configured share target.

    Not offered when no share target was detected at startup. Falls back
    to the download response when the target refuses the file.
    """
    if not exporter.share_supported:
        raise HTTPException(status_code=404, detail="Sharing is not available")
    try:
        result = await exporter.share()
    except ExportInProgressError as e:
        raise HTTPException(status_code=409, detail=str(e)) from e
    return _to_response(result)

"""
Techpack export pipeline.

Renders the current document to static pages, rasterizes each page node in
order, and stacks the images into a PDF. Two terminal actions consume the
result: save (download `Techpack.pdf`) and share (hand the PDF to the share
target, falling back to save when the target refuses the file).

Only one export action runs at a time.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Literal

from backend.services.pdf_assembler import PdfDocument, create_document
from backend.services.rasterizer import Rasterizer
from backend.services.share import SharedFile, ShareTarget
from engine.techpack.renderer import PAGE_HEIGHT, PAGE_WIDTH, render
from engine.techpack.store import DocumentStore
from engine.techpack.types import DEFAULT_FOOTER, RenderOptions

logger = logging.getLogger(__name__)

PAGE_SIZE = (PAGE_WIDTH, PAGE_HEIGHT)  # A3 at 72 DPI
RASTER_SCALE = 2
BACKGROUND = "#ffffff"

PDF_FILENAME = "Techpack.pdf"
PDF_CONTENT_TYPE = "application/pdf"
SHARE_TITLE = "Fashion Techpack"
SHARE_TEXT = "Created with Fashion Techpack Generator"

EXPORT_FAILED_MESSAGE = "Failed to generate the PDF. Please try again."

DocumentFactory = Callable[[tuple[float, float]], PdfDocument]


class ExportInProgressError(Exception):
    """Raised when an export action is triggered while another is running."""


@dataclass
class ExportResult:
    """
    Outcome of one export action.

    status:
      saved:      `pdf` holds the bytes to download as `filename`
      shared:     `url` points at the shared file
      not_shared: the share hand-off failed; nothing was produced
      empty:      no pages were rendered; nothing was produced
      failed:     rasterizing or assembling failed; `message` is user-facing
    """

    status: Literal["saved", "shared", "not_shared", "empty", "failed"]
    filename: str = PDF_FILENAME
    pdf: bytes | None = None
    url: str | None = None
    message: str | None = None


async def generate_pdf(
    html: str,
    rasterizer: Rasterizer,
    create: DocumentFactory = create_document,
) -> PdfDocument | None:
    """
    Rasterize every page node of `html`, in order, into one PDF.

    Returns None when the HTML holds no page nodes.
    """
    doc: PdfDocument | None = None

    async with rasterizer.pages(html, scale=RASTER_SCALE) as nodes:
        if not nodes:
            logger.warning("export: no page nodes found, nothing to export")
            return None

        for index, node in enumerate(nodes):
            image = await rasterizer.rasterize(node, background=BACKGROUND)
            if doc is None:
                doc = create(PAGE_SIZE)
            else:
                doc.add_page(PAGE_SIZE)
            doc.place_image(image, (0, 0), PAGE_SIZE)
            logger.debug("export: placed page %d/%d", index + 1, len(nodes))

    return doc


class ExportService:
    """Runs save/share exports of one document store, one at a time."""

    def __init__(
        self,
        store: DocumentStore,
        rasterizer: Rasterizer,
        share_target: ShareTarget | None = None,
        create: DocumentFactory = create_document,
        footer: str = DEFAULT_FOOTER,
    ) -> None:
        self.store = store
        self.rasterizer = rasterizer
        self.share_target = share_target
        self.create = create
        self.footer = footer
        self.action_in_progress: str | None = None

    @property
    def share_supported(self) -> bool:
        """Fixed when the service is built; gates whether share is offered."""
        return self.share_target is not None

    async def save(self) -> ExportResult:
        """Build the PDF for download as `Techpack.pdf`."""
        self._begin("download")
        try:
            pdf, failure = await self._build()
            if failure is not None:
                return failure
            return ExportResult(status="saved", pdf=pdf)
        finally:
            self.action_in_progress = None

    async def share(self) -> ExportResult:
        """
        Build the PDF and hand it to the share target.

        Falls back to a save result when the target refuses the file. A
        failing hand-off is logged and reported as `not_shared`.
        """
        if self.share_target is None:
            raise RuntimeError("share is not available")

        self._begin("share")
        try:
            pdf, failure = await self._build()
            if failure is not None:
                return failure

            files = [SharedFile(name=PDF_FILENAME, data=pdf, content_type=PDF_CONTENT_TYPE)]

            if not self.share_target.can_share_files(files):
                logger.warning("export: share target refused the file, falling back to download")
                return ExportResult(status="saved", pdf=pdf)

            try:
                url = await self.share_target.share(files, title=SHARE_TITLE, text=SHARE_TEXT)
            except Exception:
                logger.exception("export: share hand-off failed")
                return ExportResult(status="not_shared")

            return ExportResult(status="shared", url=url)
        finally:
            self.action_in_progress = None

    def _begin(self, action: str) -> None:
        if self.action_in_progress is not None:
            raise ExportInProgressError(f"'{self.action_in_progress}' is already running")
        self.action_in_progress = action

    async def _build(self) -> tuple[bytes | None, ExportResult | None]:
        """Render, rasterize, and finish the PDF of the current snapshot; failures become results."""
        html = render(self.store.snapshot, RenderOptions(editable=False, footer=self.footer))
        try:
            doc = await generate_pdf(html, self.rasterizer, self.create)
            if doc is None:
                return None, ExportResult(status="empty")
            pdf = doc.to_binary()
        except Exception:
            logger.exception("export: PDF generation failed")
            return None, ExportResult(status="failed", message=EXPORT_FAILED_MESSAGE)

        logger.info("export: built PDF with %d pages (%d bytes)", doc.page_count, len(pdf))
        return pdf, None

"""Multi-page PDF assembly on a ReportLab canvas."""

from __future__ import annotations

from io import BytesIO
from pathlib import Path

from reportlab.lib.utils import ImageReader
from reportlab.pdfgen import canvas

PageSize = tuple[float, float]


class PdfDocument:
    """
    A PDF being built page by page.

    The constructor opens the first page. Later pages must be added with
    `add_page` before images are placed on them. Coordinates passed to
    `place_image` are top-left based, like the page nodes they come from.
    """

    def __init__(self, page_size: PageSize) -> None:
        self._buffer = BytesIO()
        self._canvas = canvas.Canvas(self._buffer, pagesize=page_size)
        self._page_size = page_size
        self._page_count = 1
        self._data: bytes | None = None

    @property
    def page_count(self) -> int:
        return self._page_count

    def add_page(self, page_size: PageSize) -> None:
        """Close the current page and start a new one."""
        self._ensure_open()
        self._canvas.showPage()
        self._canvas.setPageSize(page_size)
        self._page_size = page_size
        self._page_count += 1

    def place_image(self, image: bytes, pos: tuple[float, float], size: tuple[float, float]) -> None:
        """Draw encoded image bytes (PNG/JPEG) at `pos`, scaled to `size`."""
        self._ensure_open()
        x, y = pos
        width, height = size
        self._canvas.drawImage(
            ImageReader(BytesIO(image)),
            x,
            self._page_size[1] - y - height,
            width=width,
            height=height,
        )

    def to_binary(self) -> bytes:
        """Finish the document (once) and return the PDF bytes."""
        if self._data is None:
            self._canvas.showPage()
            self._canvas.save()
            self._data = self._buffer.getvalue()
        return self._data

    def to_file(self, path: str | Path) -> Path:
        """Write the finished PDF to `path` and return it."""
        target = Path(path)
        target.write_bytes(self.to_binary())
        return target

    def _ensure_open(self) -> None:
        if self._data is not None:
            raise RuntimeError("PDF document already finalized")


def create_document(page_size: PageSize) -> PdfDocument:
    """Start a new PDF whose first page has `page_size` (points)."""
    return PdfDocument(page_size)

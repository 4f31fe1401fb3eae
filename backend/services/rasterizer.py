"""Page rasterization through headless Chromium (Playwright)."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import AbstractAsyncContextManager, asynccontextmanager
from typing import Any, Protocol

from playwright.async_api import async_playwright

from engine.techpack.renderer import PAGE_HEIGHT, PAGE_WIDTH

logger = logging.getLogger(__name__)

PAGE_SELECTOR = ".techpack-page"


class Rasterizer(Protocol):
    """Turns rendered page nodes into PNG images."""

    def pages(self, html: str, scale: float) -> AbstractAsyncContextManager[list[Any]]:
        """Load `html` and yield its page nodes in document order."""
        ...

    async def rasterize(self, node: Any, background: str) -> bytes:
        """Capture one page node as PNG bytes over an opaque `background`."""
        ...


class PlaywrightRasterizer:
    """
    Rasterizer backed by a fresh Chromium per export.

    The browser context's device scale factor carries the raster scale, so
    a page node of 842×1191 CSS px becomes a (842·scale)×(1191·scale) PNG.
    Embedded images are data URLs, which keeps capture free of
    cross-origin taint; CSP is bypassed for the inline editor markup.
    """

    def __init__(self, selector: str = PAGE_SELECTOR) -> None:
        self.selector = selector

    @asynccontextmanager
    async def pages(self, html: str, scale: float) -> AsyncIterator[list[Any]]:
        async with async_playwright() as pw:
            browser = await pw.chromium.launch()
            try:
                context = await browser.new_context(
                    viewport={"width": PAGE_WIDTH, "height": PAGE_HEIGHT},
                    device_scale_factor=scale,
                    bypass_csp=True,
                )
                page = await context.new_page()
                await page.set_content(html, wait_until="networkidle")
                nodes = await page.query_selector_all(self.selector)
                logger.info("rasterizer: loaded %d page nodes", len(nodes))
                yield nodes
            finally:
                await browser.close()

    async def rasterize(self, node: Any, background: str) -> bytes:
        await node.evaluate("(el, bg) => { el.style.background = bg; }", background)
        return await node.screenshot(type="png", scale="device", animations="disabled")

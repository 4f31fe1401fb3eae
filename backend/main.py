"""
Techpack Studio FastAPI application.

Entry point for the API server.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from backend.config import settings
from backend.routes import export as export_routes
from backend.routes import image_edit as image_edit_routes
from backend.routes import pages as pages_routes
from backend.routes import techpack as techpack_routes
from backend.services.ai_provider import ai_provider
from backend.services.exporter import ExportService
from backend.services.image_edit_panel import ImageEditor, ImageEditPanel
from backend.services.rasterizer import PlaywrightRasterizer, Rasterizer
from backend.services.share import ShareTarget, detect_share_target
from engine.techpack.store import DocumentStore

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown logging; all session state is built in create_app."""
    logger.info(
        "main: started env=%s share=%s image_edit_provider=%s",
        settings.ENVIRONMENT,
        app.state.exporter.share_supported,
        settings.IMAGE_EDIT_PROVIDER,
    )
    yield
    logger.info("main: stopped at revision %d", app.state.store.revision)


def create_app(
    store: DocumentStore | None = None,
    rasterizer: Rasterizer | None = None,
    share_target: ShareTarget | None = None,
    detect_share: bool = True,
    editor: ImageEditor | None = None,
) -> FastAPI:
    """
    Build the application with one editing session.

    The session owns a single document store, the export service and the
    image-edit panel. Share availability is decided here, once: an explicit
    `share_target` wins, otherwise it is detected from settings unless
    `detect_share` is False.
    """
    app = FastAPI(
        title="Techpack Studio",
        docs_url=None,
        redoc_url=None,
        lifespan=lifespan,
    )

    if share_target is None and detect_share:
        share_target = detect_share_target(settings)

    app.state.store = store or DocumentStore()
    app.state.exporter = ExportService(
        app.state.store,
        rasterizer or PlaywrightRasterizer(),
        share_target=share_target,
        footer=settings.COPYRIGHT_FOOTER,
    )
    app.state.image_edit = ImageEditPanel(editor or ai_provider)

    # Register routes
    app.include_router(pages_routes.router)
    app.include_router(techpack_routes.router)
    app.include_router(export_routes.router)
    app.include_router(image_edit_routes.router)

    @app.get("/health")
    async def health():
        """Health check endpoint for uptime monitoring."""
        return {"status": "ok"}

    return app


app = create_app()

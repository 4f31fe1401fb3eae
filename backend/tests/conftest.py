"""
Pytest configuration and fixtures for Techpack Studio backend tests.
"""

from __future__ import annotations

import pytest
from httpx import ASGITransport, AsyncClient

from backend.main import create_app
from backend.tests.fakes import FakeEditor, FakeRasterizer, make_png


@pytest.fixture
def png_bytes() -> bytes:
    return make_png()


@pytest.fixture
def rasterizer() -> FakeRasterizer:
    return FakeRasterizer()


@pytest.fixture
def editor() -> FakeEditor:
    return FakeEditor()


@pytest.fixture
def app(rasterizer: FakeRasterizer, editor: FakeEditor):
    """Fresh application (fresh document) per test, share not configured."""
    return create_app(rasterizer=rasterizer, detect_share=False, editor=editor)


@pytest.fixture
async def client(app):
    """Create test client."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as client:
        yield client

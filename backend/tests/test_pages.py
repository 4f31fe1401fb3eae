"""
Tests for page serving (techpack editor, image editor) and the health endpoint.
"""

from httpx import ASGITransport, AsyncClient

from backend.main import create_app
from backend.services.image_edit_panel import EXAMPLE_PROMPTS
from backend.tests.fakes import FakeRasterizer, FakeShareTarget, make_png


class TestEditorPage:
    async def test_root_returns_editor(self, client: AsyncClient):
        """GET / returns the four editable pages with the toolbar and script."""
        response = await client.get("/")

        assert response.status_code == 200
        assert "text/html" in response.headers["content-type"]
        assert response.text.count('class="techpack-page"') == 4
        assert 'data-action="download"' in response.text
        assert "<script>" in response.text

    async def test_share_button_hidden_without_target(self, client: AsyncClient):
        response = await client.get("/")
        assert 'data-action="share"' not in response.text

    async def test_share_button_shown_with_target(self):
        app = create_app(rasterizer=FakeRasterizer(), share_target=FakeShareTarget())
        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
            response = await client.get("/")

        assert 'data-action="share"' in response.text

    async def test_reflects_edits(self, client: AsyncClient):
        await client.post(
            "/api/techpack/actions",
            json={"op": "set_field", "key": "garment_type", "value": "JOGGERS"},
        )

        response = await client.get("/")
        assert "JOGGERS" in response.text


class TestImageEditorPage:
    async def test_serves_image_editor(self, client: AsyncClient):
        response = await client.get("/image-edit")

        assert response.status_code == 200
        assert "text/html" in response.headers["content-type"]
        assert response.headers["cache-control"] == "no-store"
        html = response.text
        assert '<input type="file" id="ie-file" accept="image/*">' in html
        assert '<img id="ie-preview"' in html
        assert '<textarea id="ie-prompt"' in html
        assert 'placeholder="e.g., Add a retro filter"' in html
        assert "Generate with AI" in html
        assert "Generating your image..." in html
        assert "Your edited image will appear here" in html
        assert '<a id="ie-download" href="/api/image-edit/result" download="edited-image.png"' in html
        assert "Download Image" in html
        assert 'id="ie-error"' in html

    async def test_script_calls_panel_endpoints(self, client: AsyncClient):
        html = (await client.get("/image-edit")).text

        assert "/api/image-edit/image" in html
        assert "/api/image-edit/submit" in html
        assert "<script>" in html

    async def test_lists_example_prompts(self, client: AsyncClient):
        html = (await client.get("/image-edit")).text

        for prompt in EXAMPLE_PROMPTS:
            assert f'data-prompt="{prompt}"' in html

    async def test_fresh_panel_hides_result_and_error(self, client: AsyncClient):
        html = (await client.get("/image-edit")).text

        assert '<img id="ie-result" alt="Edited image" hidden>' in html
        assert 'download="edited-image.png" hidden>' in html
        assert '<p id="ie-loading" hidden>' in html
        assert 'role="alert" hidden>' in html

    async def test_shows_selected_image_and_result(self, client: AsyncClient):
        await client.put("/api/image-edit/image", files={"file": ("shirt.png", make_png(), "image/png")})
        await client.post("/api/image-edit/submit", json={"prompt": "Add a retro filter"})

        html = (await client.get("/image-edit")).text

        assert '<img id="ie-preview" alt="Selected image" src="data:image/png;base64,' in html
        assert '<img id="ie-result" alt="Edited image" src="data:image/png;base64,' in html
        assert 'download="edited-image.png">Download Image</a>' in html
        assert ">Add a retro filter</textarea>" in html
        assert "Change Image" in html

    async def test_shows_error(self, client: AsyncClient):
        await client.post("/api/image-edit/submit", json={"prompt": "Add a retro filter"})

        html = (await client.get("/image-edit")).text

        assert 'role="alert">Please upload an image and enter a prompt.</p>' in html

    async def test_shows_loading_while_edit_runs(self, app, client: AsyncClient):
        app.state.image_edit.loading = True

        html = (await client.get("/image-edit")).text

        assert '<p id="ie-loading">Generating your image...</p>' in html
        assert 'disabled>Generating...</button>' in html

    async def test_tabs_link_both_views(self, client: AsyncClient):
        editor_page = (await client.get("/image-edit")).text
        techpack_page = (await client.get("/")).text

        assert '<a href="/image-edit" aria-current="page">AI Image Editor</a>' in editor_page
        assert '<a href="/image-edit">AI Image Editor</a>' in techpack_page


class TestHealth:
    async def test_health(self, client: AsyncClient):
        """GET /health returns {"status": "ok"}."""
        response = await client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "ok"}

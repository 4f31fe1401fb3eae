"""
Techpack Renderer: Page Structure Tests

Four pages, fixed order, fixed size headers, repeated header block,
color grid padding/truncation, order grand total, escaping.
"""

import re
from dataclasses import replace

import pytest

from engine.techpack.reducer import reduce
from engine.techpack.renderer import (
    ASSORTI_SIZES,
    MEASUREMENT_SIZES,
    ORDER_SIZES,
    render,
    render_app_header,
    render_pages,
    render_pages_html,
)
from engine.techpack.seed import seed_document
from engine.techpack.types import ColorCode, RenderOptions, SetField, SetRowSize

STATIC = RenderOptions(editable=False)


@pytest.fixture
def doc():
    return seed_document()


def _header_cells(html):
    return re.findall(r"<th>([^<]*)</th>", html)


class TestPageSet:
    def test_four_pages_in_order(self, doc):
        pages = render_pages(doc)
        assert [p.kind for p in pages] == ["cover", "trims", "measurements", "order"]
        assert [p.number for p in pages] == [1, 2, 3, 4]

    def test_each_page_is_one_node(self, doc):
        for page in render_pages(doc):
            assert page.html.startswith(f'<section class="techpack-page" data-page="{page.number}"')
            assert page.html.count('class="techpack-page"') == 1
            assert page.html.rstrip().endswith("</section>")
            assert f"PAGE {page.number}" in page.html

    def test_footer_on_every_page(self, doc):
        opts = RenderOptions(footer="PROPERTY OF NOVA")
        assert all("PROPERTY OF NOVA" in p.html for p in render_pages(doc, opts))

    def test_full_document_contains_all_pages(self, doc):
        html = render(doc)
        assert html.startswith("<!DOCTYPE html>")
        assert html.count('class="techpack-page"') == 4


class TestHeaderBlock:
    def test_header_repeated_with_shared_binding(self, doc):
        pages = render_pages(doc)
        for page in pages:
            assert 'data-op="set_field" data-key="model_code"' in page.html
            assert 'value="WT44255"' in page.html
            assert "GARMENT FABRIC:" in page.html

    def test_header_identical_on_every_page(self, doc):
        headers = [re.search(r"<header.*?</header>", p.html, re.S).group(0) for p in render_pages(doc)]
        assert len(set(headers)) == 1

    def test_edit_shows_everywhere(self, doc):
        new = reduce(doc, SetField(key="garment_type", value="JOGGERS")).document
        for page in render_pages(new, STATIC):
            assert "JOGGERS" in page.html
            assert "TROUSERS" not in page.html.split("</header>")[0]


class TestCoverPage:
    def test_color_grid_has_nine_cells(self, doc):
        cover = render_pages(doc)[0].html
        assert cover.count('class="tp-color-cell"') == 9
        assert 'data-op="set_color_code" data-index="0" data-field="code"' in cover

    def test_color_grid_pads_short_collection(self, doc):
        short = replace(doc, color_codes=(ColorCode(id=1, code="A"), ColorCode(id=2, code="B")))
        cover = render_pages(short, STATIC)[0].html
        assert cover.count('class="tp-color-cell"') == 9

    def test_color_grid_truncates_long_collection(self, doc):
        long = replace(doc, color_codes=tuple(ColorCode(id=i, code=f"C{i}") for i in range(1, 13)))
        cover = render_pages(long, STATIC)[0].html
        assert cover.count('class="tp-color-cell"') == 9
        assert "C9" in cover
        assert "C10" not in cover

    def test_image_slots(self, doc):
        url = "data:image/png;base64,AAAA"
        with_photo = reduce(doc, SetField(key="product_photo", value=url)).document
        cover = render_pages(with_photo)[0].html
        assert f'<img src="{url}"' in cover
        assert 'data-clear-slot="product_photo"' in cover
        assert 'data-slot="technical_drawing_front"' in cover
        assert 'data-slot="fabric_sample"' in cover

    def test_non_image_urls_not_emitted(self, doc):
        bad = reduce(doc, SetField(key="product_photo", value="javascript:alert(1)")).document
        cover = render_pages(bad)[0].html
        assert "javascript:" not in cover

    def test_sections(self, doc):
        cover = render_pages(doc, STATIC)[0].html
        for title in ("BRAND", "DESCRIPTION", "FABRIC", "FABRIC SAMPLE", "SEWING MAPS:"):
            assert f"<h3>{title}</h3>" in cover
        assert "Elastic waistband with functional drawcord" in cover


class TestTrimsPage:
    def test_image_sections_and_table(self, doc):
        trims = render_pages(doc)[1].html
        for slot in ("woven_label", "wash_care_label", "card_label", "print_aplique_info", "packaging_info"):
            assert f'data-slot="{slot}"' in trims
        assert "ASSORTI PACK TYPE" in trims
        assert _header_cells(trims)[-7:] == ["COLORWAYS", *ASSORTI_SIZES]

    def test_assorti_zero_shows_blank(self, doc):
        trims = render_pages(doc)[1].html
        assert 'value="2" data-op="set_row_size" data-collection="assorti_pack" data-index="0" data-size="S"' in trims
        assert 'value="" data-op="set_row_size" data-collection="assorti_pack" data-index="1" data-size="S"' in trims


class TestMeasurementsPage:
    def test_header_and_rows(self, doc):
        page = render_pages(doc)[2].html
        assert "MEASUREMENTS CHART" in page
        assert "ALL MEASUREMENTS ARE IN CM" in page
        assert _header_cells(page)[-8:] == list(MEASUREMENT_SIZES)
        assert page.count('class="tp-point"') == 17

    def test_every_cell_editable(self, doc):
        page = render_pages(doc)[2].html
        assert page.count('data-collection="measurements"') == 17 * (2 + len(MEASUREMENT_SIZES))


class TestOrderPage:
    def test_header(self, doc):
        page = render_pages(doc)[3].html
        assert "TOTAL ORDER TABLE" in page
        assert _header_cells(page)[-9:] == ["COLORWAYS", *ORDER_SIZES, "TOTAL"]

    def test_totals(self, doc):
        page = render_pages(doc)[3].html
        assert '<td class="tp-total">1440</td>' in page
        assert '<td class="tp-grand-total">1440</td>' in page
        assert f'colspan="{len(ORDER_SIZES) + 1}"' in page

    def test_grand_total_follows_edits(self, doc):
        new = reduce(doc, SetRowSize(collection="order_quantities", index=0, size="3XL", value="60")).document
        new = reduce(new, SetRowSize(collection="order_quantities", index=2, size="M", value="40")).document
        page = render_pages(new)[3].html
        assert '<td class="tp-total">1500</td>' in page
        assert '<td class="tp-total">40</td>' in page
        assert '<td class="tp-grand-total">1540</td>' in page

    def test_missing_order_cell_shows_zero(self, doc):
        page = render_pages(doc)[3].html
        assert 'value="0" data-op="set_row_size" data-collection="order_quantities" data-index="1"' in page


class TestModes:
    def test_static_mode_has_no_inputs(self, doc):
        html = render_pages_html(doc, STATIC)
        assert "<input" not in html
        assert "<textarea" not in html
        assert "data-op=" not in html

    def test_static_full_render_has_no_toolbar_or_script(self, doc):
        html = render(doc, STATIC, share_available=True)
        assert "tp-toolbar" not in html.split("</style>")[1]
        assert "<script>" not in html

    def test_editable_render_links_both_views(self, doc):
        html = render(doc)
        assert "Fashion Techpack Generator" in html
        assert '<a href="/" aria-current="page">Techpack</a>' in html
        assert '<a href="/image-edit">AI Image Editor</a>' in html

    def test_static_render_has_no_tabs(self, doc):
        html = render(doc, STATIC)
        assert "tp-tabs" not in html.split("</style>")[1]
        assert 'href="/image-edit"' not in html

    def test_app_header_marks_active_tab(self):
        header = render_app_header("/image-edit")
        assert '<a href="/image-edit" aria-current="page">AI Image Editor</a>' in header
        assert '<a href="/">Techpack</a>' in header

    def test_share_button_gated(self, doc):
        assert 'data-action="share"' not in render(doc)
        assert 'data-action="share"' in render(doc, share_available=True)
        assert 'data-action="download"' in render(doc)

    def test_user_content_escaped(self, doc):
        hostile = reduce(doc, SetField(key="description", value='<script>alert("x")</script>')).document
        for opts in (RenderOptions(), STATIC):
            html = render_pages_html(hostile, opts)
            assert "<script>alert" not in html
            assert "&lt;script&gt;" in html

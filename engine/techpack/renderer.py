"""
Techpack Engine: Page Renderer

Pure function: (document, options) → four fixed-layout HTML pages
No IO. Deterministic: same input → same output, always.

Pages, in order:
  1. cover:        drawings, photo, text sections, 3×3 color grid, sewing maps
  2. trims:        label/packaging image slots + assorti pack table
  3. measurements: measurements chart
  4. order:        total order table with grand total

Every page repeats the same header partial bound to the shared header
fields, so editing any copy edits the one field behind all of them.

In editable mode fields render as inputs whose data-* attributes describe
the action to post back; in static mode (export) they render as text.
"""

from __future__ import annotations

from html import escape as _html_escape
from typing import Any

import chevron

from engine.techpack.reducer import grand_total
from engine.techpack.types import RenderedPage, RenderOptions, TechpackDocument

# ---------------------------------------------------------------------------
# Layout constants
# ---------------------------------------------------------------------------

PAGE_WIDTH = 842
PAGE_HEIGHT = 1191

COLOR_GRID_CELLS = 9
MEASUREMENT_SIZES: tuple[str, ...] = ("XS", "S", "M", "L", "XL", "2XL", "3XL", "4XL")
ASSORTI_SIZES: tuple[str, ...] = ("S", "M", "L", "XL", "2XL", "3XL")
ORDER_SIZES: tuple[str, ...] = ("XS", "S", "M", "L", "XL", "2XL", "3XL")

PAGE_KINDS: tuple[str, ...] = ("cover", "trims", "measurements", "order")

APP_TITLE = "Fashion Techpack Generator"

# (label, path) of each view of the app; the editable render links them as tabs.
APP_TABS: tuple[tuple[str, str], ...] = (
    ("Techpack", "/"),
    ("AI Image Editor", "/image-edit"),
)

TRIM_IMAGE_SECTIONS: tuple[tuple[str, str], ...] = (
    ("WOVEN LABEL/ TRANSFER NECK PRINT", "woven_label"),
    ("WASH CARE LABEL", "wash_care_label"),
    ("CARD LABEL", "card_label"),
    ("PRINT&APLIQUE INFO", "print_aplique_info"),
    ("PACKAGING INFO", "packaging_info"),
)

# ---------------------------------------------------------------------------
# Templates (Mustache)
# ---------------------------------------------------------------------------

APP_HEADER_TEMPLATE = """<header class="tp-app-header">
  <h1>{{title}}</h1>
  <nav class="tp-tabs">{{#tabs}}<a href="{{path}}"{{#active}} aria-current="page"{{/active}}>{{label}}</a>{{/tabs}}</nav>
</header>"""

HEADER_PARTIAL = """<header class="tp-header">
  <div class="tp-brand">{{{brand}}}</div>
  <table class="tp-header-table">
    <thead>
      <tr><th>CATEGORY:</th><th>GARMENT TYPE:</th><th>GARMENT FABRIC:</th><th>MODEL CODE:</th></tr>
    </thead>
    <tbody>
      <tr><td>{{{category}}}</td><td>{{{garment_type}}}</td><td>{{{garment_fabric}}}</td><td>{{{model_code}}}</td></tr>
      <tr class="tp-head-row"><th colspan="2">SIZES:</th><th colspan="2">COLORS:</th></tr>
      <tr><td colspan="2">{{{sizes}}}</td><td colspan="2">{{{colors}}}</td></tr>
    </tbody>
  </table>
</header>"""

PAGE_TEMPLATE = """<section class="techpack-page" data-page="{{number}}" data-kind="{{kind}}">
{{#header}}{{> header}}{{/header}}
{{{body}}}
<div class="tp-page-number">PAGE {{number}}</div>
<div class="tp-copyright">{{footer}}</div>
</section>"""

SECTION_LIST = """{{#sections}}<div class="tp-section">
  <h3>{{title}}</h3>
  <div class="tp-section-body">{{{content}}}</div>
</div>
{{/sections}}"""

COVER_TEMPLATE = """<main class="tp-cover">
  <div class="tp-col tp-drawing">{{{technical_drawing_front}}}</div>
  <div class="tp-col">
    <div class="tp-photo">{{{product_photo}}}</div>
    <div class="tp-grid-2">
""" + SECTION_LIST + """    </div>
  </div>
  <div class="tp-col">
    <div class="tp-color-grid">
{{#color_cells}}      <div class="tp-color-cell"><div class="tp-color-id">{{id}}</div>{{{code}}}{{{tcx}}}</div>
{{/color_cells}}    </div>
    <div class="tp-section tp-sewing">
      <h3>SEWING MAPS:</h3>
      <div class="tp-section-body">{{{sewing_maps}}}</div>
    </div>
  </div>
</main>"""

SIZE_HEADER = "{{#size_labels}}<th>{{label}}</th>{{/size_labels}}"
SIZE_CELLS = "{{#cells}}<td>{{{html}}}</td>{{/cells}}"

TRIMS_TEMPLATE = """<main class="tp-trims">
""" + SECTION_LIST + """<div class="tp-section">
  <h3>ASSORTI PACK TYPE</h3>
  <div class="tp-section-body">
    <table class="tp-table">
      <thead><tr><th>COLORWAYS</th>""" + SIZE_HEADER + """</tr></thead>
      <tbody>
{{#rows}}        <tr><td>{{{colorway}}}</td>""" + SIZE_CELLS + """</tr>
{{/rows}}      </tbody>
    </table>
  </div>
</div>
</main>"""

MEASUREMENTS_TEMPLATE = """<h2 class="tp-title">MEASUREMENTS CHART</h2>
<p class="tp-note">ALL MEASUREMENTS ARE IN CM</p>
<table class="tp-table tp-measurements">
  <thead>
    <tr><th></th><th>POINTS OF MEASUREMENTS</th><th>TOLERANCE (+/-)</th>""" + SIZE_HEADER + """</tr>
  </thead>
  <tbody>
{{#rows}}    <tr><td class="tp-point">{{point}}</td><td>{{{description}}}</td><td>{{{tolerance}}}</td>""" + SIZE_CELLS + """</tr>
{{/rows}}  </tbody>
</table>"""

ORDER_TEMPLATE = """<h2 class="tp-title">TOTAL ORDER TABLE</h2>
<table class="tp-table tp-order">
  <thead>
    <tr><th>COLORWAYS</th>""" + SIZE_HEADER + """<th>TOTAL</th></tr>
  </thead>
  <tbody>
{{#rows}}    <tr><td>{{{colorway}}}</td>""" + SIZE_CELLS + """<td class="tp-total">{{total}}</td></tr>
{{/rows}}  </tbody>
  <tfoot>
    <tr><td colspan="{{label_span}}" class="tp-total-label">TOTAL</td><td class="tp-grand-total">{{grand_total}}</td></tr>
  </tfoot>
</table>"""

BASE_CSS = """
*, *::before, *::after { box-sizing: border-box; margin: 0; padding: 0; }
body { font-family: Helvetica, Arial, sans-serif; background: #f3f4f6; color: #111; }
.tp-app-header { display: flex; align-items: center; justify-content: space-between; padding: 12px 24px;
  background: #111827; color: #fff; }
.tp-app-header h1 { font-size: 18px; font-weight: 700; }
.tp-tabs { display: flex; gap: 4px; }
.tp-tabs a { padding: 6px 14px; border-radius: 6px; color: #d1d5db; text-decoration: none; }
.tp-tabs a[aria-current="page"] { background: #fff; color: #111827; font-weight: 600; }
.tp-toolbar { position: sticky; top: 0; z-index: 10; display: flex; gap: 8px; justify-content: flex-end;
  padding: 12px 24px; background: #fff; box-shadow: 0 1px 4px rgba(0,0,0,.1); }
.tp-toolbar button { padding: 8px 16px; border: 0; border-radius: 6px; color: #fff; background: #2563eb; cursor: pointer; }
.tp-toolbar button[data-action="share"] { background: #16a34a; }
.tp-toolbar button:disabled { opacity: .5; cursor: not-allowed; }
#techpack-pages { display: flex; flex-direction: column; gap: 32px; padding: 32px 0; }
.techpack-page { position: relative; width: 842px; height: 1191px; margin: 0 auto; padding: 24px;
  background: #fff; font-size: 12px; overflow: hidden; }
.tp-header { display: flex; justify-content: space-between; align-items: flex-start;
  border-bottom: 2px solid #000; padding-bottom: 8px; margin-bottom: 16px; }
.tp-brand { font-size: 48px; font-weight: 900; letter-spacing: .05em; width: 200px; }
.tp-header-table { width: 50%; border-collapse: collapse; }
.tp-header-table th, .tp-header-table td, .tp-table th, .tp-table td { border: 1px solid #000; padding: 2px; text-align: center; }
.tp-header-table th, .tp-table thead, .tp-table tfoot, .tp-head-row { background: #f3f4f6; font-weight: 700; }
.tp-field { width: 100%; background: transparent; border: 1px solid transparent; padding: 2px; font: inherit; text-align: inherit; resize: none; }
.tp-field:hover { border-color: #d1d5db; }
.tp-field:focus { outline: none; border-color: #60a5fa; background: #fff; }
.tp-text { display: block; min-height: 1em; }
.tp-multiline { white-space: pre-wrap; }
.tp-cover { display: grid; grid-template-columns: 6fr 3fr 3fr; gap: 16px; height: calc(100% - 7rem); }
.tp-col { display: flex; flex-direction: column; gap: 8px; }
.tp-drawing, .tp-photo { border: 1px solid #000; }
.tp-photo { flex-grow: 1; }
.tp-grid-2 { display: grid; grid-template-columns: 1fr 1fr; gap: 8px; }
.tp-trims { display: grid; grid-template-columns: repeat(3, 1fr); gap: 16px; height: calc(100% - 7rem); }
.tp-section { border: 1px solid #000; display: flex; flex-direction: column; }
.tp-section h3 { background: #f3f4f6; border-bottom: 1px solid #000; font-size: 10px; text-align: center;
  text-transform: uppercase; letter-spacing: .05em; padding: 1px 8px; }
.tp-section-body { padding: 4px; flex-grow: 1; }
.tp-sewing { flex-grow: 1; font-size: 10px; }
.tp-color-grid { display: grid; grid-template-columns: repeat(3, 1fr); gap: 4px; border: 1px solid #000; padding: 4px; }
.tp-color-cell { border: 1px solid #000; text-align: center; font-size: 9px; min-height: 48px; }
.tp-color-id { background: #f3f4f6; border-bottom: 1px solid #000; font-weight: 700; }
.tp-image { position: relative; display: flex; align-items: center; justify-content: center; width: 100%;
  height: 100%; min-height: 120px; color: #6b7280; }
.tp-image img { max-width: 100%; max-height: 100%; object-fit: contain; padding: 8px; }
.tp-image input[type=file] { position: absolute; inset: 0; opacity: 0; cursor: pointer; }
.tp-image .tp-clear { position: absolute; top: 8px; right: 8px; z-index: 2; width: 24px; height: 24px;
  border: 0; border-radius: 50%; background: #ef4444; color: #fff; font-weight: 700; cursor: pointer; }
.tp-title { font-size: 20px; font-weight: 700; text-align: center; margin: 8px 0; }
.tp-note { text-align: right; font-size: 10px; margin: 4px 0; }
.tp-table { width: 100%; border-collapse: collapse; }
.tp-order { width: 75%; margin: 32px auto 0; }
.tp-point, .tp-total, .tp-grand-total { font-weight: 700; }
.tp-total-label { text-align: right; }
.tp-page-number { position: absolute; bottom: 16px; right: 24px; color: #9ca3af; font-size: 10px; font-weight: 600; }
.tp-copyright { position: absolute; bottom: 16px; left: 24px; color: #9ca3af; font-size: 10px; }
"""

EDITOR_JS = """
(function () {
  const pages = document.getElementById("techpack-pages");

  async function refresh() {
    const res = await fetch("/api/techpack/pages");
    pages.innerHTML = await res.text();
  }

  function actionFor(el) {
    const d = el.dataset;
    const action = { op: d.op, value: el.value };
    if (d.key) action.key = d.key;
    if (d.collection) action.collection = d.collection;
    if (d.index !== undefined) action.index = Number(d.index);
    if (d.field) action.field = d.field;
    if (d.size) action.size = d.size;
    return action;
  }

  pages.addEventListener("change", async (event) => {
    const el = event.target;
    if (el.type === "file" && el.dataset.slot && el.files.length) {
      const body = new FormData();
      body.append("file", el.files[0]);
      await fetch(`/api/techpack/images/${el.dataset.slot}`, { method: "PUT", body });
      return refresh();
    }
    if (!el.dataset.op) return;
    await fetch("/api/techpack/actions", {
      method: "POST",
      headers: { "Content-Type": "application/json" },
      body: JSON.stringify(actionFor(el)),
    });
    return refresh();
  });

  pages.addEventListener("click", async (event) => {
    const slot = event.target.dataset.clearSlot;
    if (!slot) return;
    event.stopPropagation();
    await fetch(`/api/techpack/images/${slot}`, { method: "DELETE" });
    return refresh();
  });

  function saveBlob(blob, name) {
    const a = document.createElement("a");
    a.href = URL.createObjectURL(blob);
    a.download = name;
    a.click();
    URL.revokeObjectURL(a.href);
  }

  const buttons = document.querySelectorAll(".tp-toolbar button");
  buttons.forEach((button) => {
    button.addEventListener("click", async () => {
      const label = button.textContent;
      buttons.forEach((b) => (b.disabled = true));
      button.textContent = button.dataset.busy;
      try {
        const res = await fetch(`/api/export/${button.dataset.action}`, { method: "POST" });
        const type = res.headers.get("content-type") || "";
        if (res.ok && type.startsWith("application/pdf")) {
          saveBlob(await res.blob(), "Techpack.pdf");
        } else if (res.ok && type.startsWith("application/json")) {
          const data = await res.json();
          if (data.url) window.open(data.url, "_blank");
        }
      } finally {
        button.textContent = label;
        buttons.forEach((b) => (b.disabled = false));
      }
    });
  });
})();
"""


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def render(
    document: TechpackDocument,
    options: RenderOptions | None = None,
    share_available: bool = False,
) -> str:
    """
    Render a complete HTML file holding all four pages.
    In editable mode also includes the export toolbar and editor script.
    Pure function. No side effects. No IO.
    """
    opts = options or RenderOptions()

    parts: list[str] = []
    parts.append("<!DOCTYPE html>")
    parts.append('<html lang="en">')
    parts.append("<head>")
    parts.append('  <meta charset="utf-8">')
    parts.append('  <meta name="viewport" content="width=device-width, initial-scale=1">')
    parts.append(f"  <title>{escape(document.model_code or 'Techpack')} | Techpack</title>")
    parts.append("  <style>")
    parts.append(BASE_CSS)
    parts.append("  </style>")
    parts.append("</head>")
    parts.append("<body>")

    if opts.editable:
        parts.append(render_app_header("/"))
        parts.append('  <nav class="tp-toolbar">')
        parts.append('    <button type="button" data-action="download" data-busy="Generating...">Download PDF</button>')
        if share_available:
            parts.append('    <button type="button" data-action="share" data-busy="Preparing...">Share</button>')
        parts.append("  </nav>")

    parts.append('  <div id="techpack-pages">')
    parts.append(render_pages_html(document, opts))
    parts.append("  </div>")

    if opts.editable:
        parts.append(f"  <script>{EDITOR_JS}</script>")

    parts.append("</body>")
    parts.append("</html>")

    return "\n".join(parts)


def render_app_header(active_path: str) -> str:
    """App title and view tabs; the tab at `active_path` is marked current."""
    tabs = [{"label": label, "path": path, "active": path == active_path} for label, path in APP_TABS]
    return chevron.render(APP_HEADER_TEMPLATE, {"title": APP_TITLE, "tabs": tabs})


def render_pages_html(document: TechpackDocument, options: RenderOptions | None = None) -> str:
    """All page nodes concatenated, without the surrounding HTML document."""
    return "\n".join(page.html for page in render_pages(document, options))


def render_pages(document: TechpackDocument, options: RenderOptions | None = None) -> list[RenderedPage]:
    """
    Render the four techpack pages in order.
    Pure function. No side effects. No IO.
    """
    opts = options or RenderOptions()
    header = _header_context(document, opts)

    bodies = (
        chevron.render(COVER_TEMPLATE, _cover_context(document, opts)),
        chevron.render(TRIMS_TEMPLATE, _trims_context(document, opts)),
        chevron.render(MEASUREMENTS_TEMPLATE, _measurements_context(document, opts)),
        chevron.render(ORDER_TEMPLATE, _order_context(document, opts)),
    )

    pages: list[RenderedPage] = []
    for number, (kind, body) in enumerate(zip(PAGE_KINDS, bodies), start=1):
        html = chevron.render(
            PAGE_TEMPLATE,
            {"number": number, "kind": kind, "header": header, "body": body, "footer": opts.footer},
            partials_dict={"header": HEADER_PARTIAL},
        )
        pages.append(RenderedPage(number=number, kind=kind, html=html))
    return pages


def escape(text: str) -> str:
    """HTML-escape user content."""
    return _html_escape(str(text), quote=True)


# ---------------------------------------------------------------------------
# Field rendering
# ---------------------------------------------------------------------------


def _attrs(data: dict[str, Any]) -> str:
    return " ".join(f'data-{k}="{escape(v)}"' for k, v in data.items())


def _text_field(value: Any, data: dict[str, Any], opts: RenderOptions, multiline: bool = False) -> str:
    """An input bound to one action, or plain text when not editable."""
    text = "" if value is None else str(value)
    if not opts.editable:
        css = "tp-text tp-multiline" if multiline else "tp-text"
        return f'<span class="{css}">{escape(text)}</span>'
    if multiline:
        rows = max(1, text.count("\n") + 1)
        return f'<textarea class="tp-field" rows="{rows}" {_attrs(data)}>{escape(text)}</textarea>'
    return f'<input type="text" class="tp-field" value="{escape(text)}" {_attrs(data)}>'


def _scalar(document: TechpackDocument, key: str, opts: RenderOptions, multiline: bool = False) -> str:
    return _text_field(getattr(document, key), {"op": "set_field", "key": key}, opts, multiline)


def _image_slot(document: TechpackDocument, slot: str, opts: RenderOptions) -> str:
    """An image slot; only data:image URLs are ever emitted as sources."""
    value = getattr(document, slot)
    has_image = isinstance(value, str) and value.startswith("data:image/")

    parts = [f'<div class="tp-image" data-slot-view="{slot}">']
    if has_image:
        parts.append(f'<img src="{escape(value)}" alt="{slot}">')
    if opts.editable:
        if has_image:
            parts.append(f'<button type="button" class="tp-clear" data-clear-slot="{slot}" title="Clear image">X</button>')
        else:
            parts.append('<span class="tp-upload">Click to upload</span>')
        parts.append(f'<input type="file" accept="image/*" data-slot="{slot}">')
    parts.append("</div>")
    return "".join(parts)


def _cell_display(value: Any, zero_as_blank: bool) -> str:
    """What a size cell shows: missing or empty values as blank or '0'."""
    if value is None or value == "" or (value == 0 and not isinstance(value, str)):
        return "" if zero_as_blank else "0"
    return str(value)


def _size_cells(
    collection: str,
    index: int,
    sizes: dict[str, Any],
    labels: tuple[str, ...],
    opts: RenderOptions,
    zero_as_blank: bool,
) -> list[dict[str, str]]:
    return [
        {
            "html": _text_field(
                _cell_display(sizes.get(label), zero_as_blank),
                {"op": "set_row_size", "collection": collection, "index": index, "size": label},
                opts,
            )
        }
        for label in labels
    ]


def _row_field(collection: str, index: int, field: str, value: str, opts: RenderOptions) -> str:
    return _text_field(value, {"op": "set_row_field", "collection": collection, "index": index, "field": field}, opts)


# ---------------------------------------------------------------------------
# Page contexts
# ---------------------------------------------------------------------------


def _header_context(document: TechpackDocument, opts: RenderOptions) -> dict[str, str]:
    keys = ("brand", "category", "garment_type", "garment_fabric", "model_code", "sizes", "colors")
    return {key: _scalar(document, key, opts) for key in keys}


def _cover_context(document: TechpackDocument, opts: RenderOptions) -> dict[str, Any]:
    color_cells: list[dict[str, Any]] = []
    for index, color in enumerate(document.color_codes[:COLOR_GRID_CELLS]):
        color_cells.append(
            {
                "id": str(color.id),
                "code": _text_field(color.code, {"op": "set_color_code", "index": index, "field": "code"}, opts),
                "tcx": _text_field(color.tcx, {"op": "set_color_code", "index": index, "field": "tcx"}, opts),
            }
        )
    while len(color_cells) < COLOR_GRID_CELLS:
        color_cells.append({"id": "", "code": "", "tcx": ""})

    return {
        "technical_drawing_front": _image_slot(document, "technical_drawing_front", opts),
        "product_photo": _image_slot(document, "product_photo", opts),
        "sections": [
            {"title": "BRAND", "content": _scalar(document, "brand", opts, multiline=True)},
            {"title": "DESCRIPTION", "content": _scalar(document, "description", opts, multiline=True)},
            {"title": "FABRIC", "content": _scalar(document, "fabric_info", opts, multiline=True)},
            {"title": "FABRIC SAMPLE", "content": _image_slot(document, "fabric_sample", opts)},
        ],
        "color_cells": color_cells,
        "sewing_maps": _scalar(document, "sewing_maps", opts, multiline=True),
    }


def _trims_context(document: TechpackDocument, opts: RenderOptions) -> dict[str, Any]:
    return {
        "sections": [
            {"title": title, "content": _image_slot(document, slot, opts)} for title, slot in TRIM_IMAGE_SECTIONS
        ],
        "size_labels": [{"label": s} for s in ASSORTI_SIZES],
        "rows": [
            {
                "colorway": _row_field("assorti_pack", i, "colorway", row.colorway, opts),
                "cells": _size_cells("assorti_pack", i, row.sizes, ASSORTI_SIZES, opts, zero_as_blank=True),
            }
            for i, row in enumerate(document.assorti_pack)
        ],
    }


def _measurements_context(document: TechpackDocument, opts: RenderOptions) -> dict[str, Any]:
    return {
        "size_labels": [{"label": s} for s in MEASUREMENT_SIZES],
        "rows": [
            {
                "point": row.point,
                "description": _row_field("measurements", i, "description", row.description, opts),
                "tolerance": _row_field("measurements", i, "tolerance", row.tolerance, opts),
                "cells": _size_cells("measurements", i, row.sizes, MEASUREMENT_SIZES, opts, zero_as_blank=True),
            }
            for i, row in enumerate(document.measurements)
        ],
    }


def _order_context(document: TechpackDocument, opts: RenderOptions) -> dict[str, Any]:
    return {
        "size_labels": [{"label": s} for s in ORDER_SIZES],
        "rows": [
            {
                "colorway": _row_field("order_quantities", i, "colorway", row.colorway, opts),
                "cells": _size_cells("order_quantities", i, row.sizes, ORDER_SIZES, opts, zero_as_blank=False),
                "total": str(row.total),
            }
            for i, row in enumerate(document.order_quantities)
        ],
        "label_span": len(ORDER_SIZES) + 1,
        "grand_total": str(grand_total(document)),
    }

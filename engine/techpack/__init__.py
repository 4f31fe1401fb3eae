"""
Techpack Engine: the pure core.

Three components:
  reducer:  (document, action) → document  (pure, deterministic)
  store:    owns the session's current snapshot, dispatches actions
  renderer: (document, options) → four fixed-layout HTML pages

Helpers:
  seed_document, parse_quantity, row_total, grand_total
"""

from engine.techpack.reducer import grand_total, parse_quantity, reduce, reduce_all, row_total
from engine.techpack.renderer import render, render_pages, render_pages_html
from engine.techpack.seed import seed_document
from engine.techpack.store import DocumentStore

__all__ = [
    "reduce",
    "reduce_all",
    "parse_quantity",
    "row_total",
    "grand_total",
    "render",
    "render_pages",
    "render_pages_html",
    "seed_document",
    "DocumentStore",
]

#!/usr/bin/env python3
"""
Export a techpack to PDF without running the server.

Usage:
    python scripts/export_techpack.py [output.pdf] [document.json]

Writes Techpack.pdf in the current directory by default. If a document
JSON file is given (the `document` object from GET /api/techpack), that
document is exported; otherwise the seed document is.
"""

import asyncio
import json
import logging
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, ".")

from backend.config import settings
from backend.services.exporter import PDF_FILENAME, generate_pdf
from backend.services.rasterizer import PlaywrightRasterizer
from engine.techpack.renderer import render
from engine.techpack.seed import seed_document
from engine.techpack.types import RenderOptions, TechpackDocument


async def main(output: Path, source: Path | None) -> int:
    document = TechpackDocument.from_dict(json.loads(source.read_text())) if source else seed_document()
    html = render(document, RenderOptions(editable=False, footer=settings.COPYRIGHT_FOOTER))

    doc = await generate_pdf(html, PlaywrightRasterizer())
    if doc is None:
        print("No pages rendered, nothing written")
        return 1

    doc.to_file(output)
    print(f"Wrote {doc.page_count} pages to {output}")
    return 0


if __name__ == "__main__":
    logging.basicConfig(level=settings.LOG_LEVEL)
    out = Path(sys.argv[1]) if len(sys.argv) > 1 else Path(PDF_FILENAME)
    src = Path(sys.argv[2]) if len(sys.argv) > 2 else None
    sys.exit(asyncio.run(main(out, src)))

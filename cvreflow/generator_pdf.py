"""
Render a CvRecord to PDF bytes with reportlab.

The layout engine decides positions; this module only measures text and
replays the resulting instructions on a canvas.
"""
from __future__ import annotations
import io, logging
from pathlib import Path
from typing import List

from reportlab.lib.pagesizes import A4
from reportlab.lib.units import mm
from reportlab.lib.utils import simpleSplit
from reportlab.pdfgen import canvas

from cvreflow.config import OUTPUT_FILENAME
from cvreflow.layout import LayoutEngine, PageBreak, TextWrapper
from cvreflow.schema_resume import CvRecord

logger = logging.getLogger(__name__)

FONTS = {
    "normal": "Helvetica",
    "bold": "Helvetica-Bold",
    "italic": "Helvetica-Oblique",
}


def measure_lines(text: str, width: float, font_style: str = "normal", font_size: float = 10) -> List[str]:
    """Wrap ``text`` to ``width`` millimetres in the given font."""
    return simpleSplit(text, FONTS[font_style], font_size, width * mm)


def emit(record: CvRecord, wrap: TextWrapper = measure_lines) -> bytes:
    instructions = LayoutEngine(wrap, page_width=A4[0] / mm).layout(record)

    buf = io.BytesIO()
    pdf = canvas.Canvas(buf, pagesize=A4)
    page_height = A4[1]
    pages = 1
    for item in instructions:
        if isinstance(item, PageBreak):
            pdf.showPage()
            pages += 1
            continue
        pdf.setFont(FONTS[item.font_style], item.font_size)
        pdf.drawString(item.x * mm, page_height - item.y * mm, item.text)
    pdf.save()

    logger.info(f"Emitted CV PDF: {pages} page(s), {len(instructions)} instructions")
    return buf.getvalue()


def save(record: CvRecord, path: str | Path = OUTPUT_FILENAME) -> Path:
    path = Path(path)
    path.write_bytes(emit(record))
    return path

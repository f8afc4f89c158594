"""
PDF ➜ page images
– renders every page at a fixed magnification (RENDER_SCALE × 72 dpi)
– keeps page order: index 1..N, exactly as in the document
– suppresses verbose CropBox warnings from pdfplumber/pdfminer
"""
from __future__ import annotations
import base64, io, logging, warnings
from dataclasses import dataclass
from typing import Iterator, List

import pdfplumber

from cvreflow.config import RENDER_SCALE
from cvreflow.errors import DocumentParseError

# silence noisy PDF logging
logging.getLogger("pdfplumber").setLevel(logging.ERROR)
logging.getLogger("pdfminer").setLevel(logging.ERROR)
warnings.filterwarnings("ignore", category=UserWarning, module="pdfminer")

logger = logging.getLogger(__name__)

_PDF_DPI = 72


@dataclass(frozen=True)
class PageImage:
    """One rendered page. ``index`` starts at 1."""
    index: int
    width: int
    height: int
    data: bytes
    mime_type: str = "image/png"

    @property
    def b64(self) -> str:
        return base64.b64encode(self.data).decode("ascii")


def _render(page, index: int, scale: float) -> PageImage:
    img = page.to_image(resolution=_PDF_DPI * scale).original
    buf = io.BytesIO()
    img.save(buf, format="PNG")
    return PageImage(index=index, width=img.width, height=img.height, data=buf.getvalue())


def iter_pages(pdf_bytes: bytes, scale: float = RENDER_SCALE) -> Iterator[PageImage]:
    """Lazily render ``pdf_bytes`` page by page."""
    try:
        with pdfplumber.open(io.BytesIO(pdf_bytes)) as pdf:
            if not pdf.pages:
                raise DocumentParseError("PDF has no pages")
            for index, page in enumerate(pdf.pages, start=1):
                yield _render(page, index, scale)
    except DocumentParseError:
        raise
    except Exception as exc:
        logger.error(f"Could not render PDF: {exc}")
        raise DocumentParseError(f"Invalid PDF document: {exc}") from exc


def rasterize(pdf_bytes: bytes, scale: float = RENDER_SCALE) -> List[PageImage]:
    images = list(iter_pages(pdf_bytes, scale))
    logger.info(f"Rendered {len(images)} page(s) at {scale:g}x")
    return images

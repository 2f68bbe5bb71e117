"""Production rendering capabilities backed by PyMuPDF and mammoth."""

from __future__ import annotations

import io
import logging

from docwiki.interfaces.rendering import DocxConverter, PdfRasterizer

logger = logging.getLogger(__name__)

try:
    import fitz  # PyMuPDF
except ImportError:
    fitz = None  # type: ignore[assignment]
    logger.warning("PyMuPDF not installed, PDF rendering disabled")

try:
    import mammoth
except ImportError:
    mammoth = None  # type: ignore[assignment]
    logger.warning("mammoth not installed, DOCX conversion disabled")


class PyMuPdfDocument:
    def __init__(self, doc: fitz.Document) -> None:
        self._doc = doc

    @property
    def page_count(self) -> int:
        return self._doc.page_count

    def render_page(self, page_number: int, scale: float) -> bytes:
        page = self._doc.load_page(page_number - 1)
        pixmap = page.get_pixmap(matrix=fitz.Matrix(scale, scale))
        return pixmap.tobytes("png")

    def close(self) -> None:
        self._doc.close()


class PyMuPdfRasterizer:
    name = "pymupdf"

    def open(self, data: bytes) -> PyMuPdfDocument:
        return PyMuPdfDocument(fitz.open(stream=data, filetype="pdf"))


class MammothDocxConverter:
    name = "mammoth"

    def convert(self, data: bytes) -> str:
        result = mammoth.convert_to_html(io.BytesIO(data))
        for message in result.messages:
            logger.debug("mammoth: %s", message)
        return result.value


def default_pdf_rasterizer() -> PdfRasterizer | None:
    """Return the PyMuPDF rasterizer, or None when PyMuPDF is unavailable."""
    if fitz is None:
        return None
    return PyMuPdfRasterizer()


def default_docx_converter() -> DocxConverter | None:
    """Return the mammoth converter, or None when mammoth is unavailable."""
    if mammoth is None:
        return None
    return MammothDocxConverter()

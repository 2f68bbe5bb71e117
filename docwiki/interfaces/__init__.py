"""Capability and storage interfaces; implementations are injected."""

from docwiki.interfaces.rendering import DocxConverter, PdfDocument, PdfRasterizer
from docwiki.interfaces.storage import DocumentStore

__all__ = [
    "DocumentStore",
    "DocxConverter",
    "PdfDocument",
    "PdfRasterizer",
]

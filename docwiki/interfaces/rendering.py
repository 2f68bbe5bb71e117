"""Rendering capability interfaces for binary document formats."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class PdfDocument(Protocol):
    """An opened PDF whose pages can be rasterized one at a time."""

    @property
    def page_count(self) -> int: ...

    def render_page(self, page_number: int, scale: float) -> bytes:
        """Rasterize a 1-based page to PNG bytes at the given zoom factor."""
        ...

    def close(self) -> None: ...


@runtime_checkable
class PdfRasterizer(Protocol):
    """Opens raw PDF bytes for page rasterization."""

    name: str

    def open(self, data: bytes) -> PdfDocument: ...


@runtime_checkable
class DocxConverter(Protocol):
    """Turns raw DOCX bytes into an HTML fragment."""

    name: str

    def convert(self, data: bytes) -> str: ...

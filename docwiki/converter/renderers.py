"""Per-format renderers turning raw upload bytes into HTML fragments."""

from __future__ import annotations

import asyncio
import base64
import logging
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Protocol

from docwiki.config.models import PdfConfig
from docwiki.converter.html import markdown_to_html, pdf_page_html, text_to_html
from docwiki.converter.models import ConversionOptions
from docwiki.errors import ConversionError, RenderingCapabilityMissing, TooManyPages
from docwiki.interfaces.rendering import DocxConverter, PdfRasterizer
from docwiki.kinds import DocumentKind

logger = logging.getLogger(__name__)


class Renderer(Protocol):
    kind: DocumentKind

    async def render(self, filename: str, data: bytes, options: ConversionOptions) -> str: ...


def _decode_text(filename: str, data: bytes) -> str:
    try:
        return data.decode("utf-8-sig")
    except UnicodeDecodeError as e:
        raise ConversionError(filename, f"file is not valid UTF-8 text: {e}") from e


class PlainTextRenderer:
    kind = DocumentKind.text

    async def render(self, filename: str, data: bytes, options: ConversionOptions) -> str:
        return text_to_html(_decode_text(filename, data))


class MarkdownRenderer:
    kind = DocumentKind.markdown

    async def render(self, filename: str, data: bytes, options: ConversionOptions) -> str:
        return markdown_to_html(_decode_text(filename, data))


class DocxRenderer:
    kind = DocumentKind.docx

    def __init__(self, converter: DocxConverter | None) -> None:
        self._converter = converter

    async def render(self, filename: str, data: bytes, options: ConversionOptions) -> str:
        if self._converter is None:
            raise RenderingCapabilityMissing(filename, "docx converter")
        try:
            body = await asyncio.to_thread(self._converter.convert, data)
        except Exception as e:
            raise ConversionError(
                filename, f"docx converter '{self._converter.name}' failed: {e}"
            ) from e
        return f'<div class="{self.kind.css_class}">{body}</div>'


# ---------------------------------------------------------------------------
# PDF
# ---------------------------------------------------------------------------


class RenderSurface:
    """Drawing surface shared by consecutive page renders.

    Only one page may hold the surface at a time; releasing it clears the
    drawn image so the next page starts from a blank surface.
    """

    def __init__(self) -> None:
        self._image: bytes | None = None
        self._holder: int | None = None

    @contextmanager
    def acquire(self, page_number: int) -> Iterator[RenderSurface]:
        if self._holder is not None:
            raise RuntimeError(
                f"render surface held by page {self._holder}, cannot render page {page_number}"
            )
        self._holder = page_number
        try:
            yield self
        finally:
            self._holder = None
            self._image = None

    @property
    def in_use(self) -> bool:
        return self._holder is not None

    def draw(self, png: bytes) -> None:
        self._image = png

    def to_data_uri(self) -> str:
        if self._image is None:
            raise RuntimeError("nothing drawn on the render surface")
        return "data:image/png;base64," + base64.b64encode(self._image).decode("ascii")


class PdfRenderer:
    """Rasterizes every page and embeds it as an inline PNG.

    The page count is checked against ``max_pages`` before any page is
    rendered. Pages render strictly one after another.
    """

    kind = DocumentKind.pdf

    def __init__(self, rasterizer: PdfRasterizer | None, defaults: PdfConfig | None = None) -> None:
        self._rasterizer = rasterizer
        self._defaults = defaults or PdfConfig()
        self._surface = RenderSurface()
        self._surface_lock = asyncio.Lock()

    async def render(self, filename: str, data: bytes, options: ConversionOptions) -> str:
        if self._rasterizer is None:
            raise RenderingCapabilityMissing(filename, "pdf rasterizer")

        opts = options.pdf.resolve(self._defaults)
        try:
            document = await asyncio.to_thread(self._rasterizer.open, data)
        except Exception as e:
            raise ConversionError(
                filename, f"pdf rasterizer '{self._rasterizer.name}' could not open the file: {e}"
            ) from e

        try:
            total = document.page_count
            if total > opts.max_pages:
                raise TooManyPages(filename, total, opts.max_pages)

            parts = [f'<div class="{self.kind.css_class}">']
            for page_number in range(1, total + 1):
                if opts.on_progress is not None:
                    opts.on_progress(page_number, total)
                parts.append(await self._render_page(filename, document, page_number, opts.scale))
            parts.append("</div>")
        finally:
            document.close()

        return "\n".join(parts)

    async def _render_page(self, filename, document, page_number, scale) -> str:
        async with self._surface_lock:
            with self._surface.acquire(page_number) as surface:
                try:
                    png = await asyncio.to_thread(document.render_page, page_number, scale)
                except Exception as e:
                    raise ConversionError(
                        filename, f"failed to render page {page_number}: {e}"
                    ) from e
                surface.draw(png)
                logger.debug("rendered %s page %d (%d bytes)", filename, page_number, len(png))
                return pdf_page_html(page_number, surface.to_data_uri())

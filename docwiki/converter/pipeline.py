"""Conversion pipeline: detects an upload's format and renders it to HTML."""

from __future__ import annotations

import logging

from docwiki.config.models import ConversionConfig
from docwiki.converter.detect import accepted_extensions, detect_kind, title_from_filename
from docwiki.converter.engines import default_docx_converter, default_pdf_rasterizer
from docwiki.converter.files import SourceFile
from docwiki.converter.models import ConversionOptions, ConversionResult, DocumentKind
from docwiki.converter.renderers import (
    DocxRenderer,
    MarkdownRenderer,
    PdfRenderer,
    PlainTextRenderer,
    Renderer,
)
from docwiki.errors import ConversionError, FileTooLarge, UnsupportedFormat
from docwiki.interfaces.rendering import DocxConverter, PdfRasterizer

logger = logging.getLogger(__name__)


class ConversionPipeline:
    """Turns one uploaded file into a type-tagged HTML fragment.

    Errors are raised to the caller unchanged; deciding whether a failed
    file stops a batch is left to the caller.
    """

    def __init__(
        self,
        config: ConversionConfig,
        *,
        pdf_rasterizer: PdfRasterizer | None = None,
        docx_converter: DocxConverter | None = None,
    ) -> None:
        self._config = config
        self._plain_text = PlainTextRenderer()
        self._renderers: dict[DocumentKind, Renderer] = {
            DocumentKind.markdown: MarkdownRenderer(),
            DocumentKind.text: self._plain_text,
            DocumentKind.pdf: PdfRenderer(pdf_rasterizer, config.pdf),
            DocumentKind.docx: DocxRenderer(docx_converter),
        }

    @property
    def config(self) -> ConversionConfig:
        return self._config

    def renderer_for(self, kind: DocumentKind, *, fallback_to_text: bool = False) -> Renderer | None:
        renderer = self._renderers.get(kind)
        if renderer is None and fallback_to_text:
            return self._plain_text
        return renderer

    async def convert(
        self,
        file: SourceFile,
        options: ConversionOptions | None = None,
        *,
        fallback_to_text: bool | None = None,
    ) -> ConversionResult:
        """Convert *file* to HTML.

        Unknown formats raise UnsupportedFormat unless ``fallback_to_text``
        (default from config) asks for them to be shown as plain text.
        The size ceiling is checked before the content is read; files that
        cannot be stat'ed or read raise ConversionError.
        """
        options = options or ConversionOptions()
        if fallback_to_text is None:
            fallback_to_text = self._config.fallback_to_text

        filename = file.name
        kind = detect_kind(filename)
        renderer = self.renderer_for(kind, fallback_to_text=fallback_to_text)
        if renderer is None:
            raise UnsupportedFormat(filename, accepted_extensions())

        limit = self._config.max_file_size_bytes
        try:
            size = file.size
            if size > limit:
                raise FileTooLarge(filename, size, limit)
            data = await file.read()
        except OSError as e:
            raise ConversionError(filename, f"could not read file: {e}") from e
        html = await renderer.render(filename, data, options)

        logger.info("converted %s (%s, %d bytes)", filename, kind.value, len(html))
        return ConversionResult(
            filename=filename,
            title=title_from_filename(filename),
            kind=kind,
            html=html,
            size_bytes=size,
        )


def build_pipeline(config: ConversionConfig) -> ConversionPipeline:
    """Create a pipeline wired to the installed rendering libraries."""
    docx_converter = default_docx_converter() if config.docx.enabled else None
    return ConversionPipeline(
        config,
        pdf_rasterizer=default_pdf_rasterizer(),
        docx_converter=docx_converter,
    )

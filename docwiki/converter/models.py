"""Pydantic models for the document conversion subsystem."""

from __future__ import annotations

from collections.abc import Callable

from pydantic import BaseModel, Field

from docwiki.config.models import PdfConfig
from docwiki.kinds import DocumentKind

ProgressCallback = Callable[[int, int], None]


class PdfOptions(BaseModel):
    """Per-file PDF rendering options. Unset values fall back to config."""

    scale: float | None = Field(default=None, gt=0)
    max_pages: int | None = Field(default=None, gt=0)
    on_progress: ProgressCallback | None = None

    def resolve(self, defaults: PdfConfig) -> PdfOptions:
        return PdfOptions(
            scale=self.scale if self.scale is not None else defaults.scale,
            max_pages=self.max_pages if self.max_pages is not None else defaults.max_pages,
            on_progress=self.on_progress,
        )


class ConversionOptions(BaseModel):
    pdf: PdfOptions = Field(default_factory=PdfOptions)


class ConversionResult(BaseModel):
    """Result of converting one uploaded file to an HTML fragment."""

    filename: str
    title: str
    kind: DocumentKind
    html: str
    size_bytes: int

    @property
    def html_bytes(self) -> int:
        return len(self.html.encode("utf-8"))

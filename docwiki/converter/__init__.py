"""Document conversion subsystem: renders uploads to static HTML."""

from docwiki.converter.detect import accepted_extensions, detect_kind, title_from_filename
from docwiki.converter.files import InMemoryFile, LocalFile, SourceFile
from docwiki.converter.models import (
    ConversionOptions,
    ConversionResult,
    DocumentKind,
    PdfOptions,
)
from docwiki.converter.pipeline import ConversionPipeline, build_pipeline

__all__ = [
    "ConversionOptions",
    "ConversionPipeline",
    "ConversionResult",
    "DocumentKind",
    "InMemoryFile",
    "LocalFile",
    "PdfOptions",
    "SourceFile",
    "accepted_extensions",
    "build_pipeline",
    "detect_kind",
    "title_from_filename",
]

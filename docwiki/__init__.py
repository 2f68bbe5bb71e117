"""docwiki - converts uploaded documents to static HTML and stores them for browsing."""

from docwiki.config import DocWikiConfig, load_config
from docwiki.converter import ConversionPipeline, build_pipeline, detect_kind
from docwiki.kinds import DocumentKind
from docwiki.library import DocumentLibrary
from docwiki.sanitize import sanitize_html
from docwiki.store import SQLiteDocumentStore

__version__ = "0.1.0"

__all__ = [
    "ConversionPipeline",
    "DocWikiConfig",
    "DocumentKind",
    "DocumentLibrary",
    "SQLiteDocumentStore",
    "build_pipeline",
    "detect_kind",
    "load_config",
    "sanitize_html",
]

"""Persistence for rendered documents."""

from docwiki.store.models import Document, DocumentPayload, DocumentSummary, validate_draft
from docwiki.store.sqlite_store import SQLiteDocumentStore

__all__ = [
    "Document",
    "DocumentPayload",
    "DocumentSummary",
    "SQLiteDocumentStore",
    "validate_draft",
]

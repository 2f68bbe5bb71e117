"""Cached document list plus batch ingestion of uploads."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from enum import Enum

from pydantic import BaseModel, Field

from docwiki.converter.detect import title_from_filename
from docwiki.converter.files import SourceFile
from docwiki.converter.models import ConversionOptions, PdfOptions
from docwiki.converter.pipeline import ConversionPipeline
from docwiki.errors import ConversionError, DocumentNotFound, InvalidDocument
from docwiki.interfaces.storage import DocumentStore
from docwiki.search import filter_documents
from docwiki.store.models import Document, DocumentPayload, DocumentSummary

logger = logging.getLogger(__name__)


class IngestEventType(str, Enum):
    started = "started"
    progress = "progress"
    stored = "stored"
    failed = "failed"


class IngestEvent(BaseModel):
    """Status update for one file of a batch upload."""

    type: IngestEventType
    filename: str
    page: int | None = None
    total: int | None = None
    document_id: int | None = None
    message: str | None = None


class IngestFailure(BaseModel):
    filename: str
    message: str


class IngestReport(BaseModel):
    created: list[Document] = Field(default_factory=list)
    failures: list[IngestFailure] = Field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures


EventCallback = Callable[[IngestEvent], None]


class DocumentLibrary:
    """In-memory view of the store with explicit refresh points.

    ``documents`` is reloaded from the store by :meth:`refresh`, which runs
    after every ingest, delete and clear. Nothing else mutates it.
    """

    def __init__(self, store: DocumentStore, pipeline: ConversionPipeline) -> None:
        self._store = store
        self._pipeline = pipeline
        self.documents: list[DocumentSummary] = []
        self.active_id: int | None = None

    def refresh(self) -> list[DocumentSummary]:
        self.documents = self._store.list()
        return self.documents

    def search(self, query: str | None) -> list[DocumentSummary]:
        return filter_documents(self.documents, query)

    def stats(self) -> dict[str, int]:
        """Stored document counts per kind, read from the store."""
        return self._store.stats()

    def open(self, doc_id: int) -> Document:
        doc = self._store.get(doc_id)
        self.active_id = doc.id
        return doc

    async def ingest(
        self, files: Iterable[SourceFile], on_event: EventCallback | None = None
    ) -> IngestReport:
        """Convert and store each file in turn.

        A file that fails conversion or validation is reported and skipped;
        the remaining files are still processed. Storage failures abort the
        batch.
        """
        emit = on_event or (lambda event: None)
        report = IngestReport()

        try:
            for file in files:
                doc = await self._ingest_one(file, report, emit)
                if doc is not None:
                    report.created.append(doc)
        finally:
            if report.created:
                self.active_id = report.created[-1].id
            self.refresh()

        logger.info(
            "ingested %d file(s), %d failed", len(report.created), len(report.failures)
        )
        return report

    async def _ingest_one(
        self, file: SourceFile, report: IngestReport, emit: EventCallback
    ) -> Document | None:
        name = file.name
        emit(IngestEvent(type=IngestEventType.started, filename=name))

        options = ConversionOptions(
            pdf=PdfOptions(
                on_progress=lambda page, total: emit(
                    IngestEvent(type=IngestEventType.progress, filename=name, page=page, total=total)
                )
            )
        )

        try:
            result = await self._pipeline.convert(file, options, fallback_to_text=False)
            payload = DocumentPayload(
                title=title_from_filename(name),
                kind=result.kind.value,
                html=result.html,
                size_bytes=result.size_bytes,
                original_name=name,
            )
            doc = self._store.create_from_payload(payload)
        except (ConversionError, InvalidDocument) as e:
            logger.warning("skipping %s: %s", name, e.public_message)
            report.failures.append(IngestFailure(filename=name, message=e.public_message))
            emit(IngestEvent(type=IngestEventType.failed, filename=name, message=e.public_message))
            return None

        emit(IngestEvent(type=IngestEventType.stored, filename=name, document_id=doc.id))
        return doc

    def delete(self, doc_id: int) -> None:
        self._store.delete(doc_id)
        if self.active_id == doc_id:
            self.active_id = None
        self.refresh()

    def clear(self) -> int:
        """Delete every cached document. Returns how many were removed."""
        removed = 0
        for summary in list(self.documents):
            try:
                self._store.delete(summary.id)
            except DocumentNotFound:
                logger.debug("document %d already gone", summary.id)
                continue
            removed += 1
        self.active_id = None
        self.refresh()
        return removed

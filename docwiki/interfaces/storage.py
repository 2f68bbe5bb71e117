"""Document store interface."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from docwiki.kinds import DocumentKind
from docwiki.store.models import Document, DocumentPayload, DocumentSummary


@runtime_checkable
class DocumentStore(Protocol):
    """Persists rendered documents.

    Missing ids raise ``DocumentNotFound``, validation failures raise
    ``InvalidDocument`` and backend failures raise ``StorageUnavailable``.
    """

    def list(self) -> list[DocumentSummary]: ...

    def get(self, doc_id: int) -> Document: ...

    def create(self, title: str, kind: DocumentKind | str, html: str) -> Document: ...

    def create_from_payload(self, payload: DocumentPayload) -> Document: ...

    def update(
        self,
        doc_id: int,
        *,
        title: str | None = None,
        kind: DocumentKind | str | None = None,
        html: str | None = None,
    ) -> Document: ...

    def delete(self, doc_id: int) -> None: ...

    def stats(self) -> dict[str, int]: ...

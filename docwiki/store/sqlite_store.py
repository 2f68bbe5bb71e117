"""DocumentStore implementation backed by a local SQLite database."""

from __future__ import annotations

import logging
import sqlite3
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from datetime import UTC, datetime
from pathlib import Path

from docwiki.errors import DocumentNotFound, StorageUnavailable
from docwiki.kinds import DocumentKind
from docwiki.store.models import (
    DEFAULT_MAX_HTML_BYTES,
    Document,
    DocumentPayload,
    DocumentSummary,
    validate_draft,
)

logger = logging.getLogger(__name__)

_SCHEMA = """\
CREATE TABLE IF NOT EXISTS docs (
    id          INTEGER PRIMARY KEY AUTOINCREMENT,
    title       TEXT NOT NULL,
    type        TEXT NOT NULL,
    html        TEXT NOT NULL,
    created_at  TEXT NOT NULL,
    updated_at  TEXT NOT NULL
);
CREATE INDEX IF NOT EXISTS idx_docs_created_at ON docs(created_at);
"""

_COLUMNS = "id, title, type, html, created_at, updated_at"

DEFAULT_PREVIEW_CHARS = 300


class SQLiteDocumentStore:
    """DocumentStore using SQLite with WAL mode.

    Every operation is a single statement, so each write is atomic on its
    own. Concurrent updates to the same document are last-write-wins.
    AUTOINCREMENT keeps ids of deleted documents from being handed out again.
    """

    def __init__(
        self,
        db_path: str = "wiki.db",
        *,
        max_html_bytes: int = DEFAULT_MAX_HTML_BYTES,
        preview_chars: int = DEFAULT_PREVIEW_CHARS,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self.db_path = db_path
        self.max_html_bytes = max_html_bytes
        self.preview_chars = preview_chars
        self._clock = clock or (lambda: datetime.now(UTC))

        with self._storage_errors("open"):
            if db_path != ":memory:":
                Path(db_path).parent.mkdir(parents=True, exist_ok=True)
            # isolation_level=None => autocommit; each statement commits itself.
            self._conn = sqlite3.connect(db_path, isolation_level=None, timeout=5)
            self._conn.execute("PRAGMA journal_mode=WAL")
            self._conn.execute("PRAGMA synchronous=NORMAL")
            self._conn.executescript(_SCHEMA)

    # -- helpers ---------------------------------------------------------------

    def _now_iso(self) -> str:
        # Fixed microsecond precision keeps string order equal to time order.
        return self._clock().astimezone(UTC).isoformat(timespec="microseconds")

    @contextmanager
    def _storage_errors(self, operation: str) -> Iterator[None]:
        try:
            yield
        except (sqlite3.Error, OSError) as e:
            logger.exception("document store %s failed (db=%s)", operation, self.db_path)
            raise StorageUnavailable(operation) from e

    def _row_to_document(self, row: tuple) -> Document:
        id_, title, type_, html, created_at, updated_at = row
        return Document(
            id=id_,
            title=title,
            kind=DocumentKind(type_),
            html=html,
            created_at=created_at,
            updated_at=updated_at,
        )

    def _fetch(self, doc_id: int) -> Document:
        with self._storage_errors("read"):
            row = self._conn.execute(
                f"SELECT {_COLUMNS} FROM docs WHERE id = ?", (doc_id,)
            ).fetchone()
        if row is None:
            raise DocumentNotFound(doc_id)
        return self._row_to_document(row)

    # -- DocumentStore protocol ------------------------------------------------

    def list(self) -> list[DocumentSummary]:
        """All documents, newest first, with ``html`` cut to a preview."""
        with self._storage_errors("list"):
            rows = self._conn.execute(
                "SELECT id, title, type, substr(html, 1, ?), created_at, updated_at "
                "FROM docs ORDER BY created_at DESC, id DESC",
                (self.preview_chars,),
            ).fetchall()
        return [
            DocumentSummary(
                id=id_,
                title=title,
                kind=DocumentKind(type_),
                preview_html=preview,
                created_at=created_at,
                updated_at=updated_at,
            )
            for id_, title, type_, preview, created_at, updated_at in rows
        ]

    def get(self, doc_id: int) -> Document:
        return self._fetch(doc_id)

    def create(self, title: str, kind: DocumentKind | str, html: str) -> Document:
        draft = validate_draft(title, kind, html, max_html_bytes=self.max_html_bytes)
        now = self._now_iso()
        with self._storage_errors("create"):
            cursor = self._conn.execute(
                "INSERT INTO docs (title, type, html, created_at, updated_at) "
                "VALUES (?, ?, ?, ?, ?)",
                (draft.title, draft.kind.value, draft.html, now, now),
            )
        doc = Document(
            id=cursor.lastrowid,
            title=draft.title,
            kind=draft.kind,
            html=draft.html,
            created_at=now,
            updated_at=now,
        )
        logger.info("created document %d (%s, %d chars)", doc.id, doc.kind.value, len(doc.html))
        return doc

    def create_from_payload(self, payload: DocumentPayload) -> Document:
        """Create from an upload payload; size and original name are only logged."""
        doc = self.create(payload.title, payload.kind, payload.html)
        if payload.original_name:
            logger.debug(
                "document %d uploaded as %s (%s bytes)",
                doc.id,
                payload.original_name,
                payload.size_bytes,
            )
        return doc

    def update(
        self,
        doc_id: int,
        *,
        title: str | None = None,
        kind: DocumentKind | str | None = None,
        html: str | None = None,
    ) -> Document:
        """Change any subset of title/kind/html; omitted fields keep their value."""
        existing = self._fetch(doc_id)
        draft = validate_draft(
            existing.title if title is None else title,
            existing.kind if kind is None else kind,
            existing.html if html is None else html,
            max_html_bytes=self.max_html_bytes,
        )
        # Never let updated_at run backwards, even if the clock does.
        now = max(self._now_iso(), existing.updated_at)
        with self._storage_errors("update"):
            cursor = self._conn.execute(
                "UPDATE docs SET title = ?, type = ?, html = ?, updated_at = ? WHERE id = ?",
                (draft.title, draft.kind.value, draft.html, now, doc_id),
            )
        if cursor.rowcount == 0:
            raise DocumentNotFound(doc_id)
        logger.info("updated document %d", doc_id)
        return existing.model_copy(
            update={
                "title": draft.title,
                "kind": draft.kind,
                "html": draft.html,
                "updated_at": now,
            }
        )

    def delete(self, doc_id: int) -> None:
        with self._storage_errors("delete"):
            cursor = self._conn.execute("DELETE FROM docs WHERE id = ?", (doc_id,))
        if cursor.rowcount == 0:
            raise DocumentNotFound(doc_id)
        logger.info("deleted document %d", doc_id)

    # -- extras ----------------------------------------------------------------

    def stats(self) -> dict[str, int]:
        """Count documents grouped by kind."""
        with self._storage_errors("count"):
            rows = self._conn.execute(
                "SELECT type, COUNT(*) FROM docs GROUP BY type"
            ).fetchall()
        counts = {k.value: 0 for k in DocumentKind if k.persistable}
        for type_, count in rows:
            counts[type_] = count
        return counts

    def close(self) -> None:
        self._conn.close()

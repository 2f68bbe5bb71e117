"""Substring search over cached document summaries."""

from __future__ import annotations

from collections.abc import Sequence

from docwiki.store.models import DocumentSummary


def filter_documents(
    documents: Sequence[DocumentSummary], query: str | None
) -> list[DocumentSummary]:
    """Keep documents whose title or preview contains *query*, case-insensitively.

    A blank query keeps everything. Order is preserved.
    """
    needle = (query or "").strip().lower()
    if not needle:
        return list(documents)
    return [
        d
        for d in documents
        if needle in (d.title or "").lower() or needle in (d.preview_html or "").lower()
    ]

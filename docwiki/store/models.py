"""Persisted document models and store-level validation."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, ValidationInfo, field_validator

from docwiki.errors import InvalidDocument
from docwiki.kinds import DocumentKind

MAX_TITLE_LENGTH = 255
DEFAULT_MAX_HTML_BYTES = 500_000


class Document(BaseModel):
    """A stored document with its fully rendered HTML."""

    model_config = ConfigDict(frozen=True)

    id: int
    title: str
    kind: DocumentKind
    html: str
    created_at: str
    updated_at: str

    def to_row(self) -> dict[str, Any]:
        """Wire shape: ``kind`` travels as ``type``."""
        return {
            "id": self.id,
            "title": self.title,
            "type": self.kind.value,
            "html": self.html,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }


class DocumentSummary(BaseModel):
    """List-view row: the document with ``html`` cut down to a preview."""

    model_config = ConfigDict(frozen=True)

    id: int
    title: str
    kind: DocumentKind
    preview_html: str
    created_at: str
    updated_at: str

    def to_row(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "type": self.kind.value,
            "previewHtml": self.preview_html,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }


class DocumentPayload(BaseModel):
    """Create payload as sent by upload clients.

    ``sizeBytes`` and ``originalName`` are informational only.
    """

    model_config = ConfigDict(populate_by_name=True)

    title: str
    kind: str = Field(alias="type")
    html: str
    size_bytes: int | None = Field(default=None, alias="sizeBytes")
    original_name: str | None = Field(default=None, alias="originalName")


class DocumentDraft(BaseModel):
    """Fields of a document about to be written, validated as a whole.

    Pass ``context={"max_html_bytes": n}`` to override the size ceiling.
    """

    title: str
    kind: DocumentKind
    html: str

    @field_validator("title", mode="before")
    @classmethod
    def validate_title(cls, v: Any) -> str:
        if not isinstance(v, str) or not v.strip():
            raise ValueError("Title is required")
        if len(v) > MAX_TITLE_LENGTH:
            raise ValueError(f"Title is too long (max {MAX_TITLE_LENGTH} characters)")
        return v

    @field_validator("kind", mode="before")
    @classmethod
    def validate_kind(cls, v: Any) -> DocumentKind:
        if isinstance(v, DocumentKind):
            kind = v
        elif not v:
            raise ValueError("Type is required")
        else:
            try:
                kind = DocumentKind(str(v).lower())
            except ValueError:
                raise ValueError(f"Unknown document type '{v}'") from None
        if not kind.persistable:
            raise ValueError(f"Documents of type '{kind.value}' cannot be stored")
        return kind

    @field_validator("html", mode="before")
    @classmethod
    def validate_html(cls, v: Any, info: ValidationInfo) -> str:
        if not isinstance(v, str) or not v:
            raise ValueError("HTML content is required")
        limit = (info.context or {}).get("max_html_bytes", DEFAULT_MAX_HTML_BYTES)
        if len(v.encode("utf-8")) > limit:
            raise ValueError(f"Document too large (max {limit // 1000}KB)")
        return v


def validate_draft(
    title: Any, kind: Any, html: Any, *, max_html_bytes: int = DEFAULT_MAX_HTML_BYTES
) -> DocumentDraft:
    """Validate document fields, raising InvalidDocument on the first bad field.

    The message lists every failing field, the ``field`` attribute names
    the first one.
    """
    try:
        return DocumentDraft.model_validate(
            {"title": title, "kind": kind, "html": html},
            context={"max_html_bytes": max_html_bytes},
        )
    except ValidationError as e:
        errors = e.errors()
        messages = [_error_message(err) for err in errors]
        raise InvalidDocument(str(errors[0]["loc"][0]), ", ".join(messages)) from e


def _error_message(err: dict[str, Any]) -> str:
    cause = (err.get("ctx") or {}).get("error")
    if cause is not None:
        return str(cause)
    return f"{err['loc'][0]}: {err['msg']}"

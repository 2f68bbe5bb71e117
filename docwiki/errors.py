"""Error taxonomy shared by the conversion pipeline and the document store."""

from __future__ import annotations


class DocWikiError(Exception):
    """Base class for every error surfaced to callers.

    ``status_code`` is the HTTP-style status class of the failure and
    ``public_message`` is the text that may be shown to an end user.
    """

    status_code: int = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    @property
    def public_message(self) -> str:
        return self.message


# ---------------------------------------------------------------------------
# Conversion errors (per file, never fatal to a batch)
# ---------------------------------------------------------------------------


class ConversionError(DocWikiError):
    """A single file could not be turned into HTML."""

    status_code = 400

    def __init__(self, filename: str, message: str) -> None:
        self.filename = filename
        super().__init__(f"{filename}: {message}")


class UnsupportedFormat(ConversionError):
    def __init__(self, filename: str, accepted: list[str]) -> None:
        self.accepted = accepted
        super().__init__(
            filename,
            f"unsupported file type (accepted: {', '.join(accepted)})",
        )


class FileTooLarge(ConversionError):
    def __init__(self, filename: str, size_bytes: int, limit_bytes: int) -> None:
        self.size_bytes = size_bytes
        self.limit_bytes = limit_bytes
        super().__init__(
            filename,
            f"file too large ({size_bytes / (1024 * 1024):.1f} MB). "
            f"Limit: {limit_bytes // (1024 * 1024)} MB",
        )


class TooManyPages(ConversionError):
    def __init__(self, filename: str, page_count: int, max_pages: int) -> None:
        self.page_count = page_count
        self.max_pages = max_pages
        super().__init__(
            filename,
            f"PDF with {page_count} pages exceeds the limit of {max_pages}",
        )


class RenderingCapabilityMissing(ConversionError):
    """The PDF rasterizer or DOCX converter is not available."""

    status_code = 500

    def __init__(self, filename: str, capability: str) -> None:
        self.capability = capability
        super().__init__(filename, f"rendering capability '{capability}' is not available")


# ---------------------------------------------------------------------------
# Store errors
# ---------------------------------------------------------------------------


class InvalidDocument(DocWikiError):
    """Caller-correctable validation failure; names the offending field."""

    status_code = 400

    def __init__(self, field: str, message: str) -> None:
        self.field = field
        super().__init__(message)


class DocumentNotFound(DocWikiError):
    status_code = 404

    def __init__(self, doc_id: int) -> None:
        self.doc_id = doc_id
        super().__init__(f"Document {doc_id} not found")


class StorageUnavailable(DocWikiError):
    """The storage layer failed. Detail is logged, never exposed."""

    status_code = 500

    def __init__(self, operation: str) -> None:
        self.operation = operation
        super().__init__(f"storage failure during {operation}")

    @property
    def public_message(self) -> str:
        return f"Internal error while trying to {self.operation} documents"

"""Format detection and title derivation from upload filenames."""

from __future__ import annotations

import re

from docwiki.kinds import DocumentKind

EXTENSION_KINDS: dict[str, DocumentKind] = {
    "md": DocumentKind.markdown,
    "txt": DocumentKind.text,
    "pdf": DocumentKind.pdf,
    "docx": DocumentKind.docx,
}

DEFAULT_TITLE = "Document"

_TRAILING_EXTENSION = re.compile(r"\.[^/.]+$")


def accepted_extensions() -> list[str]:
    return [f".{ext}" for ext in EXTENSION_KINDS]


def detect_kind(filename: str) -> DocumentKind:
    """Classify a file by the lower-cased text after its last dot.

    Names without a dot and unknown extensions are ``other``.
    """
    if not filename or "." not in filename:
        return DocumentKind.other
    ext = filename.rsplit(".", 1)[-1].lower()
    return EXTENSION_KINDS.get(ext, DocumentKind.other)


def title_from_filename(filename: str | None) -> str:
    """Strip a trailing ``.ext``; empty names get a placeholder title."""
    return _TRAILING_EXTENSION.sub("", filename or "") or DEFAULT_TITLE

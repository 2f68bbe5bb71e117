"""Document formats shared by the converter and the store."""

from __future__ import annotations

from enum import Enum


class DocumentKind(str, Enum):
    """Document formats known to the pipeline and the store."""

    markdown = "markdown"
    text = "text"
    pdf = "pdf"
    docx = "docx"
    other = "other"

    @property
    def css_class(self) -> str:
        """Class attribute of the element wrapping a rendered fragment."""
        return _CSS_CLASSES[self]

    @property
    def persistable(self) -> bool:
        return self is not DocumentKind.other


_CSS_CLASSES: dict[DocumentKind, str] = {
    DocumentKind.markdown: "md",
    DocumentKind.text: "txt",
    DocumentKind.pdf: "pdf",
    DocumentKind.docx: "docx",
    DocumentKind.other: "txt",
}

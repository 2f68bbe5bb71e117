from pydantic import BaseModel, Field
from typing import Literal


class PdfConfig(BaseModel):
    scale: float = Field(default=1.5, gt=0)
    max_pages: int = Field(default=25, gt=0)


class DocxConfig(BaseModel):
    enabled: bool = True


class ConversionConfig(BaseModel):
    max_file_size_mb: int = Field(default=10, gt=0)
    fallback_to_text: bool = False
    pdf: PdfConfig = Field(default_factory=PdfConfig)
    docx: DocxConfig = Field(default_factory=DocxConfig)

    @property
    def max_file_size_bytes(self) -> int:
        return self.max_file_size_mb * 1024 * 1024


class StoreConfig(BaseModel):
    db_path: str = "wiki.db"
    max_html_bytes: int = Field(default=500_000, gt=0)
    preview_chars: int = Field(default=300, gt=0)


class DocWikiConfig(BaseModel):
    conversion: ConversionConfig = Field(default_factory=ConversionConfig)
    store: StoreConfig = Field(default_factory=StoreConfig)
    log_level: Literal["debug", "info", "warn", "error"] = "info"
    log_format: Literal["text", "json"] = "text"

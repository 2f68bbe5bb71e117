from .loader import load_config
from .models import (
    ConversionConfig,
    DocWikiConfig,
    DocxConfig,
    PdfConfig,
    StoreConfig,
)

__all__ = [
    "ConversionConfig",
    "DocWikiConfig",
    "DocxConfig",
    "PdfConfig",
    "StoreConfig",
    "load_config",
]

"""
PDF Extractor - Text extraction from uploaded PDF documents

Turns raw PDF bytes into plain text plus document metadata
(filename, page count, upload time). This is the first stage of the
knowledge base ingestion pipeline.

Quick Start:
    from pdf_extractor import PDFTextExtractor

    extractor = PDFTextExtractor()
    document = extractor.extract(pdf_bytes, "gesetz.pdf")
    print(document.metadata.page_count)
"""

__version__ = "3.0.0"

from .extractor import PDFTextExtractor, TextExtractor
from .models import DocumentMetadata, ExtractedDocument
from .exceptions import (
    ExtractionError,
    EmptyFileError,
    UnsupportedDocumentError,
    PDFCorruptedError,
    format_error_chain,
)

__all__ = [
    "__version__",
    "PDFTextExtractor",
    "TextExtractor",
    "DocumentMetadata",
    "ExtractedDocument",
    "ExtractionError",
    "EmptyFileError",
    "UnsupportedDocumentError",
    "PDFCorruptedError",
    "format_error_chain",
]

"""
PDF Text Extractor - Text-native extraction from in-memory PDF bytes

Opens the uploaded bytes with PyMuPDF and concatenates the selectable text
of every page. Pages are separated by a blank line.

Usage:
    from pdf_extractor import PDFTextExtractor

    extractor = PDFTextExtractor()
    document = extractor.extract(Path("gesetz.pdf").read_bytes(), "gesetz.pdf")
    print(document.metadata.page_count, document.word_count)
"""

from __future__ import annotations

import logging
import re
from typing import Protocol

import fitz  # PyMuPDF

from .exceptions import (
    EmptyFileError,
    ExtractionError,
    PDFCorruptedError,
    UnsupportedDocumentError,
)
from .models import DocumentMetadata, ExtractedDocument

logger = logging.getLogger(__name__)

PDF_SIGNATURE = b"%PDF-"
PAGE_SEPARATOR = "\n\n"


class TextExtractor(Protocol):
    """Anything that turns raw document bytes into text plus metadata."""

    def extract(self, file_bytes: bytes, filename: str) -> ExtractedDocument:
        ...


class PDFTextExtractor:
    """
    Extracts plain text from PDF documents using PyMuPDF.

    Args:
        sort_blocks: Sort text in reading order (top-left to bottom-right).
        dehyphenate: Join words split by a hyphen at a line break.
    """

    def __init__(self, sort_blocks: bool = True, dehyphenate: bool = True) -> None:
        self.sort_blocks = sort_blocks
        self.dehyphenate = dehyphenate

    def extract(self, file_bytes: bytes, filename: str) -> ExtractedDocument:
        """
        Extract the text of every page.

        Args:
            file_bytes: Raw PDF content.
            filename: Original filename, used as the document identifier.

        Returns:
            ExtractedDocument with the joined page text and metadata.

        Raises:
            EmptyFileError: No bytes were uploaded.
            UnsupportedDocumentError: The bytes are not a PDF.
            PDFCorruptedError: PyMuPDF cannot open or read the file.
        """
        if not file_bytes:
            raise EmptyFileError(filename)
        if PDF_SIGNATURE not in file_bytes[:1024]:
            raise UnsupportedDocumentError(
                filename,
                detected_type=repr(file_bytes[:8]),
            )

        try:
            with fitz.open(stream=file_bytes, filetype="pdf") as doc:
                if doc.needs_pass:
                    raise PDFCorruptedError(
                        filename,
                        ValueError("document is password protected"),
                    )
                page_texts = [
                    self._clean_text(page.get_text("text", sort=self.sort_blocks))
                    for page in doc
                ]
                page_count = doc.page_count
        except ExtractionError:
            raise
        except Exception as e:
            logger.error("Failed to read PDF %s: %s", filename, e)
            raise PDFCorruptedError(filename, e) from e

        text = PAGE_SEPARATOR.join(page_texts)
        logger.info(
            "Extracted %d pages (%d chars) from %s",
            page_count, len(text), filename,
        )
        return ExtractedDocument(
            text=text,
            metadata=DocumentMetadata(filename=filename, page_count=page_count),
        )

    def _clean_text(self, text: str) -> str:
        if not text:
            return ""
        cleaned = text.replace("\r\n", "\n").replace("\r", "\n")
        if self.dehyphenate:
            # "Stu-\ndium" -> "Studium"
            cleaned = re.sub(r"(?<=\w)-\n(?=\w)", "", cleaned)
        cleaned = re.sub(r"[ \t]+", " ", cleaned)
        cleaned = re.sub(r"\n{3,}", "\n\n", cleaned)
        return cleaned.strip()

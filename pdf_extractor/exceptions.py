"""
Custom Exceptions for Document Text Extraction.

Exception Hierarchy:
    ExtractionError (base)
    ├── EmptyFileError
    ├── UnsupportedDocumentError
    └── PDFCorruptedError

Usage:
    from pdf_extractor.exceptions import ExtractionError, PDFCorruptedError

    try:
        document = extractor.extract(data, "gesetz.pdf")
    except PDFCorruptedError as e:
        print(f"Unreadable file: {e.filename}")
    except ExtractionError as e:
        print(f"Extraction failed: {e}")
"""

from __future__ import annotations

from typing import Optional


class ExtractionError(Exception):
    """
    Base exception for all extraction-related errors.

    Attributes:
        message: Error description
        details: Additional technical details (optional)
        filename: Name of the document that failed (optional)
    """

    def __init__(
        self,
        message: str = "An extraction error occurred",
        details: Optional[str] = None,
        filename: Optional[str] = None,
    ):
        self.message = message
        self.details = details
        self.filename = filename

        full_message = message
        if filename:
            full_message = f"{full_message} [{filename}]"
        if details:
            full_message = f"{full_message} | Details: {details}"

        super().__init__(full_message)


class EmptyFileError(ExtractionError):
    """Raised when the uploaded document contains no bytes."""

    def __init__(self, filename: Optional[str] = None):
        super().__init__(message="Document is empty", filename=filename)


class UnsupportedDocumentError(ExtractionError):
    """
    Raised when the document is not in a supported format.

    Attributes:
        detected_type: Short description of what was found instead
    """

    def __init__(
        self,
        filename: Optional[str] = None,
        detected_type: Optional[str] = None,
    ):
        self.detected_type = detected_type
        super().__init__(
            message="Unsupported document format, expected PDF",
            details=detected_type,
            filename=filename,
        )


class PDFCorruptedError(ExtractionError):
    """
    Raised when the PDF is corrupted or cannot be read.

    Attributes:
        original_error: The underlying error from the PDF library
    """

    def __init__(
        self,
        filename: Optional[str] = None,
        original_error: Optional[Exception] = None,
    ):
        self.original_error = original_error
        details = str(original_error) if original_error else None
        super().__init__(
            message="PDF file is corrupted or unreadable",
            details=details,
            filename=filename,
        )


def format_error_chain(error: Exception) -> str:
    """
    Format an exception and its chain for logging.

    Returns a multi-line string showing the error hierarchy.
    """
    lines = []
    current: Optional[BaseException] = error
    depth = 0

    while current is not None:
        prefix = "  " * depth + ("└─ " if depth > 0 else "")
        lines.append(f"{prefix}{type(current).__name__}: {current}")

        if getattr(current, "original_error", None) is not None:
            current = current.original_error
            depth += 1
        elif current.__cause__:
            current = current.__cause__
            depth += 1
        else:
            break

    return "\n".join(lines)

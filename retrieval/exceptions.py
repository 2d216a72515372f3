"""Errors raised by the ingestion pipeline in addition to the stage errors."""

from __future__ import annotations


class DuplicateDocumentError(ValueError):
    """
    Raised when a document with the same filename is already ingested.

    Attributes:
        filename: The rejected filename
    """

    def __init__(self, filename: str):
        self.filename = filename
        super().__init__(f"Document already ingested: {filename}")

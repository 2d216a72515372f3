"""
Custom Exceptions for embedding and vector storage.

Exception Hierarchy:
    EmbeddingError
    ├── EmbeddingConnectionError
    └── EmbeddingTimeoutError
    VectorStoreError
    ├── DimensionMismatchError
    └── DuplicateRecordError
    EmptyInputError (ValueError)
"""

from __future__ import annotations

from typing import Optional


class EmbeddingError(Exception):
    """
    Raised when the embedding provider cannot initialize or embed text.

    The ingestion pipeline and retriever fill in ``filename``/``chunk_index``
    or ``query`` before the error propagates, so callers can tell which
    input failed.

    Attributes:
        message: Error description
        details: Additional technical details (optional)
        model: Embedding model in use (optional)
        original_error: Underlying client error (optional)
    """

    def __init__(
        self,
        message: str = "Embedding generation failed",
        details: Optional[str] = None,
        model: Optional[str] = None,
        original_error: Optional[Exception] = None,
    ):
        self.message = message
        self.details = details
        self.model = model
        self.original_error = original_error
        self.filename: Optional[str] = None
        self.chunk_index: Optional[int] = None
        self.query: Optional[str] = None

        full_message = message
        if model:
            full_message = f"{full_message} [model={model}]"
        if details:
            full_message = f"{full_message} | Details: {details}"

        super().__init__(full_message)


class EmbeddingConnectionError(EmbeddingError):
    """Raised when the embedding server cannot be reached."""


class EmbeddingTimeoutError(EmbeddingError):
    """
    Raised when an embedding request exceeds the configured timeout.

    Attributes:
        timeout: Timeout in seconds that was exceeded
    """

    def __init__(
        self,
        timeout: Optional[float] = None,
        model: Optional[str] = None,
        original_error: Optional[Exception] = None,
    ):
        self.timeout = timeout
        message = "Embedding request timed out"
        if timeout:
            message = f"{message} after {timeout}s"
        super().__init__(message, model=model, original_error=original_error)


class VectorStoreError(Exception):
    """Base class for vector store invariant violations."""


class DimensionMismatchError(VectorStoreError):
    """
    Raised when vectors of different dimensionality are mixed.

    Attributes:
        expected: Dimension already established
        actual: Dimension that was offered
    """

    def __init__(self, expected: int, actual: int, record_id: Optional[str] = None):
        self.expected = expected
        self.actual = actual
        self.record_id = record_id
        message = f"Embedding dimension {actual} does not match {expected}"
        if record_id:
            message = f"{message} [{record_id}]"
        super().__init__(message)


class DuplicateRecordError(VectorStoreError):
    """Raised when a record id is already present in the store or batch."""

    def __init__(self, record_id: str):
        self.record_id = record_id
        super().__init__(f"Record id already stored: {record_id}")


class EmptyInputError(ValueError):
    """
    Raised for a query or document that is empty after trimming.

    Attributes:
        filename: Document that produced no text (optional)
        query: The rejected query (optional)
    """

    def __init__(
        self,
        message: str,
        filename: Optional[str] = None,
        query: Optional[str] = None,
    ):
        self.filename = filename
        self.query = query
        if filename:
            message = f"{message} [{filename}]"
        super().__init__(message)


def is_retryable(error: Exception) -> bool:
    """
    Check if an embedding error is potentially recoverable by retrying.

    Connection failures and timeouts are transient; model errors and
    invalid responses are not.
    """
    return isinstance(error, (EmbeddingConnectionError, EmbeddingTimeoutError))

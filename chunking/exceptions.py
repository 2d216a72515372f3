"""Exceptions raised by the chunking stage."""

from __future__ import annotations


class ChunkingConfigError(ValueError):
    """
    Raised when chunk size and overlap cannot produce forward progress.

    Attributes:
        chunk_size: The rejected window size in words
        overlap: The rejected overlap in words
    """

    def __init__(self, message: str, chunk_size: int, overlap: int):
        self.chunk_size = chunk_size
        self.overlap = overlap
        super().__init__(f"{message} (chunk_size={chunk_size}, overlap={overlap})")


def validate_window(chunk_size: int, overlap: int) -> None:
    """Reject window parameters whose step would not advance."""
    if chunk_size < 1:
        raise ChunkingConfigError("chunk_size must be at least 1", chunk_size, overlap)
    if overlap < 0:
        raise ChunkingConfigError("overlap must not be negative", chunk_size, overlap)
    if overlap >= chunk_size:
        raise ChunkingConfigError(
            "overlap must be less than chunk_size", chunk_size, overlap
        )

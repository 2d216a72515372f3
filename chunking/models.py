"""
Data Models for the Chunking Pipeline

Defines:
1. ChunkingConfig - Window size and overlap in words
2. Chunk - A word-aligned window of a document's text

Chunks are immutable once created. Offsets are word positions within the
whitespace-split document text, with ``end_word`` exclusive.

Usage:
    config = ChunkingConfig(chunk_size=500, overlap=50)
    chunks = WordChunker(config).chunk(text)
"""

from dataclasses import dataclass

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .exceptions import validate_window

DEFAULT_CHUNK_SIZE = 500
DEFAULT_OVERLAP = 50


@dataclass(frozen=True)
class ChunkingConfig:
    """
    Configuration for the word-window chunker.

    Raises:
        ChunkingConfigError: If overlap >= chunk_size or either is out of range.
    """
    chunk_size: int = DEFAULT_CHUNK_SIZE
    overlap: int = DEFAULT_OVERLAP

    def __post_init__(self) -> None:
        validate_window(self.chunk_size, self.overlap)

    @property
    def step(self) -> int:
        return self.chunk_size - self.overlap


class Chunk(BaseModel):
    """
    A contiguous, word-aligned window of document text, ready for embedding.
    """
    model_config = ConfigDict(frozen=True)

    text: str = Field(
        ...,
        description="Window words joined by single spaces",
        min_length=1,
    )
    start_word: int = Field(
        ...,
        description="Offset of the first word in the document (inclusive)",
        ge=0,
    )
    end_word: int = Field(
        ...,
        description="Offset after the last word in the document (exclusive)",
    )
    index: int = Field(
        ...,
        description="Position of this chunk within the document (0-indexed)",
        ge=0,
    )
    total_chunks: int = Field(
        ...,
        description="Total number of chunks in the document",
        ge=1,
    )
    token_count: int = Field(
        0,
        description="Token count of the text (cl100k_base)",
        ge=0,
    )

    @model_validator(mode="after")
    def _check_offsets(self) -> "Chunk":
        if self.end_word <= self.start_word:
            raise ValueError("end_word must be greater than start_word")
        if self.index >= self.total_chunks:
            raise ValueError("index must be less than total_chunks")
        return self

    @property
    def word_count(self) -> int:
        return self.end_word - self.start_word

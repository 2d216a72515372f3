"""
Data Models for the Vector Store

Defines:
1. VectorRecord - One stored chunk: text, embedding and metadata
2. SearchResult - A ranked hit with its cosine similarity

Both are immutable. Embeddings are stored as tuples so a snapshot handed
to a reader cannot be changed underneath another reader.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class VectorRecord(BaseModel):
    """A chunk plus its embedding, the unit stored and searched."""
    model_config = ConfigDict(frozen=True)

    record_id: str = Field(
        ...,
        description="Unique identifier (format: {filename}-chunk-{index})",
        min_length=1,
    )
    text: str = Field(
        ...,
        description="Chunk text",
        min_length=1,
    )
    embedding: tuple[float, ...] = Field(
        ...,
        description="Unit-length embedding vector",
    )
    metadata: dict[str, Any] = Field(
        default_factory=dict,
        description="Document metadata merged with chunk position",
    )

    @field_validator("embedding")
    @classmethod
    def _non_empty(cls, value: tuple[float, ...]) -> tuple[float, ...]:
        if not value:
            raise ValueError("embedding must not be empty")
        return value

    @property
    def dimensions(self) -> int:
        return len(self.embedding)


class SearchResult(BaseModel):
    """A single search hit handed to answer generation."""
    record_id: str = Field(
        ...,
        description="ID of the matching record",
    )
    text: str = Field(
        ...,
        description="Text content of the matching chunk",
    )
    metadata: dict[str, Any] = Field(
        default_factory=dict,
        description="Record metadata",
    )
    similarity: float = Field(
        ...,
        description="Cosine similarity to the query (1 = identical direction)",
    )

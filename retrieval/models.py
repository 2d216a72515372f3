from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from pdf_extractor.models import DocumentMetadata
from vector_store.models import SearchResult


class Document(BaseModel):
    """An ingested document. Immutable once registered."""
    model_config = ConfigDict(frozen=True)

    document_id: str = Field(..., min_length=1)
    text: str
    page_count: int = Field(0, ge=0)
    uploaded_at: datetime
    chunk_count: int = Field(0, ge=0)


class IngestResult(BaseModel):
    chunks_added: int
    metadata: DocumentMetadata
    embedding_time_seconds: float = 0.0
    total_time_seconds: float = 0.0


class DocumentSummary(BaseModel):
    filename: str
    page_count: int
    chunk_count: int
    uploaded_at: datetime


class SearchRequest(BaseModel):
    query: str = Field(..., min_length=1)
    top_k: Optional[int] = Field(None, ge=1, le=50)


class SearchResponse(BaseModel):
    query: str
    results: list[SearchResult] = Field(default_factory=list)


class ClearResponse(BaseModel):
    documents_removed: int
    chunks_removed: int


class HealthResponse(BaseModel):
    status: str
    documents: int
    chunks: int
    embedder: dict[str, Any] = Field(default_factory=dict)

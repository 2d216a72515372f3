"""
Vector Store Module - Ollama embeddings + in-memory vector storage

Embeds chunk text with a local Ollama model and keeps the resulting
records in process memory for exact similarity search.

Quick Start:
    from vector_store import InMemoryVectorStore, OllamaEmbedder, VectorRecord

    embedder = OllamaEmbedder(model="all-minilm")
    embedder.initialize()

    store = InMemoryVectorStore()
    store.append([VectorRecord(record_id="a.pdf-chunk-0", text=text,
                               embedding=embedder.embed(text))])
"""

__version__ = "2.0.0"

from .embedder import EmbeddingProvider, OllamaEmbedder
from .exceptions import (
    DimensionMismatchError,
    DuplicateRecordError,
    EmbeddingConnectionError,
    EmbeddingError,
    EmbeddingTimeoutError,
    EmptyInputError,
    VectorStoreError,
    is_retryable,
)
from .models import SearchResult, VectorRecord
from .retry import RetryingEmbedder
from .store import InMemoryVectorStore

__all__ = [
    "__version__",
    "EmbeddingProvider",
    "OllamaEmbedder",
    "RetryingEmbedder",
    "InMemoryVectorStore",
    "VectorRecord",
    "SearchResult",
    "EmbeddingError",
    "EmbeddingConnectionError",
    "EmbeddingTimeoutError",
    "EmptyInputError",
    "VectorStoreError",
    "DimensionMismatchError",
    "DuplicateRecordError",
    "is_retryable",
]

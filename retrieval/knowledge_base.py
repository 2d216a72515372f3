"""
KnowledgeBase - Caller-owned session wiring the retrieval pipeline

Holds the embedding provider, vector store and document registry for one
knowledge base. Create one per application (or per test) and pass it where
it is needed.

Usage:
    from retrieval import KnowledgeBase

    with KnowledgeBase() as kb:
        kb.add_document(Path("gesetz.pdf").read_bytes(), "gesetz.pdf")
        if kb.count() > 0:
            results = kb.search("Kündigungsfrist", top_k=3)
"""

import logging
import threading
from typing import Optional

from chunking import ChunkingConfig, WordChunker
from pdf_extractor import PDFTextExtractor, TextExtractor
from vector_store.embedder import EmbeddingProvider, OllamaEmbedder
from vector_store.models import SearchResult
from vector_store.retry import RetryingEmbedder
from vector_store.store import InMemoryVectorStore

from .config import KnowledgeBaseConfig
from .ingestion import IngestionPipeline
from .models import ClearResponse, Document, IngestResult
from .registry import DocumentRegistry
from .retriever import Retriever, SearchStrategy

logger = logging.getLogger(__name__)


class KnowledgeBase:
    """
    An in-memory knowledge base: ingestion, search and reset.

    Args:
        config: Settings (defaults to KnowledgeBaseConfig()).
        embedder: Embedding provider (defaults to an OllamaEmbedder from config).
        extractor: Document text extractor (defaults to PDFTextExtractor).
        strategy: Ranking strategy for the retriever (defaults to ExactSearch).
    """

    def __init__(
        self,
        config: Optional[KnowledgeBaseConfig] = None,
        embedder: Optional[EmbeddingProvider] = None,
        extractor: Optional[TextExtractor] = None,
        strategy: Optional[SearchStrategy] = None,
    ):
        self.config = config or KnowledgeBaseConfig()
        self.embedder = embedder or self._build_embedder(self.config)
        self.store = InMemoryVectorStore()
        self.registry = DocumentRegistry()
        self._lock = threading.Lock()
        self._open = False

        self.pipeline = IngestionPipeline(
            extractor=extractor or PDFTextExtractor(),
            chunker=WordChunker(
                ChunkingConfig(
                    chunk_size=self.config.chunk_size,
                    overlap=self.config.chunk_overlap,
                )
            ),
            embedder=self.embedder,
            store=self.store,
            registry=self.registry,
            max_workers=self.config.embed_workers,
            commit_lock=self._lock,
        )
        self.retriever = Retriever(
            self.embedder,
            self.store,
            strategy=strategy,
            default_top_k=self.config.top_k,
        )

    @staticmethod
    def _build_embedder(config: KnowledgeBaseConfig) -> EmbeddingProvider:
        embedder: EmbeddingProvider = OllamaEmbedder(
            model=config.embed_model,
            base_url=config.ollama_base_url,
            timeout=config.embed_timeout,
            auto_pull=config.embed_auto_pull,
        )
        if config.embed_retries > 1:
            embedder = RetryingEmbedder(
                embedder,
                max_retries=config.embed_retries,
                retry_delay=config.embed_retry_delay,
            )
        return embedder

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    @property
    def is_open(self) -> bool:
        return self._open

    def open(self) -> "KnowledgeBase":
        """Initialize the embedding provider ahead of the first request."""
        self.embedder.initialize()
        self._open = True
        return self

    def close(self) -> None:
        """Discard all documents and mark the session closed."""
        self.clear_all()
        self._open = False

    def __enter__(self) -> "KnowledgeBase":
        return self.open()

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    # -------------------------------------------------------------------------
    # Operations
    # -------------------------------------------------------------------------

    def add_document(self, file_bytes: bytes, filename: str) -> IngestResult:
        """Ingest one document. See IngestionPipeline.add_document."""
        return self.pipeline.add_document(file_bytes, filename)

    def search(self, query: str, top_k: Optional[int] = None) -> list[SearchResult]:
        """Return up to ``top_k`` chunks most similar to ``query``."""
        return self.retriever.search(query, top_k)

    def count(self) -> int:
        """Number of ingested documents."""
        return self.registry.count()

    def chunk_count(self) -> int:
        """Number of stored chunks across all documents."""
        return self.store.count()

    def documents(self) -> list[Document]:
        return self.registry.documents()

    def clear_all(self) -> ClearResponse:
        """Remove all documents, chunks and embeddings at once."""
        with self._lock:
            chunks_removed = self.store.count()
            self.store.clear()
            documents_removed = self.registry.clear()
        logger.info(
            "Knowledge base cleared: %d documents, %d chunks",
            documents_removed, chunks_removed,
        )
        return ClearResponse(
            documents_removed=documents_removed,
            chunks_removed=chunks_removed,
        )

"""
Ingestion Pipeline - extract → chunk → embed → store

Turns one uploaded document into VectorRecords. A document is stored
completely or not at all: records are appended in a single batch after
every chunk has been embedded, and the Document is registered in the same
critical section.

Usage:
    pipeline = IngestionPipeline(extractor, chunker, embedder, store, registry)
    result = pipeline.add_document(pdf_bytes, "gesetz.pdf")
    print(result.chunks_added)
"""

import logging
import threading
import time
from concurrent.futures import ThreadPoolExecutor
from typing import Optional

from chunking import Chunk, WordChunker
from pdf_extractor import (
    DocumentMetadata,
    ExtractedDocument,
    ExtractionError,
    TextExtractor,
)
from vector_store.embedder import EmbeddingProvider
from vector_store.exceptions import EmbeddingError, EmptyInputError
from vector_store.models import VectorRecord
from vector_store.store import InMemoryVectorStore

from .exceptions import DuplicateDocumentError
from .models import Document, IngestResult
from .registry import DocumentRegistry

logger = logging.getLogger(__name__)


def make_record_id(filename: str, chunk_index: int) -> str:
    return f"{filename}-chunk-{chunk_index}"


class IngestionPipeline:
    """
    Orchestrates ingestion of a single document.

    Args:
        extractor: Turns raw bytes into text and metadata.
        chunker: Splits text into word windows.
        embedder: Embeds each chunk.
        store: Receives the document's records as one batch.
        registry: Receives the Document once its records are stored.
        max_workers: Parallel embedding calls per document (1 = sequential).
        commit_lock: Lock held while records and document are committed.
    """

    def __init__(
        self,
        extractor: TextExtractor,
        chunker: WordChunker,
        embedder: EmbeddingProvider,
        store: InMemoryVectorStore,
        registry: DocumentRegistry,
        max_workers: int = 1,
        commit_lock: Optional[threading.Lock] = None,
    ):
        self.extractor = extractor
        self.chunker = chunker
        self.embedder = embedder
        self.store = store
        self.registry = registry
        self.max_workers = max(1, max_workers)
        self._commit_lock = commit_lock or threading.Lock()

    def add_document(self, file_bytes: bytes, filename: str) -> IngestResult:
        """
        Ingest one document.

        Args:
            file_bytes: Raw document content.
            filename: Source filename, used as the document identifier.

        Returns:
            IngestResult with the number of chunks stored and the document metadata.

        Raises:
            DuplicateDocumentError: If the filename was already ingested.
            ExtractionError: If the document cannot be read.
            EmptyInputError: If the document has no extractable text.
            EmbeddingError: If any chunk fails to embed (nothing is stored).
        """
        total_start = time.time()

        if self.registry.contains(filename):
            raise DuplicateDocumentError(filename)

        extracted = self._extract(file_bytes, filename)
        if not extracted.text.strip():
            raise EmptyInputError("Document contains no extractable text", filename=filename)

        chunks = self.chunker.chunk(extracted.text)
        logger.info("Chunked %s into %d chunks", filename, len(chunks))

        embed_start = time.time()
        embeddings = self._embed_chunks(chunks, filename)
        embed_time = time.time() - embed_start

        metadata = extracted.metadata
        records = [
            self._make_record(filename, chunk, embedding, metadata)
            for chunk, embedding in zip(chunks, embeddings)
        ]
        document = Document(
            document_id=filename,
            text=extracted.text,
            page_count=metadata.page_count,
            uploaded_at=metadata.uploaded_at,
            chunk_count=len(records),
        )

        with self._commit_lock:
            # Another upload of the same file may have committed meanwhile
            if self.registry.contains(filename):
                raise DuplicateDocumentError(filename)
            self.store.append(records)
            self.registry.register(document)

        total_time = time.time() - total_start
        logger.info(
            "Ingested %s: %d chunks, embedding %.2fs, total %.2fs",
            filename, len(records), embed_time, total_time,
        )
        return IngestResult(
            chunks_added=len(records),
            metadata=metadata,
            embedding_time_seconds=round(embed_time, 2),
            total_time_seconds=round(total_time, 2),
        )

    # -------------------------------------------------------------------------
    # Internal methods
    # -------------------------------------------------------------------------

    def _extract(self, file_bytes: bytes, filename: str) -> ExtractedDocument:
        try:
            return self.extractor.extract(file_bytes, filename)
        except ExtractionError as e:
            logger.error("Extraction failed for %s: %s", filename, e)
            raise
        except Exception as e:
            logger.error("Extraction failed for %s: %s", filename, e)
            raise ExtractionError(
                "Text extraction failed", details=str(e), filename=filename
            ) from e

    def _embed_chunks(self, chunks: list[Chunk], filename: str) -> list[list[float]]:
        if self.max_workers == 1 or len(chunks) <= 1:
            return [self._embed_one(chunk, filename) for chunk in chunks]

        with ThreadPoolExecutor(max_workers=self.max_workers) as pool:
            futures = [pool.submit(self._embed_one, chunk, filename) for chunk in chunks]
            try:
                # Results are collected in chunk order
                return [future.result() for future in futures]
            except BaseException:
                for future in futures:
                    future.cancel()
                raise

    def _embed_one(self, chunk: Chunk, filename: str) -> list[float]:
        try:
            return self.embedder.embed(chunk.text)
        except EmbeddingError as e:
            e.filename = filename
            e.chunk_index = chunk.index
            logger.error(
                "Embedding failed for %s chunk %d/%d, document rejected: %s",
                filename, chunk.index, chunk.total_chunks, e,
            )
            raise

    @staticmethod
    def _make_record(
        filename: str,
        chunk: Chunk,
        embedding: list[float],
        metadata: DocumentMetadata,
    ) -> VectorRecord:
        return VectorRecord(
            record_id=make_record_id(filename, chunk.index),
            text=chunk.text,
            embedding=tuple(embedding),
            metadata={
                **metadata.model_dump(mode="json"),
                "filename": filename,
                "chunk_index": chunk.index,
                "total_chunks": chunk.total_chunks,
                "start_word": chunk.start_word,
                "end_word": chunk.end_word,
                "token_count": chunk.token_count,
            },
        )

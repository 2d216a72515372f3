"""
Retriever - Exact cosine-similarity search over the vector store

Given a query, embeds it and ranks every stored record by cosine
similarity, returning the top K.

Algorithm:
1. Empty store: return [] without calling the embedder.
2. Embed the query.
3. Compute dot(q, r) / (||q|| * ||r||) for every record r. The query vector
   is not assumed to be normalized.
4. Stable sort by similarity descending (ties keep insertion order).
5. Return the first K as SearchResults.

The ranking step is a substitutable strategy; ``ExactSearch`` is the
brute-force scan used by default.

Usage:
    from retrieval import Retriever

    retriever = Retriever(embedder, store)
    results = retriever.search("Wie lange dauert die Probezeit?", top_k=3)
"""

import logging
from typing import Optional, Protocol, Sequence

import numpy as np

from vector_store.embedder import EmbeddingProvider
from vector_store.exceptions import DimensionMismatchError, EmbeddingError, EmptyInputError
from vector_store.models import SearchResult, VectorRecord
from vector_store.store import InMemoryVectorStore

logger = logging.getLogger(__name__)


def cosine_similarity(a: Sequence[float], b: Sequence[float]) -> float:
    """
    Cosine similarity of two vectors, in [-1, 1].

    Returns 0.0 if either vector has zero magnitude.

    Raises:
        DimensionMismatchError: If the vectors differ in length.
    """
    va = np.asarray(a, dtype=np.float64)
    vb = np.asarray(b, dtype=np.float64)
    if va.shape != vb.shape:
        raise DimensionMismatchError(len(va), len(vb))
    denominator = np.linalg.norm(va) * np.linalg.norm(vb)
    if denominator == 0:
        return 0.0
    return float(np.clip(np.dot(va, vb) / denominator, -1.0, 1.0))


class SearchStrategy(Protocol):
    def rank(
        self,
        query_vector: Sequence[float],
        records: Sequence[VectorRecord],
        top_k: int,
    ) -> list[tuple[VectorRecord, float]]:
        ...


class ExactSearch:
    """Brute-force linear scan. Deterministic for equal scores."""

    def rank(
        self,
        query_vector: Sequence[float],
        records: Sequence[VectorRecord],
        top_k: int,
    ) -> list[tuple[VectorRecord, float]]:
        if not records or top_k < 1:
            return []

        matrix = np.asarray([record.embedding for record in records], dtype=np.float64)
        query = np.asarray(query_vector, dtype=np.float64)
        if matrix.shape[1] != query.shape[0]:
            raise DimensionMismatchError(matrix.shape[1], query.shape[0])

        norms = np.linalg.norm(matrix, axis=1) * np.linalg.norm(query)
        dots = matrix @ query
        with np.errstate(divide="ignore", invalid="ignore"):
            similarities = np.where(norms > 0, dots / norms, 0.0)
        similarities = np.clip(similarities, -1.0, 1.0)

        order = np.argsort(-similarities, kind="stable")[:top_k]
        return [(records[i], float(similarities[i])) for i in order]


class Retriever:
    """
    Ranks stored chunks against a query.

    Args:
        embedder: Provider used to embed the query.
        store: Vector store to search.
        strategy: Ranking strategy (defaults to ExactSearch).
        default_top_k: Result count when ``search`` gets no top_k.
    """

    def __init__(
        self,
        embedder: EmbeddingProvider,
        store: InMemoryVectorStore,
        strategy: Optional[SearchStrategy] = None,
        default_top_k: int = 3,
    ):
        self.embedder = embedder
        self.store = store
        self.strategy = strategy or ExactSearch()
        self.default_top_k = default_top_k

    def search(self, query: str, top_k: Optional[int] = None) -> list[SearchResult]:
        """
        Return up to ``top_k`` results, best first.

        Raises:
            ValueError: If top_k < 1.
            EmptyInputError: If the query is empty (store not empty).
            EmbeddingError: If the query cannot be embedded.
        """
        k = self.default_top_k if top_k is None else top_k
        if k < 1:
            raise ValueError(f"top_k must be at least 1, got {k}")

        records = self.store.all()
        if not records:
            return []

        if not query or not query.strip():
            raise EmptyInputError("Query is empty", query=query)

        try:
            query_vector = self.embedder.embed(query)
        except EmbeddingError as e:
            e.query = query
            logger.error("Query embedding failed: %s", e)
            raise

        ranked = self.strategy.rank(query_vector, records, k)
        logger.debug(
            "Ranked %d records for query (%d chars), returning %d",
            len(records), len(query), len(ranked),
        )
        return [
            SearchResult(
                record_id=record.record_id,
                text=record.text,
                metadata=dict(record.metadata),
                similarity=score,
            )
            for record, score in ranked
        ]

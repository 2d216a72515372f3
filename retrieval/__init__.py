"""
Retrieval component for the knowledge base.

Ingests documents (extract → chunk → embed → store) and answers
similarity queries over the stored chunks.

Quick Start:
    from retrieval import KnowledgeBase

    kb = KnowledgeBase().open()
    result = kb.add_document(pdf_bytes, "gesetz.pdf")
    hits = kb.search("Probezeit", top_k=3)
"""

__version__ = "2.0.0"

from .config import KnowledgeBaseConfig
from .exceptions import DuplicateDocumentError
from .ingestion import IngestionPipeline, make_record_id
from .knowledge_base import KnowledgeBase
from .models import (
    ClearResponse,
    Document,
    DocumentSummary,
    IngestResult,
    SearchRequest,
    SearchResponse,
)
from .registry import DocumentRegistry
from .retriever import ExactSearch, Retriever, SearchStrategy, cosine_similarity

__all__ = [
    "__version__",
    "KnowledgeBaseConfig",
    "KnowledgeBase",
    "IngestionPipeline",
    "Retriever",
    "ExactSearch",
    "SearchStrategy",
    "cosine_similarity",
    "make_record_id",
    "DocumentRegistry",
    "Document",
    "DocumentSummary",
    "IngestResult",
    "ClearResponse",
    "SearchRequest",
    "SearchResponse",
    "DuplicateDocumentError",
]

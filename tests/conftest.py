"""
Pytest fixtures for the knowledge base tests.

The fake embedder is a deterministic bag-of-words hashing model: identical
texts get identical unit vectors, texts sharing words get positive
similarity.
"""

import hashlib
import math
import threading

import fitz
import pytest

from pdf_extractor import DocumentMetadata, ExtractedDocument
from retrieval import KnowledgeBase, KnowledgeBaseConfig
from vector_store.exceptions import EmbeddingError, EmptyInputError

FAKE_DIMENSIONS = 64


def fake_vector(text: str, dimensions: int = FAKE_DIMENSIONS) -> list[float]:
    vector = [0.0] * dimensions
    for word in text.lower().split():
        digest = hashlib.md5(word.encode("utf-8")).digest()
        vector[digest[0] % dimensions] += 1.0
    norm = math.sqrt(sum(v * v for v in vector))
    if norm == 0:
        return vector
    return [v / norm for v in vector]


class FakeEmbedder:
    """In-process EmbeddingProvider with call tracking and injectable failures."""

    def __init__(self, dimensions: int = FAKE_DIMENSIONS, fail_on_call: int | None = None):
        self._dimensions_value = dimensions
        self.fail_on_call = fail_on_call
        self.calls: list[str] = []
        self.initialize_calls = 0
        self._lock = threading.Lock()

    @property
    def dimensions(self) -> int | None:
        return self._dimensions_value if self.initialize_calls else None

    def initialize(self) -> None:
        self.initialize_calls += 1

    def embed(self, text: str) -> list[float]:
        if not text or not text.strip():
            raise EmptyInputError("Cannot embed empty text")
        with self._lock:
            self.calls.append(text)
            call_number = len(self.calls)
        if self.fail_on_call is not None and call_number == self.fail_on_call:
            raise EmbeddingError("model crashed", model="fake")
        return fake_vector(text, self._dimensions_value)


class FakeExtractor:
    """Treats the uploaded bytes as UTF-8 text."""

    def __init__(self, page_count: int = 1):
        self.page_count = page_count
        self.calls: list[str] = []

    def extract(self, file_bytes: bytes, filename: str) -> ExtractedDocument:
        self.calls.append(filename)
        return ExtractedDocument(
            text=file_bytes.decode("utf-8"),
            metadata=DocumentMetadata(filename=filename, page_count=self.page_count),
        )


def make_words(count: int, prefix: str = "w") -> str:
    return " ".join(f"{prefix}{i}" for i in range(count))


def make_pdf(pages: list[str]) -> bytes:
    doc = fitz.open()
    for text in pages:
        page = doc.new_page()
        page.insert_text((72, 72), text)
    data = doc.tobytes()
    doc.close()
    return data


@pytest.fixture
def fake_embedder():
    return FakeEmbedder()


@pytest.fixture
def fake_extractor():
    return FakeExtractor()


@pytest.fixture
def kb_config():
    return KnowledgeBaseConfig(chunk_size=500, chunk_overlap=50, top_k=3)


@pytest.fixture
def knowledge_base(kb_config, fake_embedder, fake_extractor):
    """KnowledgeBase wired with fakes; no Ollama or PDF parsing needed."""
    return KnowledgeBase(kb_config, embedder=fake_embedder, extractor=fake_extractor)

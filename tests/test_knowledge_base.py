"""Tests for retrieval.knowledge_base: the KnowledgeBase session."""

import pytest
from unittest.mock import patch

from conftest import FakeEmbedder, make_pdf, make_words
from retrieval import KnowledgeBase, KnowledgeBaseConfig
from vector_store.embedder import OllamaEmbedder
from vector_store.exceptions import EmptyInputError
from vector_store.retry import RetryingEmbedder


class TestLifecycle:
    def test_open_initializes_embedder(self, knowledge_base, fake_embedder):
        assert knowledge_base.is_open is False
        assert knowledge_base.open() is knowledge_base
        assert knowledge_base.is_open is True
        assert fake_embedder.initialize_calls == 1

    def test_context_manager_clears_on_exit(self, kb_config, fake_extractor):
        with KnowledgeBase(kb_config, embedder=FakeEmbedder(), extractor=fake_extractor) as kb:
            kb.add_document(b"Arbeitsvertrag Probezeit", "a.pdf")
            assert kb.count() == 1
        assert kb.count() == 0
        assert kb.is_open is False

    def test_independent_instances(self, kb_config, fake_extractor):
        first = KnowledgeBase(kb_config, embedder=FakeEmbedder(), extractor=fake_extractor)
        second = KnowledgeBase(kb_config, embedder=FakeEmbedder(), extractor=fake_extractor)
        first.add_document(b"Nur im ersten", "a.pdf")
        assert first.count() == 1
        assert second.count() == 0

    def test_default_embedder_from_config(self):
        with patch("vector_store.embedder.ollama.Client"):
            kb = KnowledgeBase(KnowledgeBaseConfig(embed_model="nomic-embed-text"))
        assert isinstance(kb.embedder, OllamaEmbedder)
        assert kb.embedder.model == "nomic-embed-text"

    def test_retry_wrapper_when_configured(self):
        with patch("vector_store.embedder.ollama.Client"):
            kb = KnowledgeBase(KnowledgeBaseConfig(embed_retries=3))
        assert isinstance(kb.embedder, RetryingEmbedder)
        assert kb.embedder.max_retries == 3


class TestOperations:
    def test_count_documents_and_chunks(self, knowledge_base):
        assert knowledge_base.count() == 0
        knowledge_base.add_document(make_words(1000).encode(), "lang.pdf")
        knowledge_base.add_document(b"Kurzer Text", "kurz.pdf")
        assert knowledge_base.count() == 2
        assert knowledge_base.chunk_count() == 4

    def test_documents_listed_in_upload_order(self, knowledge_base):
        knowledge_base.add_document(b"Erstes Dokument", "a.pdf")
        knowledge_base.add_document(b"Zweites Dokument", "b.pdf")
        assert [d.document_id for d in knowledge_base.documents()] == ["a.pdf", "b.pdf"]

    def test_clear_all(self, knowledge_base):
        knowledge_base.add_document(make_words(1000).encode(), "a.pdf")
        knowledge_base.add_document(b"Kurzer Text", "b.pdf")

        response = knowledge_base.clear_all()

        assert response.documents_removed == 2
        assert response.chunks_removed == 4
        assert knowledge_base.count() == 0
        assert knowledge_base.chunk_count() == 0
        assert knowledge_base.search("Kurzer Text") == []

    def test_clear_empty(self, knowledge_base):
        response = knowledge_base.clear_all()
        assert response.documents_removed == 0
        assert response.chunks_removed == 0

    def test_same_filename_after_clear(self, knowledge_base):
        knowledge_base.add_document(b"Version eins", "a.pdf")
        knowledge_base.clear_all()
        result = knowledge_base.add_document(b"Version zwei", "a.pdf")
        assert result.chunks_added == 1


class TestSearch:
    def test_chunk_text_finds_itself(self, knowledge_base):
        knowledge_base.add_document(make_words(1000).encode(), "a.pdf")
        chunk = knowledge_base.store.all()[1]

        results = knowledge_base.search(chunk.text, top_k=1)

        assert results[0].record_id == chunk.record_id
        assert results[0].similarity == pytest.approx(1.0)

    def test_relevant_document_ranks_first(self, knowledge_base):
        knowledge_base.add_document(b"Die Probezeit betraegt sechs Monate", "arbeit.pdf")
        knowledge_base.add_document(b"Der Mietvertrag endet mit Kuendigung", "miete.pdf")

        results = knowledge_base.search("Wie lange ist die Probezeit", top_k=2)

        assert results[0].metadata["filename"] == "arbeit.pdf"
        assert results[0].similarity > results[1].similarity

    def test_uses_configured_top_k(self, knowledge_base):
        for n in range(5):
            knowledge_base.add_document(f"Dokument nummer {n}".encode(), f"{n}.pdf")
        assert len(knowledge_base.search("Dokument")) == 3

    def test_empty_query(self, knowledge_base):
        knowledge_base.add_document(b"Text", "a.pdf")
        with pytest.raises(EmptyInputError):
            knowledge_base.search("")

    def test_empty_knowledge_base(self, knowledge_base, fake_embedder):
        assert knowledge_base.search("irgendwas") == []
        assert fake_embedder.calls == []


class TestWithPdfExtractor:
    def test_pdf_round_trip(self, kb_config):
        kb = KnowledgeBase(kb_config, embedder=FakeEmbedder())
        result = kb.add_document(make_pdf(["Vacation days", "Notice period"]), "contract.pdf")

        assert result.metadata.page_count == 2
        assert result.chunks_added == 1
        hits = kb.search("Vacation days Notice period", top_k=1)
        assert hits[0].metadata["filename"] == "contract.pdf"

    def test_pdf_without_text_rejected(self, kb_config):
        kb = KnowledgeBase(kb_config, embedder=FakeEmbedder())
        with pytest.raises(EmptyInputError):
            kb.add_document(make_pdf([""]), "scan.pdf")
        assert kb.count() == 0

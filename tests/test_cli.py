"""Tests for generation.cli: the interactive upload helper and loop."""

from unittest.mock import MagicMock, patch

from conftest import FakeEmbedder, make_pdf
from generation import cli
from retrieval import KnowledgeBase
from vector_store.exceptions import EmbeddingConnectionError


def test_upload_pdf(tmp_path, kb_config, capsys):
    kb = KnowledgeBase(kb_config, embedder=FakeEmbedder())
    path = tmp_path / "contract.pdf"
    path.write_bytes(make_pdf(["Notice period three months"]))

    cli.upload(kb, str(path))

    assert kb.count() == 1
    assert "Added contract.pdf: 1 pages, 1 chunks" in capsys.readouterr().out


def test_upload_missing_file(tmp_path, knowledge_base, capsys):
    cli.upload(knowledge_base, str(tmp_path / "missing.pdf"))
    assert "File not found" in capsys.readouterr().out
    assert knowledge_base.count() == 0


def test_upload_wrong_suffix(tmp_path, knowledge_base, capsys):
    path = tmp_path / "notes.txt"
    path.write_text("Notizen")
    cli.upload(knowledge_base, str(path))
    assert "Only PDF files" in capsys.readouterr().out


def test_upload_duplicate_reported(tmp_path, kb_config, capsys):
    kb = KnowledgeBase(kb_config, embedder=FakeEmbedder())
    path = tmp_path / "a.pdf"
    path.write_bytes(make_pdf(["Text"]))

    cli.upload(kb, str(path))
    cli.upload(kb, str(path))

    assert "Could not add a.pdf" in capsys.readouterr().out
    assert kb.count() == 1


def test_main_loop(monkeypatch, knowledge_base, capsys):
    monkeypatch.delenv("DEEPSEEK_API_KEY", raising=False)
    inputs = iter(["/count", "/help", "Was gilt?", "/clear", "exit"])
    monkeypatch.setattr("builtins.input", lambda prompt="": next(inputs))

    answer = MagicMock(answer="Keine Dokumente.", sources=[])
    with patch.object(cli, "KnowledgeBase", return_value=knowledge_base), \
         patch.object(cli, "AnswerService") as MockService, \
         patch.object(cli, "setup_logging"):
        MockService.return_value.answer.return_value = answer
        cli.main()

    out = capsys.readouterr().out
    assert "0 documents, 0 chunks" in out
    assert "Keine Dokumente." in out
    assert "Removed 0 documents." in out
    MockService.return_value.answer.assert_called_once_with("Was gilt?")


def test_main_exits_on_eof(monkeypatch, knowledge_base):
    def eof(prompt=""):
        raise EOFError

    monkeypatch.setattr("builtins.input", eof)
    with patch.object(cli, "KnowledgeBase", return_value=knowledge_base), \
         patch.object(cli, "setup_logging"):
        cli.main()
    assert knowledge_base.is_open is False


def test_main_starts_when_embedder_unavailable(monkeypatch, kb_config, fake_extractor, capsys):
    class OfflineEmbedder(FakeEmbedder):
        def initialize(self):
            raise EmbeddingConnectionError("Cannot connect to Ollama")

    kb = KnowledgeBase(kb_config, embedder=OfflineEmbedder(), extractor=fake_extractor)
    inputs = iter(["/count", "Was gilt?", "exit"])
    monkeypatch.setattr("builtins.input", lambda prompt="": next(inputs))

    with patch.object(cli, "KnowledgeBase", return_value=kb), \
         patch.object(cli, "AnswerService") as MockService, \
         patch.object(cli, "setup_logging"):
        MockService.return_value.answer.return_value = MagicMock(answer="Ohne Kontext.", sources=[])
        cli.main()

    out = capsys.readouterr().out
    assert "Embedding model not ready" in out
    assert "0 documents, 0 chunks" in out
    assert "Ohne Kontext." in out
    assert kb.is_open is False

"""Tests for chunking.chunker: WordChunker."""

import math

import pytest

from chunking import Chunk, ChunkingConfig, ChunkingConfigError, WordChunker, chunk_text
from conftest import make_words


class TestChunkCount:
    @pytest.mark.parametrize("word_count", [1, 449, 450, 451, 500, 900, 1000, 2345])
    def test_default_window_count(self, word_count):
        chunks = chunk_text(make_words(word_count))
        assert len(chunks) == math.ceil(word_count / 450)

    def test_empty_text(self):
        assert chunk_text("") == []

    def test_whitespace_only(self):
        assert chunk_text("   \n\t  ") == []

    def test_shorter_than_chunk_size(self):
        chunks = chunk_text("Ein kurzer Text mit sieben Wörtern hier.")
        assert len(chunks) == 1
        assert chunks[0].start_word == 0
        assert chunks[0].end_word == 7
        assert chunks[0].total_chunks == 1


class TestOverlap:
    def test_thousand_words(self):
        chunks = chunk_text(make_words(1000))
        assert [(c.start_word, c.end_word) for c in chunks] == [
            (0, 500),
            (450, 950),
            (900, 1000),
        ]

    def test_successor_repeats_last_overlap_words(self):
        chunks = chunk_text(make_words(1000))
        for prev, curr in zip(chunks, chunks[1:]):
            assert prev.text.split()[-50:] == curr.text.split()[:50]

    def test_final_window_may_be_short(self):
        chunks = chunk_text(make_words(1000))
        assert chunks[-1].word_count == 100

    def test_text_matches_offsets(self):
        text = make_words(1200)
        words = text.split()
        for chunk in chunk_text(text):
            assert chunk.text == " ".join(words[chunk.start_word:chunk.end_word])

    def test_zero_overlap(self):
        chunks = chunk_text(make_words(10), chunk_size=4, overlap=0)
        assert [(c.start_word, c.end_word) for c in chunks] == [(0, 4), (4, 8), (8, 10)]


class TestChunkMetadata:
    def test_indices_and_totals(self):
        chunks = chunk_text(make_words(1000))
        assert [c.index for c in chunks] == [0, 1, 2]
        assert all(c.total_chunks == 3 for c in chunks)

    def test_offsets_within_bounds(self):
        text = make_words(777)
        for chunk in chunk_text(text, chunk_size=100, overlap=10):
            assert 0 <= chunk.start_word < chunk.end_word <= 777

    def test_token_count_populated(self):
        chunk = chunk_text("Hello world")[0]
        assert chunk.token_count >= 2

    def test_whitespace_is_normalized(self):
        chunk = chunk_text("eins\n\nzwei\tdrei   vier")[0]
        assert chunk.text == "eins zwei drei vier"

    def test_chunks_are_immutable(self):
        chunk = chunk_text("eins zwei")[0]
        with pytest.raises(Exception):
            chunk.text = "anders"


class TestConfigValidation:
    def test_overlap_equal_to_size(self):
        with pytest.raises(ChunkingConfigError, match="overlap"):
            ChunkingConfig(chunk_size=50, overlap=50)

    def test_overlap_larger_than_size(self):
        with pytest.raises(ChunkingConfigError):
            chunk_text(make_words(10), chunk_size=5, overlap=8)

    def test_call_override_is_validated(self):
        chunker = WordChunker()
        with pytest.raises(ChunkingConfigError):
            chunker.chunk("some words", chunk_size=10, overlap=10)

    def test_negative_overlap(self):
        with pytest.raises(ChunkingConfigError):
            ChunkingConfig(chunk_size=10, overlap=-1)

    def test_zero_chunk_size(self):
        with pytest.raises(ChunkingConfigError):
            ChunkingConfig(chunk_size=0, overlap=0)

    def test_error_is_value_error(self):
        with pytest.raises(ValueError):
            ChunkingConfig(chunk_size=10, overlap=20)

    def test_error_carries_parameters(self):
        with pytest.raises(ChunkingConfigError) as exc_info:
            ChunkingConfig(chunk_size=10, overlap=20)
        assert exc_info.value.chunk_size == 10
        assert exc_info.value.overlap == 20

    def test_step(self):
        assert ChunkingConfig().step == 450


class TestChunkModel:
    def test_rejects_empty_range(self):
        with pytest.raises(ValueError):
            Chunk(text="x", start_word=5, end_word=5, index=0, total_chunks=1)

    def test_rejects_index_out_of_range(self):
        with pytest.raises(ValueError):
            Chunk(text="x", start_word=0, end_word=1, index=1, total_chunks=1)

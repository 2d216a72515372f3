"""
Word Chunker - Overlapping fixed-size word windows

Algorithm:
1. Split the text into words on any whitespace.
2. Emit windows of ``chunk_size`` words starting at 0, step, 2*step, ...
   where ``step = chunk_size - overlap``.
3. A window ends at ``min(start + chunk_size, word_count)``, so the last
   window may be shorter.
4. Windows whose joined text is empty after trimming are dropped.

Usage:
    from chunking import WordChunker, ChunkingConfig

    chunker = WordChunker(ChunkingConfig(chunk_size=500, overlap=50))
    chunks = chunker.chunk(text)
"""

from typing import Optional

from .exceptions import validate_window
from .models import Chunk, ChunkingConfig, DEFAULT_CHUNK_SIZE, DEFAULT_OVERLAP
from .token_counter import count_tokens


class WordChunker:
    """Splits document text into overlapping word windows."""

    def __init__(self, config: Optional[ChunkingConfig] = None):
        self.config = config or ChunkingConfig()

    def chunk(
        self,
        text: str,
        chunk_size: Optional[int] = None,
        overlap: Optional[int] = None,
    ) -> list[Chunk]:
        """
        Chunk ``text`` into word windows.

        Args:
            text: Extracted document text.
            chunk_size: Window size in words (defaults to the config).
            overlap: Words shared between consecutive windows (defaults to the config).

        Returns:
            Chunks in document order. Empty for empty or whitespace-only text.

        Raises:
            ChunkingConfigError: If overlap >= chunk_size.
        """
        size = self.config.chunk_size if chunk_size is None else chunk_size
        over = self.config.overlap if overlap is None else overlap
        validate_window(size, over)

        words = text.split() if text else []
        windows = self._windows(words, size, size - over)
        total = len(windows)

        return [
            Chunk(
                text=window_text,
                start_word=start,
                end_word=end,
                index=i,
                total_chunks=total,
                token_count=count_tokens(window_text),
            )
            for i, (window_text, start, end) in enumerate(windows)
        ]

    @staticmethod
    def _windows(
        words: list[str], size: int, step: int
    ) -> list[tuple[str, int, int]]:
        word_count = len(words)
        windows: list[tuple[str, int, int]] = []
        for start in range(0, word_count, step):
            end = min(start + size, word_count)
            window_text = " ".join(words[start:end])
            if window_text.strip():
                windows.append((window_text, start, end))
        return windows


def chunk_text(
    text: str,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
    overlap: int = DEFAULT_OVERLAP,
) -> list[Chunk]:
    """Chunk ``text`` with explicit window parameters."""
    return WordChunker(ChunkingConfig(chunk_size=chunk_size, overlap=overlap)).chunk(text)

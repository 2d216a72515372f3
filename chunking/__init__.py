"""
Chunking Module - Overlapping word windows for retrieval

Splits extracted document text into fixed-size word windows that share
``overlap`` words with their predecessor.

Quick Start:
    from chunking import WordChunker, ChunkingConfig

    chunker = WordChunker(ChunkingConfig(chunk_size=500, overlap=50))
    chunks = chunker.chunk(document.text)
"""

__version__ = "2.0.0"

from .chunker import WordChunker, chunk_text
from .exceptions import ChunkingConfigError
from .models import Chunk, ChunkingConfig
from .token_counter import count_tokens

__all__ = [
    "__version__",
    "WordChunker",
    "chunk_text",
    "ChunkingConfigError",
    "Chunk",
    "ChunkingConfig",
    "count_tokens",
]

"""
Token Counter for chunks and chat context budgets

Uses tiktoken with the cl100k_base encoding. Chunk boundaries are word
based, token counts are informational for chunks and a hard budget when
assembling chat context.

Usage:
    from chunking.token_counter import count_tokens

    n = count_tokens("Ein Beispielsatz.")
"""

import tiktoken

# Initialized once, reused across calls.
_encoder: tiktoken.Encoding | None = None


def _get_encoder() -> tiktoken.Encoding:
    global _encoder
    if _encoder is None:
        _encoder = tiktoken.get_encoding("cl100k_base")
    return _encoder


def count_tokens(text: str) -> int:
    """Return the number of cl100k_base tokens in ``text``."""
    if not text:
        return 0
    return len(_get_encoder().encode(text))


def truncate_to_tokens(text: str, max_tokens: int) -> str:
    """Cut ``text`` to at most ``max_tokens`` tokens."""
    if max_tokens <= 0 or not text:
        return ""
    encoder = _get_encoder()
    tokens = encoder.encode(text)
    if len(tokens) <= max_tokens:
        return text
    return encoder.decode(tokens[:max_tokens])

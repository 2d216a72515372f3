from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

from chunking.token_counter import count_tokens, truncate_to_tokens
from vector_store.models import SearchResult

from .prompts import CONTEXT_HEADER, EXCERPT_TEMPLATE, NO_CONTEXT_MESSAGE, UNKNOWN_SOURCE


@dataclass
class ContextBuildResult:
    context_text: str
    selected: list[SearchResult]
    used_tokens: int


def _excerpt(index: int, result: SearchResult) -> str:
    source = result.metadata.get("filename") or UNKNOWN_SOURCE
    return EXCERPT_TEMPLATE.format(index=index, source=source, text=result.text.strip())


def build_context(
    results: Sequence[SearchResult],
    max_context_tokens: Optional[int] = None,
) -> ContextBuildResult:
    """
    Render search results as numbered excerpts, best first.

    Excerpts are added while they fit into ``max_context_tokens``. If not even
    the first fits, a truncated prefix of it is used.
    """
    if not results:
        return ContextBuildResult(NO_CONTEXT_MESSAGE, [], count_tokens(NO_CONTEXT_MESSAGE))

    parts = [CONTEXT_HEADER]
    selected: list[SearchResult] = []
    used = count_tokens(CONTEXT_HEADER)

    for index, result in enumerate(results, start=1):
        block = _excerpt(index, result)
        block_tokens = count_tokens(block)
        if max_context_tokens is None or used + block_tokens <= max_context_tokens:
            parts.append(block)
            selected.append(result)
            used += block_tokens
            continue

        if not selected:
            prefix = truncate_to_tokens(block, max(max_context_tokens - used, 0))
            if prefix:
                parts.append(prefix)
                selected.append(result)
                used += count_tokens(prefix)
        break

    return ContextBuildResult("\n\n".join(parts), selected, used)


def build_messages(
    user_message: str,
    results: Sequence[SearchResult],
    system_prompt: str,
    max_context_tokens: Optional[int] = None,
) -> list[dict[str, str]]:
    context = build_context(results, max_context_tokens)
    return [
        {"role": "system", "content": system_prompt},
        {"role": "user", "content": f"{context.context_text}\n\n{user_message}"},
    ]

from __future__ import annotations

import logging
from typing import Optional

from pydantic import BaseModel, Field

from retrieval.knowledge_base import KnowledgeBase
from vector_store.models import SearchResult

from .chat_client import DeepSeekClient

logger = logging.getLogger(__name__)


class Answer(BaseModel):
    question: str
    answer: str
    sources: list[SearchResult] = Field(default_factory=list)


class AnswerService:
    """Retrieves context from the knowledge base and asks the chat model."""

    def __init__(
        self,
        knowledge_base: KnowledgeBase,
        chat_client: DeepSeekClient,
        top_k: int = 3,
    ):
        self.knowledge_base = knowledge_base
        self.chat_client = chat_client
        self.top_k = top_k

    def answer(self, question: str, top_k: Optional[int] = None) -> Answer:
        sources: list[SearchResult] = []
        # No documents means no search and no embedding call
        if self.knowledge_base.count() > 0:
            sources = self.knowledge_base.search(question, top_k or self.top_k)
        logger.info("Answering with %d context excerpts", len(sources))

        text = self.chat_client.chat(question, sources)
        return Answer(question=question, answer=text, sources=sources)

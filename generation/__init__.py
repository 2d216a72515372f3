"""
Answer generation on top of the knowledge base.

Retrieves the most relevant chunks and sends them with the question to an
OpenAI-compatible chat API (DeepSeek by default).
"""

__version__ = "2.0.0"

from .chat_client import DeepSeekClient
from .config import ChatConfig
from .context_builder import ContextBuildResult, build_context, build_messages
from .exceptions import (
    ChatConfigurationError,
    ChatConnectionError,
    ChatError,
    ChatResponseError,
    ChatTimeoutError,
)
from .service import Answer, AnswerService

__all__ = [
    "__version__",
    "DeepSeekClient",
    "ChatConfig",
    "ContextBuildResult",
    "build_context",
    "build_messages",
    "Answer",
    "AnswerService",
    "ChatError",
    "ChatConfigurationError",
    "ChatConnectionError",
    "ChatTimeoutError",
    "ChatResponseError",
]

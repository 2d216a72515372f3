"""
DeepSeek Chat Client - OpenAI-compatible chat completions

Sends the user's question together with the retrieved excerpts to the
DeepSeek chat API through the OpenAI SDK.

Usage:
    from generation import DeepSeekClient

    client = DeepSeekClient(api_key="sk-...")
    answer = client.chat("Wie lange ist die Probezeit?", results)
"""

from __future__ import annotations

import logging
from typing import Any, Optional, Sequence

from openai import (
    APIConnectionError as OpenAIConnectionError,
    APIError as OpenAIAPIError,
    APITimeoutError,
    OpenAI,
)

from vector_store.models import SearchResult

from .config import ChatConfig
from .context_builder import build_messages
from .exceptions import (
    ChatConfigurationError,
    ChatConnectionError,
    ChatError,
    ChatResponseError,
    ChatTimeoutError,
)
from .prompts import SYSTEM_PROMPT

logger = logging.getLogger(__name__)


class DeepSeekClient:
    """
    Chat completion client for the DeepSeek API.

    The SDK's own retries are disabled; a failed call raises immediately.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: str = ChatConfig.base_url,
        model: str = ChatConfig.model,
        temperature: float = ChatConfig.temperature,
        max_tokens: int = ChatConfig.max_tokens,
        timeout: float = ChatConfig.timeout,
        max_context_tokens: Optional[int] = ChatConfig.max_context_tokens,
        system_prompt: str = SYSTEM_PROMPT,
    ):
        self.api_key = api_key or ""
        self.base_url = base_url
        self.model = model
        self.temperature = temperature
        self.max_tokens = max_tokens
        self.timeout = timeout
        self.max_context_tokens = max_context_tokens
        self.system_prompt = system_prompt
        self._client: Optional[OpenAI] = None

    @classmethod
    def from_config(cls, config: ChatConfig) -> "DeepSeekClient":
        return cls(
            api_key=config.api_key,
            base_url=config.base_url,
            model=config.model,
            temperature=config.temperature,
            max_tokens=config.max_tokens,
            timeout=config.timeout,
            max_context_tokens=config.max_context_tokens,
        )

    def set_api_key(self, api_key: str) -> None:
        self.api_key = api_key
        self._client = None

    def chat(
        self,
        user_message: str,
        context: Sequence[SearchResult] = (),
        temperature: Optional[float] = None,
    ) -> str:
        """
        Answer ``user_message`` using the retrieved ``context``.

        Raises:
            ChatConfigurationError: No API key is set.
            ChatTimeoutError: The request timed out.
            ChatConnectionError: The API could not be reached.
            ChatResponseError: The API returned no choices.
            ChatError: Any other API failure.
        """
        client = self._get_client()
        messages = build_messages(
            user_message, context, self.system_prompt, self.max_context_tokens
        )

        try:
            response = client.chat.completions.create(
                model=self.model,
                messages=messages,
                temperature=self.temperature if temperature is None else temperature,
                max_tokens=self.max_tokens,
                stream=False,
            )
        except APITimeoutError as e:
            raise ChatTimeoutError(
                f"Chat request timed out after {self.timeout}s", original_error=e
            ) from e
        except OpenAIConnectionError as e:
            raise ChatConnectionError(
                f"Cannot reach chat API at {self.base_url}", original_error=e
            ) from e
        except OpenAIAPIError as e:
            raise ChatError(
                f"Chat API error: {e}",
                original_error=e,
                status_code=getattr(e, "status_code", None),
            ) from e

        if not response.choices:
            raise ChatResponseError("No response received from chat API")

        content = response.choices[0].message.content or ""
        logger.debug("Chat answer received (%d chars)", len(content))
        return content

    def test_connection(self) -> dict[str, Any]:
        """Send a greeting and report whether the API answered."""
        try:
            message = self.chat("Hello", [], temperature=0.7)
            return {"success": True, "message": message}
        except ChatError as e:
            return {"success": False, "error": str(e)}

    def _get_client(self) -> OpenAI:
        if not self.api_key:
            raise ChatConfigurationError(
                "Chat API key is not set. Set DEEPSEEK_API_KEY."
            )
        if self._client is None:
            self._client = OpenAI(
                api_key=self.api_key,
                base_url=self.base_url,
                timeout=self.timeout,
                max_retries=0,
            )
        return self._client

"""
Exceptions for the chat boundary.

Exception Hierarchy:
    ChatError (base)
    ├── ChatConfigurationError
    ├── ChatConnectionError
    ├── ChatTimeoutError
    └── ChatResponseError
"""

from __future__ import annotations

from typing import Optional


class ChatError(Exception):
    """
    Base exception for chat completion failures.

    Attributes:
        original_error: The underlying SDK error (optional)
        status_code: HTTP status code if available
    """

    def __init__(
        self,
        message: str = "Chat completion failed",
        original_error: Optional[Exception] = None,
        status_code: Optional[int] = None,
    ):
        self.message = message
        self.original_error = original_error
        self.status_code = status_code
        if status_code:
            message = f"{message} (HTTP {status_code})"
        super().__init__(message)


class ChatConfigurationError(ChatError):
    """Raised when the client is used without an API key."""


class ChatConnectionError(ChatError):
    """Raised when the chat API cannot be reached."""


class ChatTimeoutError(ChatError):
    """Raised when a chat request exceeds the configured timeout."""


class ChatResponseError(ChatError):
    """Raised when the API answers without any completion choice."""

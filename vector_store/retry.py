"""
Retry policy around an embedding provider.

Transient failures (connection errors, timeouts) are retried with
exponential backoff. Everything else propagates on the first attempt.
"""

import logging
import time
from typing import Any, Callable, Optional, TypeVar

from .embedder import EmbeddingProvider
from .exceptions import EmbeddingError, is_retryable

logger = logging.getLogger(__name__)

T = TypeVar("T")


class RetryingEmbedder:
    """
    Wraps an EmbeddingProvider and retries transient failures.

    Args:
        inner: The provider to wrap.
        max_retries: Maximum attempts per call (including the first).
        retry_delay: Initial delay between attempts, doubled after each one.
        sleep: Sleep function (replaceable in tests).
    """

    def __init__(
        self,
        inner: EmbeddingProvider,
        max_retries: int = 3,
        retry_delay: float = 1.0,
        sleep: Callable[[float], None] = time.sleep,
    ):
        if max_retries < 1:
            raise ValueError("max_retries must be at least 1")
        self.inner = inner
        self.max_retries = max_retries
        self.retry_delay = retry_delay
        self._sleep = sleep

    @property
    def dimensions(self) -> Optional[int]:
        return self.inner.dimensions

    def initialize(self) -> None:
        self._call_with_retry(self.inner.initialize)

    def embed(self, text: str) -> list[float]:
        return self._call_with_retry(self.inner.embed, text)

    def health_check(self) -> dict[str, Any]:
        """Report the wrapped provider's health (empty if it has no check)."""
        check = getattr(self.inner, "health_check", None)
        return check() if check is not None else {}

    def _call_with_retry(self, func: Callable[..., T], *args) -> T:
        delay = self.retry_delay
        for attempt in range(1, self.max_retries + 1):
            try:
                return func(*args)
            except EmbeddingError as e:
                if not is_retryable(e) or attempt == self.max_retries:
                    raise
                logger.warning(
                    "Transient embedding failure (%s), retrying in %.1fs (attempt %d/%d)",
                    type(e).__name__, delay, attempt, self.max_retries,
                )
                self._sleep(delay)
                delay *= 2
        raise AssertionError("unreachable")

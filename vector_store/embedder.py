"""
Ollama Embedder - Local embedding generation via Ollama API

Wraps the Ollama Python client behind a small provider contract:
``initialize()`` once, then ``embed(text) -> vector``.

Design:
- One-time initialization guarded by a lock: verifies the server, pulls the
  model if it is missing and probes the embedding dimension.
- ``embed`` initializes on first use.
- Ollama's /api/embed returns mean-pooled, L2-normalized vectors.
- Every vector must have the probed dimension for the embedder's lifetime.
- No retries here; see ``vector_store.retry.RetryingEmbedder``.

Usage:
    from vector_store.embedder import OllamaEmbedder

    embedder = OllamaEmbedder(model="all-minilm")
    embedder.initialize()
    vector = embedder.embed("Ein Beispieltext")
"""

import logging
import threading
import time
from typing import Optional, Protocol, runtime_checkable

import httpx
import ollama

from .exceptions import (
    EmbeddingConnectionError,
    EmbeddingError,
    EmbeddingTimeoutError,
    EmptyInputError,
)

logger = logging.getLogger(__name__)

DEFAULT_EMBED_MODEL = "all-minilm"
DEFAULT_OLLAMA_URL = "http://localhost:11434"
PROBE_TEXT = "dimension probe"


@runtime_checkable
class EmbeddingProvider(Protocol):
    """Text in, fixed-length vector out."""

    @property
    def dimensions(self) -> Optional[int]:
        ...

    def initialize(self) -> None:
        ...

    def embed(self, text: str) -> list[float]:
        ...


class OllamaEmbedder:
    """
    Generates text embeddings using a local Ollama model.

    Safe to share between threads: concurrent callers of ``initialize``
    wait for the in-flight initialization instead of starting their own.
    """

    def __init__(
        self,
        model: str = DEFAULT_EMBED_MODEL,
        base_url: str = DEFAULT_OLLAMA_URL,
        timeout: Optional[float] = 60.0,
        auto_pull: bool = True,
    ):
        """
        Initialize the embedder. No request is made until ``initialize``.

        Args:
            model: Ollama model name for embeddings.
            base_url: Ollama API base URL.
            timeout: Per-request timeout in seconds (None disables it).
            auto_pull: Pull the model during initialization if it is missing.
        """
        self.model = model
        self.base_url = base_url
        self.timeout = timeout
        self.auto_pull = auto_pull
        self._client = ollama.Client(host=base_url, timeout=timeout)
        self._dimensions: Optional[int] = None
        self._initialized = False
        self._init_lock = threading.Lock()

    @property
    def dimensions(self) -> Optional[int]:
        """Return the embedding dimensions (available after initialization)."""
        return self._dimensions

    @property
    def initialized(self) -> bool:
        return self._initialized

    def initialize(self) -> None:
        """
        Prepare the model. Idempotent; performs at most one real initialization.

        Raises:
            EmbeddingError: If the server or model is unavailable.
        """
        if self._initialized:
            return
        with self._init_lock:
            if self._initialized:
                return

            start = time.time()
            logger.info("Initializing embedding model %s at %s", self.model, self.base_url)

            if self.auto_pull and not self._model_available():
                logger.info("Pulling embedding model %s", self.model)
                try:
                    self._client.pull(self.model)
                except Exception as e:
                    raise self._translate_error(e, "model pull") from e

            probe = self._request(PROBE_TEXT)
            self._dimensions = len(probe)
            self._initialized = True
            logger.info(
                "Embedding model %s ready (dimensions=%d, %.2fs)",
                self.model, self._dimensions, time.time() - start,
            )

    def embed(self, text: str) -> list[float]:
        """
        Generate an embedding for a single text.

        Args:
            text: The text to embed.

        Returns:
            List of floats representing the normalized embedding vector.

        Raises:
            EmptyInputError: If the text is empty or whitespace.
            EmbeddingError: If initialization or inference fails.
        """
        if not text or not text.strip():
            raise EmptyInputError("Cannot embed empty text")

        self.initialize()
        embedding = self._request(text)
        if len(embedding) != self._dimensions:
            raise EmbeddingError(
                "Embedding dimension changed",
                details=f"expected {self._dimensions}, got {len(embedding)}",
                model=self.model,
            )
        return embedding

    def health_check(self) -> dict[str, bool | str | int | None]:
        """
        Check if Ollama is running and the embedding model is available.

        Returns:
            Dict with 'healthy', 'ollama_running', 'model_available',
            'initialized', 'dimensions' and 'error'.
        """
        result: dict[str, bool | str | int | None] = {
            "healthy": False,
            "ollama_running": False,
            "model_available": False,
            "initialized": self._initialized,
            "dimensions": self._dimensions,
            "model": self.model,
            "error": "",
        }

        try:
            model_names = self._list_models()
            result["ollama_running"] = True
            result["model_available"] = self._matches_model(model_names)

            if not result["model_available"]:
                result["error"] = (
                    f"Model '{self.model}' not found. "
                    f"Available: {model_names}. "
                    f"Pull it with: ollama pull {self.model}"
                )
            else:
                result["healthy"] = True

        except Exception as e:
            result["error"] = f"Cannot connect to Ollama: {e}"

        return result

    # -------------------------------------------------------------------------
    # Internal methods
    # -------------------------------------------------------------------------

    def _request(self, text: str) -> list[float]:
        try:
            response = self._client.embed(model=self.model, input=text)
        except Exception as e:
            raise self._translate_error(e, "embedding") from e

        embeddings = response["embeddings"]
        if not embeddings or not embeddings[0]:
            raise EmbeddingError("Ollama returned no embedding", model=self.model)
        return [float(value) for value in embeddings[0]]

    def _list_models(self) -> list[str]:
        return [m.model for m in self._client.list().models]

    def _matches_model(self, model_names: list[str]) -> bool:
        # "all-minilm" matches "all-minilm:latest"
        return any(name.startswith(self.model) for name in model_names)

    def _model_available(self) -> bool:
        try:
            return self._matches_model(self._list_models())
        except Exception as e:
            raise self._translate_error(e, "model listing") from e

    def _translate_error(self, error: Exception, action: str) -> EmbeddingError:
        if isinstance(error, httpx.TimeoutException):
            return EmbeddingTimeoutError(
                timeout=self.timeout, model=self.model, original_error=error
            )
        if isinstance(error, ollama.ResponseError):
            return EmbeddingError(
                f"Ollama {action} failed",
                details=str(error),
                model=self.model,
                original_error=error,
            )
        if (
            isinstance(error, (ConnectionError, httpx.ConnectError))
            or "refused" in str(error).lower()
        ):
            return EmbeddingConnectionError(
                f"Cannot connect to Ollama at {self.base_url}",
                details="Is Ollama running? Start it with: ollama serve",
                model=self.model,
                original_error=error,
            )
        return EmbeddingError(
            f"Ollama {action} failed",
            details=str(error),
            model=self.model,
            original_error=error,
        )

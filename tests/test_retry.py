"""Tests for vector_store.retry: RetryingEmbedder."""

import pytest
from unittest.mock import MagicMock

from vector_store.exceptions import (
    EmbeddingConnectionError,
    EmbeddingError,
    EmbeddingTimeoutError,
    is_retryable,
)
from vector_store.retry import RetryingEmbedder


@pytest.fixture
def inner():
    mock = MagicMock()
    mock.dimensions = 3
    return mock


@pytest.fixture
def sleeps():
    return []


def make_retrying(inner, sleeps, max_retries=3):
    return RetryingEmbedder(inner, max_retries=max_retries, retry_delay=0.5, sleep=sleeps.append)


class TestRetry:
    def test_success_first_try(self, inner, sleeps):
        inner.embed.return_value = [1.0, 0.0, 0.0]
        result = make_retrying(inner, sleeps).embed("text")
        assert result == [1.0, 0.0, 0.0]
        assert sleeps == []

    def test_retries_transient_errors(self, inner, sleeps):
        inner.embed.side_effect = [
            EmbeddingConnectionError("down"),
            EmbeddingTimeoutError(timeout=1.0),
            [0.0, 1.0, 0.0],
        ]
        result = make_retrying(inner, sleeps).embed("text")
        assert result == [0.0, 1.0, 0.0]
        assert inner.embed.call_count == 3
        assert sleeps == [0.5, 1.0]

    def test_gives_up_after_max_retries(self, inner, sleeps):
        inner.embed.side_effect = EmbeddingConnectionError("down")
        with pytest.raises(EmbeddingConnectionError):
            make_retrying(inner, sleeps, max_retries=2).embed("text")
        assert inner.embed.call_count == 2

    def test_permanent_error_not_retried(self, inner, sleeps):
        inner.embed.side_effect = EmbeddingError("bad model")
        with pytest.raises(EmbeddingError):
            make_retrying(inner, sleeps).embed("text")
        assert inner.embed.call_count == 1
        assert sleeps == []

    def test_initialize_retried(self, inner, sleeps):
        inner.initialize.side_effect = [EmbeddingConnectionError("down"), None]
        make_retrying(inner, sleeps).initialize()
        assert inner.initialize.call_count == 2

    def test_dimensions_delegated(self, inner, sleeps):
        assert make_retrying(inner, sleeps).dimensions == 3

    def test_health_check_delegated(self, inner, sleeps):
        inner.health_check.return_value = {"healthy": False, "error": "down"}
        assert make_retrying(inner, sleeps).health_check() == {"healthy": False, "error": "down"}

    def test_health_check_without_inner_check(self, sleeps):
        class Bare:
            dimensions = 3

        assert make_retrying(Bare(), sleeps).health_check() == {}

    def test_invalid_max_retries(self, inner):
        with pytest.raises(ValueError):
            RetryingEmbedder(inner, max_retries=0)


class TestIsRetryable:
    def test_transient(self):
        assert is_retryable(EmbeddingConnectionError("x"))
        assert is_retryable(EmbeddingTimeoutError())

    def test_permanent(self):
        assert not is_retryable(EmbeddingError("x"))
        assert not is_retryable(ValueError("x"))

"""Completion client exceptions.

Raised by the completion clients and caught by the extraction pipeline,
which reports every one of them as a completion-stage failure.
"""

from __future__ import annotations


class LLMError(Exception):
    """Base exception for completion client errors."""


class LLMUnavailableError(LLMError):
    """Raised when the completion service cannot be reached.

    Covers connection errors and timeouts. Retry and fallback decorators
    react to this error.
    """


class LLMTimeoutError(LLMUnavailableError):
    """Raised when a completion request times out."""


class LLMResponseError(LLMError):
    """Raised when the completion service answers with an HTTP error or an
    unexpected body."""


class LLMRateLimitError(LLMError):
    """Raised when the completion service rate limits the request."""


class LLMConfigurationError(LLMError):
    """Raised when a completion client is misconfigured (e.g. missing key)."""

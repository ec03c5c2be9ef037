"""Retrying completion client.

Wraps another client and repeats ``generate`` on transient failures
with exponential backoff.
"""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING, Any

from recipe_extractor.llm.exceptions import LLMRateLimitError, LLMUnavailableError
from recipe_extractor.observability.logging import get_logger


if TYPE_CHECKING:
    from recipe_extractor.llm.client.protocol import CompletionClientProtocol
    from recipe_extractor.llm.models import LLMCompletionResult


logger = get_logger(__name__)

RETRYABLE_ERRORS: tuple[type[Exception], ...] = (
    LLMUnavailableError,
    LLMRateLimitError,
)


class RetryingCompletionClient:
    """Completion client that retries a wrapped client.

    Only ``LLMUnavailableError`` (including timeouts) and
    ``LLMRateLimitError`` are retried. Response errors propagate on the
    first attempt since repeating the same request will not fix them.

    With ``max_retries=0`` this is a transparent pass-through.

    Example:
        ```python
        client = RetryingCompletionClient(
            OpenAIClient(api_key=...),
            max_retries=2,
            backoff_seconds=1.0,
        )
        ```
    """

    def __init__(
        self,
        inner: CompletionClientProtocol,
        *,
        max_retries: int = 0,
        backoff_seconds: float = 1.0,
    ) -> None:
        """Initialize the retrying client.

        Args:
            inner: Client that performs the actual requests.
            max_retries: Additional attempts after the first one.
            backoff_seconds: Base delay, doubled after every attempt.
        """
        if max_retries < 0:
            msg = "max_retries must be >= 0"
            raise ValueError(msg)
        self.inner = inner
        self.max_retries = max_retries
        self.backoff_seconds = backoff_seconds

    async def initialize(self) -> None:
        """Initialize the wrapped client."""
        await self.inner.initialize()

    async def shutdown(self) -> None:
        """Shutdown the wrapped client."""
        await self.inner.shutdown()

    async def generate(
        self,
        prompt: str,
        *,
        system: str | None = None,
        json_mode: bool = False,
        options: dict[str, Any] | None = None,
    ) -> LLMCompletionResult:
        """Generate with retries on transient failures.

        Raises:
            The last error from the wrapped client once attempts run out.
        """
        attempt = 0
        while True:
            try:
                return await self.inner.generate(
                    prompt,
                    system=system,
                    json_mode=json_mode,
                    options=options,
                )
            except RETRYABLE_ERRORS as e:
                if attempt >= self.max_retries:
                    raise
                delay = self.backoff_seconds * (2**attempt)
                attempt += 1
                logger.warning(
                    "Completion request failed, retrying",
                    attempt=attempt,
                    max_retries=self.max_retries,
                    delay=delay,
                    error=str(e),
                )
                await asyncio.sleep(delay)

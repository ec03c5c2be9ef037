"""Completion client protocol.

Defines the interface every completion client and client decorator
implements, so backends, retry and fallback compose freely.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable


if TYPE_CHECKING:
    from recipe_extractor.llm.models import LLMCompletionResult


@runtime_checkable
class CompletionClientProtocol(Protocol):
    """Protocol for text-completion clients.

    ``generate`` performs exactly one request to the backing service; retry
    policy belongs to a decorator (see ``RetryingCompletionClient``).
    """

    async def initialize(self) -> None:
        """Initialize client resources (HTTP connection pool)."""
        ...

    async def shutdown(self) -> None:
        """Release client resources."""
        ...

    async def generate(
        self,
        prompt: str,
        *,
        system: str | None = None,
        json_mode: bool = False,
        options: dict[str, Any] | None = None,
    ) -> LLMCompletionResult:
        """Generate a text completion.

        Args:
            prompt: User-level instruction text.
            system: Optional system-level directive.
            json_mode: Ask the service to emit a JSON object.
            options: Generation options (``temperature``, ``max_tokens``).

        Returns:
            LLMCompletionResult holding the raw text.

        Raises:
            LLMUnavailableError: Service unreachable.
            LLMTimeoutError: Request timed out.
            LLMRateLimitError: Request was rate limited.
            LLMResponseError: HTTP error or malformed response body.
        """
        ...

"""Fallback completion client that chains two providers.

Tries the primary provider first, falls back to the secondary on
LLMUnavailableError.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from recipe_extractor.llm.exceptions import LLMUnavailableError
from recipe_extractor.observability.logging import get_logger


if TYPE_CHECKING:
    from recipe_extractor.llm.client.protocol import CompletionClientProtocol
    from recipe_extractor.llm.models import LLMCompletionResult


logger = get_logger(__name__)


class FallbackCompletionClient:
    """Completion client with automatic fallback to a secondary provider.

    Fallback triggers on ``LLMUnavailableError`` (connection errors and
    timeouts). Response and rate limit errors propagate immediately.

    Example:
        ```python
        client = FallbackCompletionClient(
            primary=OpenAIClient(api_key=...),
            secondary=OllamaClient(...),
        )
        result = await client.generate("prompt")  # Tries OpenAI, then Ollama
        ```
    """

    def __init__(
        self,
        primary: CompletionClientProtocol,
        secondary: CompletionClientProtocol | None = None,
        *,
        fallback_enabled: bool = True,
    ) -> None:
        """Initialize the fallback client.

        Args:
            primary: Client tried first.
            secondary: Client used when the primary is unavailable.
            fallback_enabled: Master switch for fallback behavior.
        """
        self.primary = primary
        self.secondary = secondary
        self.fallback_enabled = fallback_enabled

    async def initialize(self) -> None:
        """Initialize both clients.

        If the secondary fails to start, the primary is shut down again
        before the error propagates.
        """
        await self.primary.initialize()
        if self.secondary is not None:
            try:
                await self.secondary.initialize()
            except Exception:
                await self.primary.shutdown()
                raise
        logger.info(
            "FallbackCompletionClient initialized",
            has_secondary=self.secondary is not None,
            fallback_enabled=self.fallback_enabled,
        )

    async def shutdown(self) -> None:
        """Shutdown both clients."""
        await self.primary.shutdown()
        if self.secondary is not None:
            await self.secondary.shutdown()
        logger.debug("FallbackCompletionClient shutdown")

    async def generate(
        self,
        prompt: str,
        *,
        system: str | None = None,
        json_mode: bool = False,
        options: dict[str, Any] | None = None,
    ) -> LLMCompletionResult:
        """Generate with automatic fallback on unavailability.

        Raises:
            LLMUnavailableError: If the primary fails and no fallback is
                configured, or if the secondary fails as well.
            LLMResponseError: If the service returns an HTTP error.
        """
        try:
            return await self.primary.generate(
                prompt,
                system=system,
                json_mode=json_mode,
                options=options,
            )
        except LLMUnavailableError as e:
            if not self.fallback_enabled or self.secondary is None:
                logger.warning("Primary completion service unavailable, no fallback")
                raise

            logger.warning(
                "Primary completion service unavailable, falling back to secondary",
                primary_error=str(e),
            )

            return await self.secondary.generate(
                prompt,
                system=system,
                json_mode=json_mode,
                options=options,
            )

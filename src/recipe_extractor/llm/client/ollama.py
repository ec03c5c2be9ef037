"""HTTP client for the Ollama completion service.

Used for local inference, either as the primary provider or as the
fallback target.
"""

from __future__ import annotations

from typing import Any

import httpx
from pydantic import ValidationError

from recipe_extractor.llm.exceptions import (
    LLMRateLimitError,
    LLMResponseError,
    LLMTimeoutError,
    LLMUnavailableError,
)
from recipe_extractor.llm.models import (
    LLMCompletionResult,
    OllamaGenerateRequest,
    OllamaGenerateResponse,
)
from recipe_extractor.observability.logging import get_logger


logger = get_logger(__name__)


class OllamaClient:
    """Async HTTP client for an Ollama instance.

    Attributes:
        base_url: Base URL of the Ollama service.
        model: Model used for generation.
        timeout: HTTP request timeout in seconds.
    """

    def __init__(
        self,
        base_url: str,
        model: str,
        timeout: float = 120.0,
    ) -> None:
        """Initialize the Ollama client.

        Args:
            base_url: Base URL of Ollama service (e.g., http://localhost:11434).
            model: Model name (e.g., mistral:7b).
            timeout: HTTP request timeout in seconds (default: 120).
        """
        self.base_url = base_url.rstrip("/")
        self.model = model
        self.timeout = timeout
        self._http_client: httpx.AsyncClient | None = None

    @property
    def generate_url(self) -> str:
        """Get the generate endpoint URL."""
        return f"{self.base_url}/api/generate"

    async def initialize(self) -> None:
        """Initialize the HTTP client with connection pooling."""
        if self._http_client is not None:
            return

        self._http_client = httpx.AsyncClient(
            timeout=httpx.Timeout(self.timeout),
            limits=httpx.Limits(
                max_keepalive_connections=10,
                max_connections=20,
            ),
        )
        logger.info(
            "OllamaClient initialized",
            base_url=self.base_url,
            model=self.model,
            timeout=self.timeout,
        )

    async def shutdown(self) -> None:
        """Close the HTTP client and release connections."""
        if self._http_client is not None:
            await self._http_client.aclose()
            self._http_client = None
            logger.debug("OllamaClient shutdown")

    async def generate(
        self,
        prompt: str,
        *,
        system: str | None = None,
        json_mode: bool = False,
        options: dict[str, Any] | None = None,
    ) -> LLMCompletionResult:
        """Generate a completion with a single /api/generate request.

        ``max_tokens`` in ``options`` is translated to Ollama's
        ``num_predict``.

        Raises:
            LLMUnavailableError: If Ollama cannot be reached.
            LLMTimeoutError: If the request times out.
            LLMRateLimitError: On HTTP 429.
            LLMResponseError: On other HTTP errors or a malformed body.
        """
        if self._http_client is None:
            await self.initialize()

        assert self._http_client is not None

        ollama_options: dict[str, Any] | None = None
        if options:
            ollama_options = {k: v for k, v in options.items() if k != "max_tokens"}
            if options.get("max_tokens") is not None:
                ollama_options["num_predict"] = options["max_tokens"]

        request = OllamaGenerateRequest(
            model=self.model,
            prompt=prompt,
            format="json" if json_mode else None,
            options=ollama_options,
            system=system,
        )

        try:
            response = await self._http_client.post(
                self.generate_url,
                json=request.model_dump(exclude_none=True),
            )
        except httpx.TimeoutException as e:
            logger.warning("Ollama request timeout", timeout=self.timeout)
            msg = f"Ollama timeout after {self.timeout}s"
            raise LLMTimeoutError(msg) from e
        except httpx.RequestError as e:
            logger.warning("Ollama connection error", error=str(e))
            msg = f"Cannot connect to Ollama: {e}"
            raise LLMUnavailableError(msg) from e

        if response.status_code == 429:
            msg = "Ollama rate limit exceeded"
            raise LLMRateLimitError(msg)

        try:
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.warning(
                "Ollama request failed",
                status_code=e.response.status_code,
                url=self.generate_url,
            )
            msg = f"Ollama returned {e.response.status_code}"
            raise LLMResponseError(msg) from e

        try:
            body = OllamaGenerateResponse.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            msg = f"Unexpected Ollama response body: {e}"
            raise LLMResponseError(msg) from e

        return LLMCompletionResult(
            raw_response=body.response,
            model=body.model,
            prompt_tokens=body.prompt_eval_count,
            completion_tokens=body.eval_count,
        )

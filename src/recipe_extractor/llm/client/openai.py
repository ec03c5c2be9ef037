"""HTTP client for OpenAI-compatible chat completion services.

Works against the OpenAI API and any server exposing the same
``/chat/completions`` contract. JSON mode is requested through
``response_format``.
"""

from __future__ import annotations

from typing import Any

import httpx
from aiolimiter import AsyncLimiter
from pydantic import ValidationError

from recipe_extractor.llm.exceptions import (
    LLMConfigurationError,
    LLMRateLimitError,
    LLMResponseError,
    LLMTimeoutError,
    LLMUnavailableError,
)
from recipe_extractor.llm.models import (
    ChatCompletionRequest,
    ChatCompletionResponse,
    ChatMessage,
    LLMCompletionResult,
)
from recipe_extractor.observability.logging import get_logger


logger = get_logger(__name__)


class OpenAIClient:
    """Async HTTP client for an OpenAI-compatible completion service.

    One ``generate`` call is one HTTP request. Requests are paced by a
    client-side limiter so bursts do not trip the provider's rate limit.

    Attributes:
        base_url: API base URL.
        model: Default model (e.g., gpt-4o-mini).
        timeout: HTTP request timeout in seconds.
    """

    DEFAULT_BASE_URL = "https://api.openai.com/v1"

    def __init__(
        self,
        api_key: str,
        model: str = "gpt-4o-mini",
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 60.0,
        requests_per_minute: float = 60.0,
    ) -> None:
        """Initialize the client.

        Args:
            api_key: Bearer token for the service.
            model: Default model name.
            base_url: API base URL.
            timeout: HTTP request timeout in seconds (default: 60).
            requests_per_minute: Client-side pacing (default: 60).

        Raises:
            LLMConfigurationError: If ``api_key`` is empty.
        """
        if not api_key:
            msg = "OpenAI API key is required"
            raise LLMConfigurationError(msg)

        self.api_key = api_key
        self.model = model
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._http_client: httpx.AsyncClient | None = None
        # 1 request per (60/rpm) seconds, no initial burst
        self._rate_limiter = AsyncLimiter(1, 60.0 / requests_per_minute)

    @property
    def chat_url(self) -> str:
        """Get the chat completions endpoint URL."""
        return f"{self.base_url}/chat/completions"

    async def initialize(self) -> None:
        """Initialize the HTTP client with auth headers."""
        if self._http_client is not None:
            return

        self._http_client = httpx.AsyncClient(
            timeout=httpx.Timeout(self.timeout),
            headers={
                "Authorization": f"Bearer {self.api_key}",
                "Content-Type": "application/json",
            },
            limits=httpx.Limits(
                max_keepalive_connections=5,
                max_connections=10,
            ),
        )
        logger.info("OpenAIClient initialized", model=self.model, timeout=self.timeout)

    async def shutdown(self) -> None:
        """Close the HTTP client and release connections."""
        if self._http_client is not None:
            await self._http_client.aclose()
            self._http_client = None
            logger.debug("OpenAIClient shutdown")

    async def _post(self, request: ChatCompletionRequest) -> ChatCompletionResponse:
        """Send one request and map transport failures to LLM errors."""
        if self._http_client is None:
            await self.initialize()

        assert self._http_client is not None

        await self._rate_limiter.acquire()

        try:
            response = await self._http_client.post(
                self.chat_url,
                json=request.model_dump(exclude_none=True),
            )
        except httpx.TimeoutException as e:
            logger.warning("OpenAI request timeout", timeout=self.timeout)
            msg = f"OpenAI timeout after {self.timeout}s"
            raise LLMTimeoutError(msg) from e
        except httpx.RequestError as e:
            logger.warning("OpenAI connection error", error=str(e))
            msg = f"Cannot connect to OpenAI: {e}"
            raise LLMUnavailableError(msg) from e

        if response.status_code == 429:
            retry_after = response.headers.get("retry-after", "60")
            msg = f"OpenAI rate limit exceeded, retry after {retry_after}s"
            raise LLMRateLimitError(msg)

        try:
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.warning(
                "OpenAI request failed",
                status_code=e.response.status_code,
                url=self.chat_url,
            )
            msg = f"OpenAI returned {e.response.status_code}"
            raise LLMResponseError(msg) from e

        try:
            return ChatCompletionResponse.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            msg = f"Unexpected OpenAI response body: {e}"
            raise LLMResponseError(msg) from e

    async def generate(
        self,
        prompt: str,
        *,
        system: str | None = None,
        json_mode: bool = False,
        options: dict[str, Any] | None = None,
    ) -> LLMCompletionResult:
        """Generate a completion from the chat completions endpoint.

        Args:
            prompt: User message content.
            system: Optional system message.
            json_mode: Request a JSON object response.
            options: ``temperature`` and ``max_tokens`` overrides.

        Returns:
            LLMCompletionResult with the first choice's content.

        Raises:
            LLMUnavailableError: If the service cannot be reached.
            LLMTimeoutError: If the request times out.
            LLMRateLimitError: On HTTP 429.
            LLMResponseError: On other HTTP errors or an empty answer.
        """
        options = options or {}

        messages: list[ChatMessage] = []
        if system:
            messages.append(ChatMessage(role="system", content=system))
        messages.append(ChatMessage(role="user", content=prompt))

        request = ChatCompletionRequest(
            model=self.model,
            messages=messages,
            response_format={"type": "json_object"} if json_mode else None,
            temperature=options.get("temperature", 0.0),
            max_tokens=options.get("max_tokens"),
        )

        response = await self._post(request)

        if not response.choices or response.choices[0].message.content is None:
            msg = "OpenAI returned no completion content"
            raise LLMResponseError(msg)

        usage = response.usage
        return LLMCompletionResult(
            raw_response=response.choices[0].message.content,
            model=response.model,
            prompt_tokens=usage.prompt_tokens if usage else None,
            completion_tokens=usage.completion_tokens if usage else None,
        )

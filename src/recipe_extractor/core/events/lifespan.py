"""Application lifespan event handlers.

This module defines the lifespan context manager that handles:
- Application startup: configure logging, build the completion client
- Application shutdown: close the completion client's connections
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from recipe_extractor.core.config import LLMProvider, Settings, get_settings
from recipe_extractor.llm.client import (
    FallbackCompletionClient,
    OllamaClient,
    OpenAIClient,
    RetryingCompletionClient,
)
from recipe_extractor.observability.logging import get_logger, setup_logging


if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

    from fastapi import FastAPI

    from recipe_extractor.llm.client.protocol import CompletionClientProtocol


logger = get_logger(__name__)


# Container for the global completion client (avoids global statement)
class _CompletionClientHolder:
    client: CompletionClientProtocol | None = None


def _provider_client(
    provider: LLMProvider, settings: Settings
) -> CompletionClientProtocol:
    """Create the bare client for one provider."""
    if provider == LLMProvider.OPENAI:
        return OpenAIClient(
            api_key=settings.OPENAI_API_KEY,
            model=settings.llm.openai.model,
            base_url=settings.llm.openai.url,
            timeout=settings.llm.openai.timeout,
            requests_per_minute=settings.llm.openai.requests_per_minute,
        )
    return OllamaClient(
        base_url=settings.llm.ollama.url,
        model=settings.llm.ollama.model,
        timeout=settings.llm.ollama.timeout,
    )


def build_completion_client(settings: Settings) -> CompletionClientProtocol:
    """Compose the completion client described by ``settings``.

    The primary provider is wrapped in a retry decorator, and the result
    in a fallback decorator when a distinct secondary provider is enabled.

    Raises:
        LLMConfigurationError: If the primary provider is misconfigured.
        ValueError: If a provider name is unknown.
    """
    primary_provider = settings.llm_provider_enum
    client: CompletionClientProtocol = RetryingCompletionClient(
        _provider_client(primary_provider, settings),
        max_retries=settings.llm.retry.max_retries,
        backoff_seconds=settings.llm.retry.backoff_seconds,
    )

    fallback = settings.llm.fallback
    if not fallback.enabled:
        return client

    secondary_provider = LLMProvider(fallback.secondary_provider.lower())
    if secondary_provider == primary_provider:
        logger.warning(
            "Fallback provider equals primary provider, fallback ignored",
            provider=primary_provider.value,
        )
        return client

    return FallbackCompletionClient(
        primary=client,
        secondary=_provider_client(secondary_provider, settings),
        fallback_enabled=True,
    )


async def _init_completion_client(settings: Settings) -> None:
    client = build_completion_client(settings)
    await client.initialize()
    _CompletionClientHolder.client = client
    logger.info(
        "Completion client initialized",
        provider=settings.llm.provider,
        max_retries=settings.llm.retry.max_retries,
        fallback_enabled=settings.llm.fallback.enabled,
    )


async def _shutdown_completion_client() -> None:
    """Shutdown the completion client."""
    if _CompletionClientHolder.client is not None:
        await _CompletionClientHolder.client.shutdown()
        _CompletionClientHolder.client = None
        logger.debug("Completion client shutdown")


async def _startup(settings: Settings) -> None:
    """Initialize application services during startup."""
    setup_logging(
        log_level=settings.logging.level,
        log_format=settings.logging.format,
        is_development=settings.is_development,
    )

    logger.info(
        "Starting application",
        app_name=settings.app.name,
        environment=settings.APP_ENV,
        debug=settings.app.debug,
    )

    # Non-critical: the extraction endpoint answers 503 without a client
    if settings.llm.enabled:
        try:
            await _init_completion_client(settings)
        except Exception:
            logger.exception(
                "Failed to initialize completion client - extraction unavailable"
            )
    else:
        logger.info("Completion client disabled")

    logger.info("Application startup complete")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Manage application lifespan events.

    Args:
        app: The FastAPI application instance.

    Yields:
        None - control returns to the application to handle requests.
    """
    settings = getattr(app.state, "settings", None) or get_settings()
    await _startup(settings)
    yield
    logger.info("Shutting down application")
    await _shutdown_completion_client()
    logger.info("Application shutdown complete")


def get_completion_client() -> CompletionClientProtocol | None:
    """Get the initialized completion client, or None when unavailable."""
    return _CompletionClientHolder.client

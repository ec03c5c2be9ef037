"""Unit tests for FallbackCompletionClient.

Tests cover:
- Fallback triggering logic
- Error propagation
- Lifecycle management
"""

from __future__ import annotations

import pytest

from recipe_extractor.llm.client.fallback import FallbackCompletionClient
from recipe_extractor.llm.exceptions import (
    LLMRateLimitError,
    LLMResponseError,
    LLMTimeoutError,
    LLMUnavailableError,
)
from tests.fixtures.clients import create_mock_client


pytestmark = pytest.mark.unit


class TestFallbackBehavior:
    """Tests for fallback triggering logic."""

    async def test_uses_primary_when_available(self) -> None:
        """Should use primary client when it succeeds."""
        primary = create_mock_client(raw_response="primary", model="gpt-4o-mini")
        secondary = create_mock_client()
        client = FallbackCompletionClient(primary=primary, secondary=secondary)

        result = await client.generate("prompt", json_mode=True)

        assert result.raw_response == "primary"
        secondary.generate.assert_not_called()

    @pytest.mark.parametrize(
        "error", [LLMUnavailableError("down"), LLMTimeoutError("slow")]
    )
    async def test_falls_back_when_primary_unavailable(self, error: Exception) -> None:
        """Should use secondary when primary is unavailable."""
        primary = create_mock_client(generate_error=error)
        secondary = create_mock_client(raw_response="secondary", model="mistral:7b")
        client = FallbackCompletionClient(primary=primary, secondary=secondary)

        result = await client.generate(
            "prompt", system="sys", json_mode=True, options={"temperature": 0.0}
        )

        assert result.raw_response == "secondary"
        secondary.generate.assert_awaited_once_with(
            "prompt", system="sys", json_mode=True, options={"temperature": 0.0}
        )

    async def test_raises_when_fallback_disabled(self) -> None:
        """Should propagate unavailability when fallback is disabled."""
        primary = create_mock_client(generate_error=LLMUnavailableError("down"))
        secondary = create_mock_client()
        client = FallbackCompletionClient(
            primary=primary, secondary=secondary, fallback_enabled=False
        )

        with pytest.raises(LLMUnavailableError):
            await client.generate("prompt")

        secondary.generate.assert_not_called()

    async def test_raises_without_secondary(self) -> None:
        """Should propagate unavailability when no secondary is configured."""
        primary = create_mock_client(generate_error=LLMUnavailableError("down"))
        client = FallbackCompletionClient(primary=primary)

        with pytest.raises(LLMUnavailableError):
            await client.generate("prompt")

    @pytest.mark.parametrize(
        "error", [LLMResponseError("HTTP 400"), LLMRateLimitError("429")]
    )
    async def test_does_not_fall_back_on_other_errors(self, error: Exception) -> None:
        """Should propagate response and rate limit errors immediately."""
        primary = create_mock_client(generate_error=error)
        secondary = create_mock_client()
        client = FallbackCompletionClient(primary=primary, secondary=secondary)

        with pytest.raises(type(error)):
            await client.generate("prompt")

        secondary.generate.assert_not_called()


class TestFallbackLifecycle:
    """Tests for lifecycle management."""

    async def test_initializes_and_shuts_down_both(self) -> None:
        """Should manage both clients."""
        primary = create_mock_client()
        secondary = create_mock_client()
        client = FallbackCompletionClient(primary=primary, secondary=secondary)

        await client.initialize()
        await client.shutdown()

        primary.initialize.assert_awaited_once()
        secondary.initialize.assert_awaited_once()
        primary.shutdown.assert_awaited_once()
        secondary.shutdown.assert_awaited_once()

    async def test_secondary_init_failure_shuts_down_primary(self) -> None:
        """Should release the primary when the secondary cannot start."""
        primary = create_mock_client()
        secondary = create_mock_client()
        secondary.initialize.side_effect = RuntimeError("no pool")
        client = FallbackCompletionClient(primary=primary, secondary=secondary)

        with pytest.raises(RuntimeError, match="no pool"):
            await client.initialize()

        primary.initialize.assert_awaited_once()
        primary.shutdown.assert_awaited_once()
        secondary.shutdown.assert_not_called()

    async def test_primary_init_failure_skips_secondary(self) -> None:
        """Should not start the secondary when the primary fails."""
        primary = create_mock_client()
        primary.initialize.side_effect = RuntimeError("boom")
        secondary = create_mock_client()
        client = FallbackCompletionClient(primary=primary, secondary=secondary)

        with pytest.raises(RuntimeError, match="boom"):
            await client.initialize()

        secondary.initialize.assert_not_called()

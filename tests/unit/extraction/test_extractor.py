"""Unit tests for RecipeExtractor.

Tests cover:
- Input validation
- Single completion round trip with the built payload
- Error mapping to extraction stages
- Cancellation passthrough
- Outcome metrics
"""

from __future__ import annotations

import asyncio

import pytest

from recipe_extractor.extraction import (
    ExtractionFailedError,
    ExtractionStage,
    InvalidInputError,
    RecipeExtractor,
)
from recipe_extractor.llm.exceptions import LLMResponseError, LLMTimeoutError
from recipe_extractor.llm.prompts import RecipeExtractionPrompt
from recipe_extractor.observability.metrics import EXTRACTIONS_TOTAL
from tests.fixtures.clients import create_mock_client
from tests.fixtures.llm_responses import (
    HERB_CRUSTED_SALMON_COMPLETION,
    HERB_CRUSTED_SALMON_TEXT,
)


pytestmark = pytest.mark.unit


def _outcome_count(outcome: str) -> float:
    return EXTRACTIONS_TOTAL.labels(outcome=outcome)._value.get()


class TestInputValidation:
    """Tests for rejected recipe text."""

    @pytest.mark.parametrize("text", [None, "", "   ", "\n\t", 42, b"bytes"])
    async def test_rejects_invalid_text(self, text: object) -> None:
        """Should raise InvalidInputError without calling the client."""
        client = create_mock_client()
        extractor = RecipeExtractor(client)

        with pytest.raises(InvalidInputError):
            await extractor.extract(text)

        client.generate.assert_not_called()

    async def test_counts_invalid_input(self) -> None:
        """Should count rejected input."""
        before = _outcome_count("invalid_input")

        with pytest.raises(InvalidInputError):
            await RecipeExtractor(create_mock_client()).extract("")

        assert _outcome_count("invalid_input") == before + 1


class TestExtract:
    """Tests for successful extraction."""

    async def test_returns_document(self) -> None:
        """Should parse the completion into a document."""
        client = create_mock_client(raw_response=HERB_CRUSTED_SALMON_COMPLETION)
        extractor = RecipeExtractor(client)

        document = await extractor.extract(HERB_CRUSTED_SALMON_TEXT)

        assert document.recipe_name == "Mediterranean Herb-Crusted Salmon"
        assert [c.type for c in document.components] == [
            "protein",
            "starch",
            "vegetable",
            "sauce",
        ]

    async def test_calls_client_once_with_payload(self) -> None:
        """Should send the built payload in JSON mode exactly once."""
        client = create_mock_client(raw_response='{"recipe_name": "Soup"}')
        prompt = RecipeExtractionPrompt()
        extractor = RecipeExtractor(client, prompt)

        await extractor.extract("Soup for four")

        payload = prompt.build("Soup for four")
        client.generate.assert_awaited_once_with(
            payload.prompt,
            system=payload.system,
            json_mode=True,
            options=payload.options,
        )

    async def test_counts_success(self) -> None:
        """Should count successful extractions."""
        before = _outcome_count("success")

        await RecipeExtractor(create_mock_client(raw_response="{}")).extract("Soup")

        assert _outcome_count("success") == before + 1


class TestErrorMapping:
    """Tests for failure reporting."""

    @pytest.mark.parametrize(
        "error",
        [
            LLMTimeoutError("timeout"),
            LLMResponseError("HTTP 500"),
            RuntimeError("boom"),
        ],
    )
    async def test_client_errors_become_completion_failures(
        self, error: Exception
    ) -> None:
        """Should wrap any client exception as a completion-stage failure."""
        extractor = RecipeExtractor(create_mock_client(generate_error=error))

        with pytest.raises(ExtractionFailedError) as exc_info:
            await extractor.extract("Soup")

        assert exc_info.value.stage == ExtractionStage.COMPLETION
        assert exc_info.value.__cause__ is error

    async def test_completion_message_hides_cause(self) -> None:
        """Should not leak the client's error text."""
        extractor = RecipeExtractor(
            create_mock_client(generate_error=RuntimeError("secret-key-123"))
        )

        with pytest.raises(ExtractionFailedError) as exc_info:
            await extractor.extract("Soup")

        assert "secret-key-123" not in str(exc_info.value)

    async def test_prose_completion_is_parse_failure(self) -> None:
        """Should fail at the parse stage when the model answers in prose."""
        before = _outcome_count("parse")
        extractor = RecipeExtractor(
            create_mock_client(raw_response="I'm sorry, I cannot help with that.")
        )

        with pytest.raises(ExtractionFailedError) as exc_info:
            await extractor.extract("Soup")

        assert exc_info.value.stage == ExtractionStage.PARSE
        assert _outcome_count("parse") == before + 1

    async def test_cancellation_propagates(self) -> None:
        """Should not convert cancellation into an extraction failure."""
        extractor = RecipeExtractor(
            create_mock_client(generate_error=asyncio.CancelledError())
        )

        with pytest.raises(asyncio.CancelledError):
            await extractor.extract("Soup")

    async def test_cancelling_task_cancels_extraction(self) -> None:
        """Should stop when the surrounding task is cancelled."""
        started = asyncio.Event()

        async def slow_generate(*_args: object, **_kwargs: object) -> None:
            started.set()
            await asyncio.sleep(60)

        client = create_mock_client()
        client.generate.side_effect = slow_generate
        task = asyncio.create_task(RecipeExtractor(client).extract("Soup"))
        await started.wait()

        task.cancel()

        with pytest.raises(asyncio.CancelledError):
            await task

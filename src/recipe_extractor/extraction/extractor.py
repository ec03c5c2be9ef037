"""Recipe extraction orchestrator.

Sequences prompt building, the completion round trip and response parsing,
and maps every failure to an extraction error.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from recipe_extractor.extraction.exceptions import (
    ExtractionFailedError,
    ExtractionStage,
    InvalidInputError,
)
from recipe_extractor.extraction.parser import parse_completion
from recipe_extractor.llm.prompts import RecipeExtractionPrompt
from recipe_extractor.observability.logging import get_logger
from recipe_extractor.observability.metrics import record_extraction


if TYPE_CHECKING:
    from recipe_extractor.llm.client.protocol import CompletionClientProtocol
    from recipe_extractor.schema import RecipeDocument


logger = get_logger(__name__)

COMPLETION_FAILURE_MESSAGE = "Completion request failed"


class RecipeExtractor:
    """Service turning unstructured recipe text into a ``RecipeDocument``.

    Holds only immutable collaborators, so one instance can serve concurrent
    requests.

    Example:
        ```python
        extractor = RecipeExtractor(OpenAIClient(api_key=...))
        document = await extractor.extract(recipe_text)
        payload = document.to_payload()
        ```
    """

    def __init__(
        self,
        client: CompletionClientProtocol,
        prompt: RecipeExtractionPrompt | None = None,
    ) -> None:
        """Initialize the extractor.

        Args:
            client: Completion client used for the single round trip.
            prompt: Prompt builder (defaults to ``RecipeExtractionPrompt()``).
        """
        self._client = client
        self._prompt = prompt or RecipeExtractionPrompt()

    async def extract(self, recipe_text: Any) -> RecipeDocument:
        """Extract a structured recipe from ``recipe_text``.

        Args:
            recipe_text: Raw recipe text, passed to the model verbatim.

        Returns:
            Validated, normalized recipe document.

        Raises:
            InvalidInputError: If the text is missing, not a string, or blank.
            ExtractionFailedError: If the completion request or parsing fails.
        """
        if not isinstance(recipe_text, str) or not recipe_text.strip():
            record_extraction("invalid_input")
            msg = "Recipe text is required"
            raise InvalidInputError(msg)

        payload = self._prompt.build(recipe_text)

        logger.debug(
            "Requesting recipe extraction",
            prompt=self._prompt.name,
            text_length=len(recipe_text),
        )

        try:
            result = await self._client.generate(
                payload.prompt,
                system=payload.system,
                json_mode=True,
                options=payload.options,
            )
        except Exception as e:
            record_extraction(ExtractionStage.COMPLETION.value)
            logger.exception(
                "Completion request failed",
                error_type=type(e).__name__,
            )
            raise ExtractionFailedError(
                ExtractionStage.COMPLETION, COMPLETION_FAILURE_MESSAGE
            ) from e

        try:
            document = parse_completion(result.raw_response)
        except ExtractionFailedError:
            record_extraction(ExtractionStage.PARSE.value)
            raise

        record_extraction("success")
        logger.info(
            "Recipe extracted",
            model=result.model,
            components=len(document.components),
            prompt_tokens=result.prompt_tokens,
            completion_tokens=result.completion_tokens,
        )
        return document

"""Parse raw completion text into a recipe document."""

from __future__ import annotations

import re

import orjson

from recipe_extractor.extraction.exceptions import ExtractionFailedError, ExtractionStage
from recipe_extractor.extraction.normalizer import normalize_document
from recipe_extractor.observability.logging import get_logger
from recipe_extractor.schema import RecipeDocument, SchemaViolationError


logger = get_logger(__name__)

# A response that is exactly one fenced block, optionally tagged "json"
_FENCE_RE = re.compile(r"\A\s*```(?:json)?[ \t]*\n(?P<body>.*?)\n?[ \t]*```\s*\Z", re.DOTALL)

PARSE_FAILURE_MESSAGE = "Completion output is not a JSON object"


def _unwrap_fence(raw_text: str) -> str:
    match = _FENCE_RE.match(raw_text)
    if match is None:
        return raw_text
    return match.group("body")


def parse_completion(raw_text: str) -> RecipeDocument:
    """Parse and normalize the raw text of a completion.

    Args:
        raw_text: Text returned by the completion service.

    Returns:
        A valid, normalized recipe document.

    Raises:
        ExtractionFailedError: With stage ``PARSE`` when the text is not a
            JSON object (malformed JSON, prose around the JSON, arrays or
            scalars).
    """
    try:
        data = orjson.loads(_unwrap_fence(raw_text))
    except orjson.JSONDecodeError as e:
        logger.warning("Completion output is not valid JSON", error=str(e))
        raise ExtractionFailedError(ExtractionStage.PARSE, PARSE_FAILURE_MESSAGE) from e

    if not isinstance(data, dict):
        logger.warning(
            "Completion output is not a JSON object",
            json_type=type(data).__name__,
        )
        raise ExtractionFailedError(ExtractionStage.PARSE, PARSE_FAILURE_MESSAGE)

    try:
        return normalize_document(data)
    except SchemaViolationError as e:
        logger.exception("Normalized document failed validation", path=e.path)
        raise ExtractionFailedError(ExtractionStage.PARSE, str(e)) from e

"""Extraction pipeline exceptions.

These are the only errors the pipeline reports to its callers. Causes from
the completion client are chained but never part of the message.
"""

from __future__ import annotations

from enum import StrEnum


class ExtractionStage(StrEnum):
    """Pipeline stage at which an extraction failed."""

    COMPLETION = "completion"
    PARSE = "parse"


class RecipeExtractionError(Exception):
    """Base exception for extraction errors."""


class InvalidInputError(RecipeExtractionError):
    """Raised when the recipe text is missing, not text, or blank."""


class ExtractionFailedError(RecipeExtractionError):
    """Raised when the completion round trip or response parsing fails.

    Attributes:
        stage: Stage that failed.
    """

    def __init__(self, stage: ExtractionStage, message: str) -> None:
        self.stage = stage
        super().__init__(message)

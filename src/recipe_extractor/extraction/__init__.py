"""Recipe extraction pipeline: orchestrator, parser and normalizer."""

from recipe_extractor.extraction.exceptions import (
    ExtractionFailedError,
    ExtractionStage,
    InvalidInputError,
    RecipeExtractionError,
)
from recipe_extractor.extraction.extractor import RecipeExtractor
from recipe_extractor.extraction.normalizer import (
    fill_defaults,
    normalize_document,
    prune_empty_collections,
)
from recipe_extractor.extraction.parser import parse_completion


__all__ = [
    "ExtractionFailedError",
    "ExtractionStage",
    "InvalidInputError",
    "RecipeExtractionError",
    "RecipeExtractor",
    "fill_defaults",
    "normalize_document",
    "parse_completion",
    "prune_empty_collections",
]

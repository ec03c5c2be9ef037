"""Completion prompt templates."""

from recipe_extractor.llm.prompts.base import BasePrompt
from recipe_extractor.llm.prompts.recipe_extraction import (
    InstructionPayload,
    RecipeExtractionPrompt,
)


__all__ = [
    "BasePrompt",
    "InstructionPayload",
    "RecipeExtractionPrompt",
]

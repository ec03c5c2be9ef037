"""FastAPI dependencies for service access.

The completion client is created during application startup; route
handlers receive a ready ``RecipeExtractor`` built around it.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends

from recipe_extractor.core.config import Settings, get_settings
from recipe_extractor.core.events.lifespan import get_completion_client
from recipe_extractor.core.exceptions import ServiceUnavailableError
from recipe_extractor.extraction import RecipeExtractor
from recipe_extractor.llm.prompts import RecipeExtractionPrompt


async def get_recipe_extractor(
    settings: Annotated[Settings, Depends(get_settings)],
) -> RecipeExtractor:
    """Get a recipe extractor bound to the completion client.

    Raises:
        ServiceUnavailableError: 503 if no completion client is configured.
    """
    client = get_completion_client()
    if client is None:
        msg = "Recipe extraction not available: completion service not configured"
        raise ServiceUnavailableError(msg)

    prompt = RecipeExtractionPrompt(
        temperature=settings.extraction.temperature,
        max_tokens=settings.extraction.max_tokens,
    )
    return RecipeExtractor(client, prompt)

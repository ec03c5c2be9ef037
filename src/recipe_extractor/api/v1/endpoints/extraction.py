"""Recipe extraction endpoint."""

from __future__ import annotations

from typing import Annotated, Any

from fastapi import APIRouter, Depends, status
from fastapi.responses import ORJSONResponse
from pydantic import BaseModel, ConfigDict, Field, StrictStr

from recipe_extractor.api.dependencies import get_recipe_extractor
from recipe_extractor.core.exceptions import ErrorResponse
from recipe_extractor.extraction import RecipeExtractor
from recipe_extractor.schema import RecipeDocument


router = APIRouter(tags=["extraction"])


class ExtractRecipeRequest(BaseModel):
    """Request body for recipe extraction."""

    model_config = ConfigDict(populate_by_name=True)

    recipe_text: StrictStr = Field(
        ...,
        alias="recipeText",
        description="Unstructured recipe text (e.g. extracted from a PDF)",
        examples=["Herb-Crusted Salmon\nYield: 120 portions\n..."],
    )


@router.post(
    "/extract-recipe",
    response_model=RecipeDocument,
    response_model_exclude_none=True,
    summary="Extract a structured recipe",
    description=(
        "Turns free-form recipe text into a validated recipe document. "
        "`sub_ingredients` is omitted for ingredients that have none."
    ),
    responses={
        status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse},
        status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": ErrorResponse},
        status.HTTP_503_SERVICE_UNAVAILABLE: {"model": ErrorResponse},
    },
)
async def extract_recipe(
    request: ExtractRecipeRequest,
    extractor: Annotated[RecipeExtractor, Depends(get_recipe_extractor)],
) -> Any:
    """Extract a recipe document from ``recipeText``."""
    document = await extractor.extract(request.recipe_text)
    return ORJSONResponse(content=document.to_payload())

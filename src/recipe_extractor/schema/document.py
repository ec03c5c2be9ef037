"""Recipe document schema.

The pydantic models below are the single declarative description of an
extracted recipe. Two renderings derive from them:

- ``validate_document`` checks a parsed JSON value against the models and
  raises ``SchemaViolationError`` naming the offending field path.
- ``render_format_instructions`` (see ``instructions.py``) turns the same
  models into the format description sent to the completion service.

Field descriptions double as the semantic hints in that description, so they
are written for the model that produces the data.
"""

from __future__ import annotations

import math
from enum import StrEnum
from typing import Annotated, Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    PlainValidator,
    ValidationError,
    WithJsonSchema,
    field_validator,
)

from recipe_extractor.schema.exceptions import SchemaViolationError


UNKNOWN_RECIPE_NAME = "Unknown Recipe"

# Largest integer a JSON response body can carry
MAX_JSON_INTEGER = 2**63 - 1


class ComponentType(StrEnum):
    """Closed set of component categories."""

    PROTEIN = "protein"
    STARCH = "starch"
    VEGETABLE = "vegetable"
    SAUCE = "sauce"


# Absent or unrecognized categories fall back to this value
DEFAULT_COMPONENT_TYPE = ComponentType.PROTEIN


def _removable_array_schema(schema: dict[str, Any]) -> None:
    """Render an optional list as a plain array: no null branch, no default."""
    schema.pop("default", None)
    variants = schema.pop("anyOf", None)
    if variants:
        schema.update(next(v for v in variants if v.get("type") != "null"))


def _non_negative_number(value: Any) -> int | float:
    """Accept a finite, non-negative JSON number; whole ints stay ints."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        msg = "Input should be a number"
        raise ValueError(msg)
    if isinstance(value, float) and not math.isfinite(value):
        msg = "Input should be a finite number"
        raise ValueError(msg)
    if value < 0:
        msg = "Input should be greater than or equal to 0"
        raise ValueError(msg)
    if isinstance(value, int) and value > MAX_JSON_INTEGER:
        msg = "Input should fit in 64 bits"
        raise ValueError(msg)
    return value


NonNegativeNumber = Annotated[
    int | float,
    PlainValidator(_non_negative_number),
    WithJsonSchema({"type": "number", "minimum": 0}),
]


class _DocumentModel(BaseModel):
    """Shared configuration: strict keys, immutable instances."""

    model_config = ConfigDict(
        extra="forbid",
        frozen=True,
        use_enum_values=True,
        allow_inf_nan=False,
    )


class SubIngredient(_DocumentModel):
    """Constituent of a mixture ingredient. Cannot nest further."""

    name: str = Field(description="Sub-ingredient name")
    amount_per_portion_grams: NonNegativeNumber = Field(
        description="Amount per portion in grams",
    )


class Ingredient(_DocumentModel):
    """Item used by a component, possibly a mixture of sub-ingredients."""

    name: str = Field(description="Ingredient name")
    amount_per_portion_grams: NonNegativeNumber = Field(
        description="Amount per portion in grams",
    )
    # Removable, not nullable: unset means "no sub-ingredients"
    sub_ingredients: (
        Annotated[list[SubIngredient], Field(min_length=1)] | None
    ) = Field(
        default=None,
        description=(
            "Sub-ingredients if this is a mixture (like a herb crust mixture). "
            "OMIT this property entirely if no sub-ingredients exist."
        ),
        json_schema_extra=_removable_array_schema,
    )

    @field_validator("sub_ingredients", mode="before")
    @classmethod
    def _reject_explicit_null(cls, value: Any) -> Any:
        if value is None:
            msg = "sub_ingredients must be omitted, not null"
            raise ValueError(msg)
        return value


class Component(_DocumentModel):
    """One preparation unit of the recipe."""

    name: str = Field(
        description="Component name like 'Braised Beef' or 'Roasted Vegetables'",
    )
    type: ComponentType = Field(description="Component category")
    prep_time_minutes: int = Field(
        ge=0, le=MAX_JSON_INTEGER, description="Preparation time in minutes"
    )
    cook_time_minutes: int = Field(
        ge=0, le=MAX_JSON_INTEGER, description="Cooking time in minutes"
    )
    cook_temp_fahrenheit: int = Field(
        ge=0,
        le=MAX_JSON_INTEGER,
        description="Cooking temperature in Fahrenheit, 0 if not specified",
    )
    cook_method: str = Field(description="Cooking method description")
    portion_weight_grams: NonNegativeNumber = Field(
        description="Final portion weight in grams",
    )
    ingredients: list[Ingredient] = Field(
        description="All ingredients for this component with proper nesting",
    )


class RecipeDocument(_DocumentModel):
    """Root of an extracted recipe."""

    recipe_name: str = Field(min_length=1, description="Full name of the recipe")
    chef: str = Field(
        description="Chef name if mentioned, empty string if not found",
    )
    yield_count: NonNegativeNumber = Field(
        description="Number of portions this recipe makes",
    )
    allergens: list[str] = Field(
        description="List of allergens found in the recipe",
    )
    components: list[Component] = Field(
        description="All recipe components (protein, starch, vegetable, sauce)",
    )

    def to_payload(self) -> dict[str, Any]:
        """Serialize to a JSON-ready dict.

        ``sub_ingredients`` is omitted for every ingredient that has none.
        """
        return self.model_dump(mode="json", exclude_none=True)


def validate_document(data: Any) -> RecipeDocument:
    """Validate a parsed JSON value against the document schema.

    Args:
        data: Parsed JSON value.

    Returns:
        The validated, immutable document.

    Raises:
        SchemaViolationError: On the first failing field.
    """
    try:
        return RecipeDocument.model_validate(data)
    except ValidationError as e:
        first = e.errors()[0]
        path = ".".join(str(part) for part in first["loc"]) or "<root>"
        raise SchemaViolationError(path, first["msg"]) from e

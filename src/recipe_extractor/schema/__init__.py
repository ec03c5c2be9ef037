"""Recipe document schema: models, validator and format instructions."""

from recipe_extractor.schema.document import (
    DEFAULT_COMPONENT_TYPE,
    MAX_JSON_INTEGER,
    UNKNOWN_RECIPE_NAME,
    Component,
    ComponentType,
    Ingredient,
    RecipeDocument,
    SubIngredient,
    validate_document,
)
from recipe_extractor.schema.exceptions import SchemaViolationError
from recipe_extractor.schema.instructions import (
    render_format_instructions,
    schema_description,
)


__all__ = [
    "DEFAULT_COMPONENT_TYPE",
    "MAX_JSON_INTEGER",
    "UNKNOWN_RECIPE_NAME",
    "Component",
    "ComponentType",
    "Ingredient",
    "RecipeDocument",
    "SchemaViolationError",
    "SubIngredient",
    "render_format_instructions",
    "schema_description",
    "validate_document",
]

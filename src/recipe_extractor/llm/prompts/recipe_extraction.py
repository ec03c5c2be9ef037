"""Recipe extraction prompt.

Turns free-form recipe text into the instruction payload sent to the
completion service. The format instructions are rendered from the
document models, so the prompt never drifts from the validator.
"""

from __future__ import annotations

from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict, Field

from recipe_extractor.schema import RecipeDocument, render_format_instructions

from .base import BasePrompt


class InstructionPayload(BaseModel):
    """Everything the completion service receives for one extraction."""

    model_config = ConfigDict(frozen=True)

    system: str = Field(..., description="System-level directive")
    prompt: str = Field(..., description="User-level task text")
    options: dict[str, Any] = Field(
        default_factory=dict,
        description="Generation options (temperature, max_tokens)",
    )


class RecipeExtractionPrompt(BasePrompt[RecipeDocument]):
    """Prompt for extracting a structured recipe document from raw text.

    The recipe text is interpolated verbatim: no truncation, no escaping.
    Identical inputs always produce an identical payload.
    """

    output_schema: ClassVar[type[BaseModel]] = RecipeDocument

    system_prompt: ClassVar[
        str | None
    ] = """You are an expert culinary data extraction specialist.
Your task is to analyze the PROVIDED RECIPE TEXT and extract all of its information \
into one complete JSON object with a proper nested ingredient structure.

Source rules:
1. Use ONLY the recipe text supplied by the user
2. Never copy names or values from the examples below into the answer
3. Never return null: use "" for missing text and 0 for missing numbers
4. Every text field must be a string and every number field must be a number

Components:
5. Try to find all 4 component categories: protein, starch, vegetable, sauce
6. protein = meat, fish, poultry; starch = rice, pasta, grains, bread;
   vegetable = vegetables, legumes, plant sides; sauce = sauces, dressings, accompaniments
7. Capture prep time, cook time, cook temperature (Fahrenheit) and the cooking method
8. Recipe name is the full name from the text; chef is "" when no chef is named
9. Yield is the number of portions ("Production Yield: 120" -> 120, "80-100" -> 90)

Ingredient hierarchy:
10. Items at the same indentation level are separate ingredients
11. Items bulleted or indented under a parent are that parent's sub_ingredients
12. Never flatten sub-ingredients into the top-level ingredient list
13. Include "sub_ingredients" only when the ingredient has at least one; otherwise omit the key

Example of a mixture in the source text:
Herb crust mixture: 20g
  o Panko breadcrumbs: 12g
  o Parsley, dried: 2g
  o Dill, dried: 2g
  o Lemon zest: 1g
  o Olive oil: 3g

Extracted as:
{
  "name": "Herb crust mixture",
  "amount_per_portion_grams": 20,
  "sub_ingredients": [
    {"name": "Panko breadcrumbs", "amount_per_portion_grams": 12},
    {"name": "Parsley, dried", "amount_per_portion_grams": 2},
    {"name": "Dill, dried", "amount_per_portion_grams": 2},
    {"name": "Lemon zest", "amount_per_portion_grams": 1},
    {"name": "Olive oil", "amount_per_portion_grams": 3}
  ]
}

Weight conversions:
- Keep exact gram measurements ("110g" -> 110)
- Convert to grams: 4 oz -> 113, 1 lb -> 454, 2 cups flour -> 240
- Amounts are per portion: divide batch totals by the yield
- Estimate missing portion weights reasonably:
  protein 110-170g, starch 80-120g, vegetable 60-100g, sauce 30-60g"""

    temperature: ClassVar[float] = 0.0  # Deterministic extraction
    max_tokens: ClassVar[int | None] = 4096

    def __init__(
        self,
        *,
        temperature: float | None = None,
        max_tokens: int | None = None,
    ) -> None:
        """Initialize the prompt, optionally overriding generation options."""
        if temperature is not None:
            self.temperature = temperature
        if max_tokens is not None:
            self.max_tokens = max_tokens

    def format(self, **kwargs: Any) -> str:
        """Format the task text.

        Args:
            **kwargs: Must contain ``recipe_text``. ``format_instructions``
                defaults to the rendered document schema.

        Returns:
            Formatted prompt string.

        Raises:
            ValueError: If 'recipe_text' is missing.
        """
        recipe_text = kwargs.get("recipe_text")
        if recipe_text is None:
            msg = "Missing required 'recipe_text' argument"
            raise ValueError(msg)
        format_instructions = kwargs.get("format_instructions")
        if format_instructions is None:
            format_instructions = render_format_instructions(self.output_schema)
        return (
            "Extract the complete recipe data from the text below and return ONLY "
            "valid JSON with no null values and properly nested ingredients.\n\n"
            f"Schema format:\n{format_instructions}\n\n"
            f"Recipe text to extract from:\n{recipe_text}\n\n"
            "Return ONLY the JSON object, using the exact field names."
        )

    def build(self, recipe_text: str) -> InstructionPayload:
        """Assemble the full instruction payload for ``recipe_text``."""
        return InstructionPayload(
            system=self.system_prompt or "",
            prompt=self.format(recipe_text=recipe_text),
            options=self.get_options(),
        )

"""Deterministic repair of parsed completion output.

Normalization runs in two explicit passes over plain JSON values:

1. ``fill_defaults`` rebuilds the document field by field, coercing
   scalars and filling defaults so nothing is ever null.
2. ``prune_empty_collections`` removes ``sub_ingredients`` wherever it
   ended up empty.

The result is then validated against the document schema, which cannot
fail on pass output. Normalization is total over any JSON object and
idempotent.
"""

from __future__ import annotations

import math
from typing import Any

from recipe_extractor.schema import (
    DEFAULT_COMPONENT_TYPE,
    MAX_JSON_INTEGER,
    UNKNOWN_RECIPE_NAME,
    ComponentType,
    RecipeDocument,
    validate_document,
)


_COMPONENT_TYPES = frozenset(member.value for member in ComponentType)


def _text(value: Any) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return ""


def _number(value: Any, *, integer: bool = False) -> int | float:
    """Coerce ``value`` to a finite, non-negative number, else 0.

    Whole-number input stays an int. Ints beyond 64 bits count as
    non-finite.
    """
    if isinstance(value, bool):
        return 0
    if isinstance(value, (int, float)):
        number: int | float = value
    elif isinstance(value, str):
        text = value.strip()
        try:
            number = int(text)
        except ValueError:
            try:
                number = float(text)
            except ValueError:
                return 0
    else:
        return 0

    try:
        if not math.isfinite(number):
            return 0
    except OverflowError:
        # ints too large for a float
        return 0

    if number < 0:
        return 0
    if integer:
        number = int(round(number))
    if isinstance(number, int) and number > MAX_JSON_INTEGER:
        return 0
    return number


def _component_type(value: Any) -> str:
    if isinstance(value, str):
        candidate = value.strip().lower()
        if candidate in _COMPONENT_TYPES:
            return candidate
    return DEFAULT_COMPONENT_TYPE.value


def _objects(value: Any) -> list[dict[str, Any]]:
    """Return the object entries of a list; anything else yields []."""
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, dict)]


def _allergens(value: Any) -> list[str]:
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, str) and item.strip()]


def _sub_ingredient(data: dict[str, Any]) -> dict[str, Any]:
    return {
        "name": _text(data.get("name")),
        "amount_per_portion_grams": _number(data.get("amount_per_portion_grams")),
    }


def _ingredient(data: dict[str, Any]) -> dict[str, Any]:
    ingredient: dict[str, Any] = {
        "name": _text(data.get("name")),
        "amount_per_portion_grams": _number(data.get("amount_per_portion_grams")),
    }
    if "sub_ingredients" in data:
        ingredient["sub_ingredients"] = [
            _sub_ingredient(item) for item in _objects(data["sub_ingredients"])
        ]
    return ingredient


def _component(data: dict[str, Any]) -> dict[str, Any]:
    return {
        "name": _text(data.get("name")),
        "type": _component_type(data.get("type")),
        "prep_time_minutes": _number(data.get("prep_time_minutes"), integer=True),
        "cook_time_minutes": _number(data.get("cook_time_minutes"), integer=True),
        "cook_temp_fahrenheit": _number(
            data.get("cook_temp_fahrenheit"), integer=True
        ),
        "cook_method": _text(data.get("cook_method")),
        "portion_weight_grams": _number(data.get("portion_weight_grams")),
        "ingredients": [_ingredient(item) for item in _objects(data.get("ingredients"))],
    }


def fill_defaults(data: dict[str, Any]) -> dict[str, Any]:
    """Rebuild ``data`` with every field present, typed and non-null.

    Unknown keys are dropped. ``sub_ingredients`` is kept (possibly empty)
    only where the input had the key; pruning happens in the second pass.
    """
    recipe_name = _text(data.get("recipe_name"))
    if not recipe_name.strip():
        recipe_name = UNKNOWN_RECIPE_NAME

    return {
        "recipe_name": recipe_name,
        "chef": _text(data.get("chef")),
        "yield_count": _number(data.get("yield_count")),
        "allergens": _allergens(data.get("allergens")),
        "components": [_component(item) for item in _objects(data.get("components"))],
    }


def prune_empty_collections(data: dict[str, Any]) -> dict[str, Any]:
    """Drop every empty ``sub_ingredients`` list from a filled document.

    Returns a new dict; ``data`` is left untouched.
    """
    components = []
    for component in data["components"]:
        ingredients = []
        for ingredient in component["ingredients"]:
            pruned = dict(ingredient)
            if not pruned.get("sub_ingredients"):
                pruned.pop("sub_ingredients", None)
            ingredients.append(pruned)
        components.append({**component, "ingredients": ingredients})
    return {**data, "components": components}


def normalize_document(data: dict[str, Any]) -> RecipeDocument:
    """Repair any parsed JSON object into a valid ``RecipeDocument``."""
    return validate_document(prune_empty_collections(fill_defaults(data)))

"""Render the document schema as format instructions for the completion service."""

from __future__ import annotations

from functools import lru_cache
from typing import Any

import orjson
from pydantic import BaseModel

from recipe_extractor.schema.document import RecipeDocument


_PREAMBLE = """\
The output must be a single JSON object that conforms to the JSON schema below.
Use the exact field names. Every field listed under "required" must be present; \
use "" for unknown text and 0 for unknown numbers, never null.
An optional array such as "sub_ingredients" must be omitted entirely when it \
would be empty."""


def _strip_titles(node: Any) -> Any:
    """Drop pydantic's auto-generated ``title`` keys, they only add noise."""
    if isinstance(node, dict):
        return {
            key: _strip_titles(value)
            for key, value in node.items()
            if not (key == "title" and isinstance(value, str))
        }
    if isinstance(node, list):
        return [_strip_titles(item) for item in node]
    return node


def schema_description(model: type[BaseModel] = RecipeDocument) -> dict[str, Any]:
    """Return the JSON schema of ``model`` without titles."""
    return _strip_titles(model.model_json_schema())


@lru_cache(maxsize=8)
def render_format_instructions(model: type[BaseModel] = RecipeDocument) -> str:
    """Render ``model`` as a deterministic format-instruction string.

    The result lists every field with its type, constraints and description,
    so the same declarative models drive both validation and the prompt.
    """
    schema_json = orjson.dumps(
        schema_description(model),
        option=orjson.OPT_INDENT_2,
    ).decode()
    return f"{_PREAMBLE}\n\n```json\n{schema_json}\n```"

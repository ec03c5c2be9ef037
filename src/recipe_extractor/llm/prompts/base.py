"""Base class for completion prompts.

Provides a standardized interface for defining prompts with:
- Typed input variables
- The document model the answer must conform to
- Generation options
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, ClassVar, Generic, TypeVar

from pydantic import BaseModel


T = TypeVar("T", bound=BaseModel)


class BasePrompt(ABC, Generic[T]):
    """Base class for all completion prompts.

    Example:
        ```python
        class RecipeExtractionPrompt(BasePrompt[RecipeDocument]):
            output_schema = RecipeDocument
            system_prompt = "You are a recipe extraction assistant."

            def format(self, **kwargs: Any) -> str:
                return f"Extract the recipe from:\\n\\n{kwargs['recipe_text']}"
        ```
    """

    # Override in subclasses
    output_schema: ClassVar[type[BaseModel]]
    """Pydantic model describing the expected answer."""

    system_prompt: ClassVar[str | None] = None
    """Optional system prompt to set context for the model."""

    temperature: ClassVar[float] = 0.0
    """Temperature for generation (low = more deterministic)."""

    max_tokens: ClassVar[int | None] = None
    """Maximum tokens to generate (None = model default)."""

    @abstractmethod
    def format(self, **kwargs: Any) -> str:
        """Format the prompt template with input variables.

        Raises:
            ValueError: If required variables are missing.
        """
        ...

    @property
    def name(self) -> str:
        """Prompt identifier for logging."""
        return self.__class__.__name__

    def get_options(self) -> dict[str, Any]:
        """Get generation options for this prompt."""
        options: dict[str, Any] = {"temperature": self.temperature}
        if self.max_tokens is not None:
            options["max_tokens"] = self.max_tokens
        return options

"""Completion service integration.

Provides clients for OpenAI-compatible and Ollama completion services,
retry and fallback decorators, and the recipe extraction prompt.
"""

from recipe_extractor.llm.client import (
    CompletionClientProtocol,
    FallbackCompletionClient,
    OllamaClient,
    OpenAIClient,
    RetryingCompletionClient,
)
from recipe_extractor.llm.exceptions import (
    LLMConfigurationError,
    LLMError,
    LLMRateLimitError,
    LLMResponseError,
    LLMTimeoutError,
    LLMUnavailableError,
)
from recipe_extractor.llm.models import LLMCompletionResult
from recipe_extractor.llm.prompts import (
    BasePrompt,
    InstructionPayload,
    RecipeExtractionPrompt,
)


__all__ = [
    "BasePrompt",
    "CompletionClientProtocol",
    "FallbackCompletionClient",
    "InstructionPayload",
    "LLMCompletionResult",
    "LLMConfigurationError",
    "LLMError",
    "LLMRateLimitError",
    "LLMResponseError",
    "LLMTimeoutError",
    "LLMUnavailableError",
    "OllamaClient",
    "OpenAIClient",
    "RecipeExtractionPrompt",
    "RetryingCompletionClient",
]

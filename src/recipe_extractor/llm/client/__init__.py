"""Completion client implementations."""

from recipe_extractor.llm.client.fallback import FallbackCompletionClient
from recipe_extractor.llm.client.ollama import OllamaClient
from recipe_extractor.llm.client.openai import OpenAIClient
from recipe_extractor.llm.client.protocol import CompletionClientProtocol
from recipe_extractor.llm.client.retry import RetryingCompletionClient


__all__ = [
    "CompletionClientProtocol",
    "FallbackCompletionClient",
    "OllamaClient",
    "OpenAIClient",
    "RetryingCompletionClient",
]

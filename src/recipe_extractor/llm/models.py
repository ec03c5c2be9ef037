"""Completion client data models.

Wire models for the Ollama and OpenAI-compatible APIs plus the internal
result type returned by every client.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class LLMCompletionResult(BaseModel):
    """Raw text produced by one completion round trip."""

    model_config = ConfigDict(frozen=True)

    raw_response: str = Field(..., description="Raw text response from the model")
    model: str = Field(..., description="Model that generated the response")
    prompt_tokens: int | None = Field(default=None, description="Input token count")
    completion_tokens: int | None = Field(
        default=None, description="Output token count"
    )


# =============================================================================
# Ollama API Models
# =============================================================================


class OllamaGenerateRequest(BaseModel):
    """Request body for Ollama /api/generate endpoint."""

    model: str = Field(..., description="Model name (e.g., 'mistral:7b')")
    prompt: str = Field(..., description="Input prompt text")
    stream: bool = Field(default=False, description="Whether to stream response")
    format: str | None = Field(
        default=None,
        description="Response format, 'json' for JSON mode",
    )
    options: dict[str, Any] | None = Field(
        default=None,
        description="Model-specific options (temperature, etc.)",
    )
    system: str | None = Field(default=None, description="System prompt")


class OllamaGenerateResponse(BaseModel):
    """Response from Ollama /api/generate endpoint."""

    model: str = Field(..., description="Model that generated response")
    response: str = Field(..., description="Generated text response")
    done: bool = Field(..., description="Whether generation is complete")
    prompt_eval_count: int | None = Field(
        default=None,
        description="Number of tokens in prompt",
    )
    eval_count: int | None = Field(
        default=None,
        description="Number of tokens generated",
    )


# =============================================================================
# OpenAI-compatible Chat Completions Models
# =============================================================================


class ChatMessage(BaseModel):
    """Single message in chat format."""

    role: str = Field(..., description="Message role: system, user, or assistant")
    content: str | None = Field(default=None, description="Message content")


class ChatCompletionRequest(BaseModel):
    """Request body for the /chat/completions endpoint."""

    model: str = Field(..., description="Model name (e.g., 'gpt-4o-mini')")
    messages: list[ChatMessage] = Field(..., description="Chat messages")
    response_format: dict[str, str] | None = Field(
        default=None,
        description="{'type': 'json_object'} for JSON mode",
    )
    temperature: float = Field(default=0.0, description="Sampling temperature")
    max_tokens: int | None = Field(default=None, description="Generation cap")


class ChatUsage(BaseModel):
    """Token usage block."""

    prompt_tokens: int = Field(..., description="Input token count")
    completion_tokens: int = Field(..., description="Output token count")


class ChatChoice(BaseModel):
    """Single choice in a chat completion response."""

    index: int = Field(..., description="Choice index")
    message: ChatMessage = Field(..., description="Generated message")
    finish_reason: str | None = Field(default=None, description="Stop reason")


class ChatCompletionResponse(BaseModel):
    """Response from the /chat/completions endpoint."""

    model: str = Field(..., description="Model that generated response")
    choices: list[ChatChoice] = Field(..., description="Generated completions")
    usage: ChatUsage | None = Field(default=None, description="Token usage")

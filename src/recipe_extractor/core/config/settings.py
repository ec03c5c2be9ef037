"""Application configuration using Pydantic Settings with YAML support.

Settings are organized in nested sections mirroring the YAML files in
``config/base/``. Environment-specific overrides live in
``config/environments/{APP_ENV}/`` and any value can be overridden from the
environment with the ``__`` delimiter (e.g. ``LLM__PROVIDER=ollama``).
Secrets are read from the environment or ``.env`` only.
"""

from __future__ import annotations

from enum import StrEnum
from functools import lru_cache
from typing import TYPE_CHECKING, Annotated

from pydantic import BaseModel, BeforeValidator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .yaml_source import MultiYamlConfigSettingsSource


if TYPE_CHECKING:
    from pydantic_settings import PydanticBaseSettingsSource


class LLMProvider(StrEnum):
    """Supported completion service backends."""

    OPENAI = "openai"
    OLLAMA = "ollama"


def parse_list(v: str | list[str]) -> list[str]:
    """Parse comma-separated string or list into list of strings."""
    if isinstance(v, str):
        return [x.strip() for x in v.split(",") if x.strip()]
    return v


# =============================================================================
# Nested Configuration Models (from YAML)
# =============================================================================


class AppSettings(BaseModel):
    """Application identity settings."""

    name: str = "Recipe Extractor Service"
    version: str = "0.1.0"
    debug: bool = False


class ServerSettings(BaseModel):
    """Server configuration settings."""

    host: str = "127.0.0.1"
    port: int = 8000


class ApiSettings(BaseModel):
    """API configuration settings."""

    v1_prefix: str = "/api/v1/recipe-extractor"
    cors_origins: Annotated[list[str], BeforeValidator(parse_list)] = []


class LoggingSettings(BaseModel):
    """Logging configuration settings."""

    level: str = "INFO"
    format: str = "json"


class MetricsSettings(BaseModel):
    """Metrics configuration settings."""

    enabled: bool = True


class ObservabilitySettings(BaseModel):
    """Observability configuration settings."""

    metrics: MetricsSettings = MetricsSettings()


class OpenAISettings(BaseModel):
    """OpenAI-compatible chat completions service configuration."""

    url: str = "https://api.openai.com/v1"
    model: str = "gpt-4o-mini"
    timeout: float = 60.0
    requests_per_minute: float = 60.0


class OllamaSettings(BaseModel):
    """Ollama service configuration."""

    url: str = "http://localhost:11434"
    model: str = "mistral:7b"
    timeout: float = 120.0


class LLMRetrySettings(BaseModel):
    """Retry decorator configuration (0 retries = single round trip)."""

    max_retries: int = 0
    backoff_seconds: float = 1.0


class LLMFallbackSettings(BaseModel):
    """Fallback decorator configuration."""

    enabled: bool = False
    secondary_provider: str = "ollama"


class LLMSettings(BaseModel):
    """Completion service configuration."""

    enabled: bool = True
    provider: str = "openai"
    openai: OpenAISettings = OpenAISettings()
    ollama: OllamaSettings = OllamaSettings()
    retry: LLMRetrySettings = LLMRetrySettings()
    fallback: LLMFallbackSettings = LLMFallbackSettings()


class ExtractionSettings(BaseModel):
    """Extraction pipeline tuning."""

    temperature: float = 0.0
    max_tokens: int | None = 4096


# =============================================================================
# Main Settings Class
# =============================================================================


class Settings(BaseSettings):
    """Application settings with YAML + environment variable support.

    Priority (highest to lowest):
    1. Values passed to ``Settings()``
    2. Environment variables
    3. ``.env`` file
    4. Environment-specific YAML, then base YAML
    5. Defaults in code
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        extra="ignore",
        case_sensitive=False,
        env_nested_delimiter="__",
    )

    APP_ENV: str = "development"

    app: AppSettings = AppSettings()
    server: ServerSettings = ServerSettings()
    api: ApiSettings = ApiSettings()
    logging: LoggingSettings = LoggingSettings()
    observability: ObservabilitySettings = ObservabilitySettings()
    llm: LLMSettings = LLMSettings()
    extraction: ExtractionSettings = ExtractionSettings()

    # Secrets (environment / .env only, never YAML)
    OPENAI_API_KEY: str = ""

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Insert the YAML source below environment variables and .env."""
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            MultiYamlConfigSettingsSource(settings_cls),
            file_secret_settings,
        )

    @property
    def llm_provider_enum(self) -> LLMProvider:
        """Get the primary provider as enum with validation."""
        try:
            return LLMProvider(self.llm.provider.lower())
        except ValueError:
            msg = (
                f"Invalid LLM provider: {self.llm.provider}. "
                f"Must be one of: {', '.join(p.value for p in LLMProvider)}"
            )
            raise ValueError(msg) from None

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.APP_ENV == "development"

    @property
    def is_non_production(self) -> bool:
        """Check if API docs and verbose errors should be enabled."""
        return self.APP_ENV in ("local", "test", "development")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()

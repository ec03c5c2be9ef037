"""Shared test fixtures and configuration for the Recipe Extractor tests."""

from __future__ import annotations

import os
from collections.abc import Iterator

import pytest


# Must be set before any Settings instance reads the YAML overrides
os.environ.setdefault("APP_ENV", "test")

from recipe_extractor.core.config import Settings, get_settings  # noqa: E402
from recipe_extractor.core.events.lifespan import _CompletionClientHolder  # noqa: E402
from recipe_extractor.observability.logging import clear_context  # noqa: E402


@pytest.fixture
def test_settings() -> Settings:
    """Settings for the test environment (metrics and completion client off)."""
    return Settings(APP_ENV="test")


@pytest.fixture(autouse=True)
def _reset_global_state() -> Iterator[None]:
    """Reset cached settings, the client holder and logging context."""
    get_settings.cache_clear()
    clear_context()
    yield
    _CompletionClientHolder.client = None
    get_settings.cache_clear()
    clear_context()


"""Application lifecycle events."""

from recipe_extractor.core.events.lifespan import (
    build_completion_client,
    get_completion_client,
    lifespan,
)


__all__ = ["build_completion_client", "get_completion_client", "lifespan"]

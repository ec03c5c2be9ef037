"""Observability components: logging and metrics."""

from recipe_extractor.observability.logging import (
    bind_context,
    clear_context,
    get_context,
    get_logger,
    logger,
    setup_logging,
    unbind_context,
)
from recipe_extractor.observability.metrics import record_extraction, setup_metrics


__all__ = [
    "bind_context",
    "clear_context",
    "get_context",
    "get_logger",
    "logger",
    "record_extraction",
    "setup_logging",
    "setup_metrics",
    "unbind_context",
]

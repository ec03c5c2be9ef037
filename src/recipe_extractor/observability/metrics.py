"""Prometheus metrics instrumentation.

This module provides:
- FastAPI request metrics via prometheus-fastapi-instrumentator
- An extraction outcome counter incremented by the extraction pipeline
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from prometheus_client import Counter
from prometheus_fastapi_instrumentator import Instrumentator, metrics

from recipe_extractor.observability.logging import get_logger


if TYPE_CHECKING:
    from fastapi import FastAPI

    from recipe_extractor.core.config import Settings


logger = get_logger(__name__)

METRIC_NAMESPACE = "recipe_extractor"

# Exported as recipe_extractions_total{outcome}
EXTRACTIONS_TOTAL = Counter(
    "recipe_extractions",
    "Recipe extraction attempts by outcome",
    labelnames=("outcome",),
)


def record_extraction(outcome: str) -> None:
    """Count one extraction attempt.

    Args:
        outcome: "success", "invalid_input", or the failed stage name.
    """
    EXTRACTIONS_TOTAL.labels(outcome=outcome).inc()


def setup_metrics(app: FastAPI, settings: Settings) -> Instrumentator | None:
    """Instrument the app and expose ``{prefix}/metrics``.

    Returns:
        The configured Instrumentator, or None when metrics are disabled.
    """
    if not settings.observability.metrics.enabled:
        logger.info("Metrics collection disabled")
        return None

    prefix = settings.api.v1_prefix

    instrumentator = Instrumentator(
        should_group_status_codes=True,
        should_ignore_untemplated=True,
        should_instrument_requests_inprogress=True,
        excluded_handlers=[
            f"{prefix}/health",
            f"{prefix}/ready",
            f"{prefix}/metrics",
        ],
        inprogress_name="http_requests_inprogress",
        inprogress_labels=True,
    )
    instrumentator.add(
        metrics.default(
            metric_namespace=METRIC_NAMESPACE,
            metric_subsystem="http",
        )
    )
    instrumentator.instrument(app)

    endpoint = f"{prefix}/metrics"
    instrumentator.expose(app, endpoint=endpoint, tags=["Monitoring"])

    logger.info("Prometheus metrics configured", endpoint=endpoint)
    return instrumentator


__all__ = ["EXTRACTIONS_TOTAL", "record_extraction", "setup_metrics"]

"""Custom middleware components."""

from recipe_extractor.core.middleware.logging import LoggingMiddleware
from recipe_extractor.core.middleware.request_id import RequestIDMiddleware


__all__ = [
    "LoggingMiddleware",
    "RequestIDMiddleware",
]

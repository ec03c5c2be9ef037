"""Schema validation exceptions."""

from __future__ import annotations


class SchemaViolationError(ValueError):
    """Raised when a value does not conform to the recipe document schema.

    Internal to the extraction pipeline: normalization repairs every
    recoverable deviation before validation, so callers never see it.

    Attributes:
        path: Dotted path of the offending field (e.g. ``components.0.type``).
        expected: Description of the expected shape.
    """

    def __init__(self, path: str, expected: str) -> None:
        self.path = path
        self.expected = expected
        super().__init__(f"{path}: {expected}")

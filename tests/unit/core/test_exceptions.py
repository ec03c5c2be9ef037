"""Unit tests for exception handlers.

Tests cover:
- Application error envelopes
- Extraction error mapping
- Validation and HTTP errors
- Unhandled exceptions
"""

from __future__ import annotations

import pytest
from fastapi import FastAPI, HTTPException
from fastapi.testclient import TestClient
from pydantic import BaseModel

from recipe_extractor.core.exceptions import (
    EXTRACTION_FAILED_MESSAGE,
    AppError,
    ErrorDetail,
    ServiceUnavailableError,
    setup_exception_handlers,
)
from recipe_extractor.extraction.exceptions import (
    ExtractionFailedError,
    ExtractionStage,
    InvalidInputError,
)


pytestmark = pytest.mark.unit


class _Body(BaseModel):
    value: int


@pytest.fixture
def client() -> TestClient:
    """Create an app with routes raising each error type."""
    app = FastAPI()
    setup_exception_handlers(app)

    @app.get("/conflict")
    async def conflict() -> None:
        raise AppError(
            status_code=409,
            error="CONFLICT",
            message="Nope",
            details=[ErrorDetail(code="DUPLICATE", message="Taken", field="name")],
        )

    @app.get("/unavailable")
    async def unavailable() -> None:
        raise ServiceUnavailableError

    @app.get("/invalid-input")
    async def invalid_input() -> None:
        raise InvalidInputError("Recipe text is required")

    @app.get("/parse-failure")
    async def parse_failure() -> None:
        raise ExtractionFailedError(ExtractionStage.PARSE, "bad json at char 3")

    @app.get("/http")
    async def http_error() -> None:
        raise HTTPException(status_code=404, detail="Missing")

    @app.post("/validate")
    async def validate(body: _Body) -> dict[str, int]:
        return {"value": body.value}

    @app.get("/boom")
    async def boom() -> None:
        msg = "boom"
        raise RuntimeError(msg)

    return TestClient(app, raise_server_exceptions=False)


class TestAppErrors:
    """Tests for AppError subclasses."""

    def test_app_error(self, client: TestClient) -> None:
        """Should render the status, error code, message and details."""
        response = client.get("/conflict")

        assert response.status_code == 409
        assert response.json() == {
            "error": "CONFLICT",
            "message": "Nope",
            "details": [{"code": "DUPLICATE", "message": "Taken", "field": "name"}],
            "request_id": None,
        }

    def test_service_unavailable(self, client: TestClient) -> None:
        """Should render 503 with the default message."""
        response = client.get("/unavailable")

        assert response.status_code == 503
        assert response.json()["error"] == "SERVICE_UNAVAILABLE"
        assert response.json()["message"] == "Service temporarily unavailable"


class TestExtractionErrors:
    """Tests for extraction error mapping."""

    def test_invalid_input_is_bad_request(self, client: TestClient) -> None:
        """Should map invalid input to 400 with its message."""
        response = client.get("/invalid-input")

        assert response.status_code == 400
        assert response.json()["message"] == "Recipe text is required"

    def test_extraction_failure_hides_cause(self, client: TestClient) -> None:
        """Should map pipeline failures to a generic 500."""
        response = client.get("/parse-failure")

        assert response.status_code == 500
        assert response.json()["error"] == "EXTRACTION_FAILED"
        assert response.json()["message"] == EXTRACTION_FAILED_MESSAGE
        assert "char 3" not in response.text


class TestFrameworkErrors:
    """Tests for HTTP, validation and unhandled errors."""

    def test_http_exception(self, client: TestClient) -> None:
        """Should wrap HTTP exceptions."""
        response = client.get("/http")

        assert response.status_code == 404
        assert response.json()["error"] == "HTTP_ERROR"
        assert response.json()["message"] == "Missing"

    def test_unknown_route(self, client: TestClient) -> None:
        """Should wrap routing 404s."""
        response = client.get("/does-not-exist")

        assert response.status_code == 404
        assert response.json()["error"] == "HTTP_ERROR"

    def test_validation_error(self, client: TestClient) -> None:
        """Should render validation errors as 400 with details."""
        response = client.post("/validate", json={"value": "abc"})

        assert response.status_code == 400
        data = response.json()
        assert data["error"] == "VALIDATION_ERROR"
        assert data["details"][0]["field"] == "body.value"

    def test_unhandled_exception(self, client: TestClient) -> None:
        """Should render unexpected exceptions as a generic 500."""
        response = client.get("/boom")

        assert response.status_code == 500
        assert response.json()["error"] == "INTERNAL_SERVER_ERROR"
        assert "boom" not in response.text

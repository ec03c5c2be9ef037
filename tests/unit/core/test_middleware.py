"""Unit tests for HTTP middleware.

Tests cover:
- Request ID propagation and generation
- Logging with process time header and slow-request warning
"""

from __future__ import annotations

import uuid
from unittest.mock import patch

import pytest
from fastapi import FastAPI, Request
from fastapi.testclient import TestClient

from recipe_extractor.core.middleware import (
    LoggingMiddleware,
    RequestIDMiddleware,
)
from recipe_extractor.observability.logging import get_context


pytestmark = pytest.mark.unit


@pytest.fixture
def app() -> FastAPI:
    """Create an app with the middleware stack installed."""
    app = FastAPI()

    @app.get("/echo")
    async def echo(request: Request) -> dict[str, str | None]:
        return {
            "state": request.state.request_id,
            "context": get_context().get("request_id"),
        }

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    app.add_middleware(LoggingMiddleware, exclude_paths={"/health"})
    app.add_middleware(RequestIDMiddleware)
    return app


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    """Create a test client."""
    return TestClient(app)


class TestRequestIDMiddleware:
    """Tests for RequestIDMiddleware."""

    def test_propagates_valid_request_id(self, client: TestClient) -> None:
        """Should keep a well-formed inbound request ID."""
        response = client.get("/echo", headers={"X-Request-ID": "abc-123"})

        assert response.headers["X-Request-ID"] == "abc-123"
        assert response.json() == {"state": "abc-123", "context": "abc-123"}

    def test_generates_request_id(self, client: TestClient) -> None:
        """Should generate a UUID when no ID is sent."""
        response = client.get("/echo")

        request_id = response.headers["X-Request-ID"]
        assert uuid.UUID(request_id).version == 4
        assert response.json()["state"] == request_id

    @pytest.mark.parametrize("bad_id", ["has space", "x" * 129, "semi;colon"])
    def test_replaces_malformed_request_id(
        self, client: TestClient, bad_id: str
    ) -> None:
        """Should replace malformed inbound IDs."""
        response = client.get("/echo", headers={"X-Request-ID": bad_id})

        assert response.headers["X-Request-ID"] != bad_id
        uuid.UUID(response.headers["X-Request-ID"])


class TestLoggingMiddleware:
    """Tests for LoggingMiddleware."""

    def test_logs_requests(self, client: TestClient) -> None:
        """Should log start and completion of a request."""
        with patch("recipe_extractor.core.middleware.logging.logger") as mock_logger:
            client.get("/echo")

        messages = [c.args[0] for c in mock_logger.info.call_args_list]
        assert messages == ["Request started", "Request completed"]

    def test_skips_excluded_paths(self, client: TestClient) -> None:
        """Should not log excluded paths."""
        with patch("recipe_extractor.core.middleware.logging.logger") as mock_logger:
            client.get("/health")

        mock_logger.info.assert_not_called()

    def test_adds_process_time_header(self, client: TestClient) -> None:
        """Should report the elapsed time in milliseconds."""
        response = client.get("/echo")

        assert response.headers["X-Process-Time"].endswith("ms")
        float(response.headers["X-Process-Time"].removesuffix("ms"))

    def test_times_excluded_paths(self, client: TestClient) -> None:
        """Should add the process time header to excluded paths too."""
        response = client.get("/health")

        assert "X-Process-Time" in response.headers

    def test_logged_duration_matches_header(self, client: TestClient) -> None:
        """Should log the same duration it reports in the header."""
        with patch("recipe_extractor.core.middleware.logging.logger") as mock_logger:
            response = client.get("/echo")

        duration_ms = mock_logger.info.call_args_list[-1].kwargs["duration_ms"]
        assert response.headers["X-Process-Time"] == f"{duration_ms}ms"

    def test_warns_on_slow_request(self) -> None:
        """Should warn when a request exceeds the slow threshold."""
        app = FastAPI()

        @app.get("/echo")
        async def echo() -> dict[str, str]:
            return {"status": "ok"}

        app.add_middleware(LoggingMiddleware, slow_threshold=0.0)

        with patch("recipe_extractor.core.middleware.logging.logger") as mock_logger:
            TestClient(app).get("/echo")

        mock_logger.warning.assert_called_once()
        assert mock_logger.warning.call_args.args[0] == "Slow request detected"

    def test_no_warning_for_fast_request(self, client: TestClient) -> None:
        """Should not warn below the default threshold."""
        with patch("recipe_extractor.core.middleware.logging.logger") as mock_logger:
            client.get("/echo")

        mock_logger.warning.assert_not_called()

    def test_client_ip_prefers_forwarded_for(self, app: FastAPI) -> None:
        """Should use the first X-Forwarded-For address."""
        request = Request(
            {
                "type": "http",
                "headers": [(b"x-forwarded-for", b"10.0.0.1, 10.0.0.2")],
                "client": ("127.0.0.1", 1234),
            }
        )

        assert LoggingMiddleware(app)._get_client_ip(request) == "10.0.0.1"

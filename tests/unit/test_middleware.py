"""Tests for security headers, rate limiting and client IP extraction."""

from unittest.mock import MagicMock

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from sejm_api.api.middleware import RateLimitMiddleware, SecurityHeadersMiddleware, get_client_ip, setup_cors
from sejm_api.core.config import Settings


def _create_test_app() -> FastAPI:
    """Create a minimal FastAPI app for middleware testing."""
    app = FastAPI()

    @app.get("/test")
    async def test_route() -> dict:
        return {"ok": True}

    return app


def _request(headers: dict[str, str], host: str | None = "10.0.0.1") -> MagicMock:
    request = MagicMock()
    request.headers = headers
    request.client = MagicMock(host=host) if host else None
    return request


class TestSecurityHeadersMiddleware:
    """Tests for SecurityHeadersMiddleware."""

    def test_headers_present(self) -> None:
        app = _create_test_app()
        app.add_middleware(SecurityHeadersMiddleware)
        response = TestClient(app).get("/test")
        assert response.headers["X-Content-Type-Options"] == "nosniff"
        assert response.headers["X-Frame-Options"] == "DENY"
        assert response.headers["Referrer-Policy"] == "no-referrer"
        assert "max-age=31536000" in response.headers["Strict-Transport-Security"]


class TestRateLimitMiddleware:
    """Tests for RateLimitMiddleware."""

    @pytest.fixture
    def client(self) -> TestClient:
        app = _create_test_app()
        app.add_middleware(RateLimitMiddleware, requests_per_minute=3, trusted_proxy_headers=["X-Forwarded-For"])
        return TestClient(app)

    def test_allows_up_to_limit(self, client: TestClient) -> None:
        for _ in range(3):
            assert client.get("/test").status_code == 200

    def test_blocks_over_limit(self, client: TestClient) -> None:
        for _ in range(3):
            client.get("/test")
        response = client.get("/test")
        assert response.status_code == 429
        assert response.json() == {"detail": "Rate limit exceeded"}
        assert int(response.headers["Retry-After"]) >= 1

    def test_limits_are_per_client(self, client: TestClient) -> None:
        for _ in range(3):
            client.get("/test", headers={"X-Forwarded-For": "1.1.1.1"})
        assert client.get("/test", headers={"X-Forwarded-For": "1.1.1.1"}).status_code == 429
        assert client.get("/test", headers={"X-Forwarded-For": "2.2.2.2"}).status_code == 200


class TestGetClientIp:
    """Tests for get_client_ip()."""

    def test_forwarded_for_uses_first_hop(self) -> None:
        request = _request({"X-Forwarded-For": "203.0.113.5, 10.0.0.2"})
        assert get_client_ip(request, ["X-Forwarded-For"]) == "203.0.113.5"

    def test_header_priority(self) -> None:
        request = _request({"CF-Connecting-IP": "198.51.100.7", "X-Real-IP": "192.0.2.1"})
        assert get_client_ip(request, ["CF-Connecting-IP", "X-Real-IP"]) == "198.51.100.7"

    def test_untrusted_headers_ignored(self) -> None:
        request = _request({"X-Forwarded-For": "203.0.113.5"})
        assert get_client_ip(request, []) == "10.0.0.1"

    def test_unknown_client(self) -> None:
        assert get_client_ip(_request({}, host=None)) == "unknown"


class TestCors:
    """Tests for setup_cors()."""

    def test_configured_origin_allowed(self) -> None:
        app = _create_test_app()
        setup_cors(app, Settings(_env_file=None, cors_origins="https://posel.example.pl"))  # type: ignore[call-arg]
        response = TestClient(app).get("/test", headers={"Origin": "https://posel.example.pl"})
        assert response.headers["access-control-allow-origin"] == "https://posel.example.pl"

    def test_other_origin_not_echoed(self) -> None:
        app = _create_test_app()
        setup_cors(app, Settings(_env_file=None, cors_origins="https://posel.example.pl"))  # type: ignore[call-arg]
        response = TestClient(app).get("/test", headers={"Origin": "https://evil.example.com"})
        assert "access-control-allow-origin" not in response.headers

"""CORS, security headers and per-client rate limiting."""

import time
from collections import deque
from typing import Any

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from loguru import logger
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.types import ASGIApp

from sejm_api.core.config import Settings

_WINDOW_SECONDS = 60.0


def get_client_ip(request: Request, trusted_headers: list[str] | None = None) -> str:
    """Best-effort client address, honouring proxy headers in priority order.

    ``X-Forwarded-For`` may list a proxy chain; the first entry is the client.
    """
    for header in trusted_headers or []:
        value = request.headers.get(header, "").strip()
        if value:
            return value.split(",")[0].strip() if header.lower() == "x-forwarded-for" else value
    return request.client.host if request.client else "unknown"


def setup_cors(app: FastAPI, settings: Settings) -> None:
    """Enable CORS for the configured origins (read-only API, GET/POST only)."""
    options: dict[str, Any] = {"allow_methods": ["GET", "POST"], "allow_headers": ["*"]}
    if settings.cors_origin_list:
        options["allow_origins"] = settings.cors_origin_list
    if settings.cors_origin_regex.strip():
        options["allow_origin_regex"] = settings.cors_origin_regex.strip()
    app.add_middleware(CORSMiddleware, **options)


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Attach standard hardening headers to every response."""

    HEADERS = {
        "X-Content-Type-Options": "nosniff",
        "X-Frame-Options": "DENY",
        "Referrer-Policy": "no-referrer",
        "Strict-Transport-Security": "max-age=31536000; includeSubDomains",
    }

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        response = await call_next(request)
        for name, value in self.HEADERS.items():
            response.headers.setdefault(name, value)
        return response


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Sliding one-minute request limit per client address.

    Every geocoding request fans out to Nominatim, whose usage policy caps
    clients at one request per second, so the API keeps its own ceiling.
    """

    def __init__(
        self,
        app: ASGIApp,
        requests_per_minute: int = 60,
        trusted_proxy_headers: list[str] | None = None,
    ) -> None:
        super().__init__(app)
        self.requests_per_minute = requests_per_minute
        self.trusted_proxy_headers = trusted_proxy_headers
        self._hits: dict[str, deque[float]] = {}

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        client_ip = get_client_ip(request, self.trusted_proxy_headers)
        now = time.monotonic()
        hits = self._hits.setdefault(client_ip, deque())
        while hits and hits[0] <= now - _WINDOW_SECONDS:
            hits.popleft()

        if len(hits) >= self.requests_per_minute:
            retry_after = max(1, int(hits[0] + _WINDOW_SECONDS - now) + 1)
            logger.warning("Rate limit exceeded for {}", client_ip)
            return JSONResponse(
                status_code=429,
                content={"detail": "Rate limit exceeded"},
                headers={"Retry-After": str(retry_after)},
            )

        hits.append(now)
        return await call_next(request)

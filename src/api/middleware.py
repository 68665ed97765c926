# This file defines the request pipeline wrapped around every route.
# Outermost first: recovery, request logging, route allowlist, then session authentication.
# Allowlist and authentication short-circuit with the standard error envelope; recovery turns
# unexpected exceptions into a 500 unless the connection was upgraded and cannot be answered.
# The route table and token map are built once and never mutated while serving requests.

from __future__ import annotations

import logging
import time
from collections.abc import Mapping
from types import MappingProxyType

from fastapi import FastAPI, Request, Response
from prometheus_client import Counter, Gauge, Histogram
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.types import ASGIApp

from src.api.api_config import CAPABILITY_READ_ONLY, ApiConfig
from src.api.error_handlers import INTERNAL_ERROR
from src.api.response_envelope import error_response

logger = logging.getLogger(__name__)
access_logger = logging.getLogger("src.api.access")

CATALOG_ROUTES: Mapping[str, str] = MappingProxyType(
    {
        "/film": "GET",
        "/film/add": "POST",
        "/film/update": "PUT",
        "/film/delete": "DELETE",
        "/film/search": "GET",
        "/actor": "GET",
        "/actor/add": "POST",
        "/actor/update": "PUT",
        "/actor/delete": "DELETE",
    }
)

PUBLIC_ROUTES: Mapping[str, str] = MappingProxyType(
    {
        "/health": "GET",
        "/ready": "GET",
        "/version": "GET",
        "/metrics": "GET",
        "/docs": "GET",
        "/openapi.json": "GET",
    }
)

ROUTE_METHODS: Mapping[str, str] = MappingProxyType({**CATALOG_ROUTES, **PUBLIC_ROUTES})

API_HTTP_REQUESTS_TOTAL = Counter(
    "api_http_requests_total",
    "Total number of HTTP requests processed by the API.",
    ["method", "path", "status_code"],
)
API_HTTP_REQUEST_DURATION_SECONDS = Histogram(
    "api_http_request_duration_seconds",
    "API request duration in seconds.",
    ["method", "path"],
    buckets=(0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1, 2.5, 5, 10),
)
API_HTTP_INFLIGHT_REQUESTS = Gauge(
    "api_http_inflight_requests",
    "Number of API requests currently being processed.",
    ["method", "path"],
)


def classify_status(status_code: int) -> tuple[int, str]:
    """Map a response status to a log level and outcome label."""

    if status_code >= 500:
        return logging.ERROR, "Server Error"
    if 400 <= status_code < 500:
        return logging.WARNING, "Client Error"
    if 300 <= status_code < 400:
        return logging.INFO, "Redirect"
    if 200 <= status_code < 300:
        return logging.INFO, "Success"
    return logging.INFO, "Informational"


def is_upgrade_request(request: Request) -> bool:
    tokens = request.headers.get("connection", "").split(",")
    return any(token.strip().lower() == "upgrade" for token in tokens)


class RecoveryMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        try:
            return await call_next(request)
        except Exception:
            logger.critical(
                "Recovered from unhandled exception on %s %s",
                request.method,
                request.url.path,
                exc_info=True,
            )
            if is_upgrade_request(request):
                raise
            return error_response(500, INTERNAL_ERROR)


class LoggingMiddleware(BaseHTTPMiddleware):
    """Access log and request metrics, one entry per request."""

    def __init__(self, app: ASGIApp, *, enable_metrics: bool = True) -> None:
        super().__init__(app)
        self.enable_metrics = enable_metrics

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        method = request.method
        path = request.url.path
        path_label = path if path in ROUTE_METHODS else "unmatched"
        started = time.perf_counter()
        status_code = 500
        byte_length = 0

        if self.enable_metrics:
            API_HTTP_INFLIGHT_REQUESTS.labels(method=method, path=path_label).inc()
        try:
            response = await call_next(request)
            status_code = response.status_code
            byte_length = int(response.headers.get("content-length", 0))
            response.headers["x-response-time-ms"] = f"{(time.perf_counter() - started) * 1000.0:.2f}"
            return response
        finally:
            duration_s = time.perf_counter() - started
            fields = {
                "method": method,
                "path": path,
                "status": status_code,
                "remote_ip": request.client.host if request.client else "-",
                "byte_len": byte_length,
                "user_agent": request.headers.get("user-agent", "-"),
                "duration_ms": round(duration_s * 1000.0, 2),
            }
            level, outcome = classify_status(status_code)
            access_logger.log(
                level,
                "%s %s",
                outcome,
                " ".join(f"{key}={value}" for key, value in fields.items()),
                extra={"http": fields},
            )
            if self.enable_metrics:
                API_HTTP_REQUESTS_TOTAL.labels(
                    method=method, path=path_label, status_code=str(status_code)
                ).inc()
                API_HTTP_REQUEST_DURATION_SECONDS.labels(method=method, path=path_label).observe(
                    duration_s
                )
                API_HTTP_INFLIGHT_REQUESTS.labels(method=method, path=path_label).dec()


class AllowlistMiddleware(BaseHTTPMiddleware):
    def __init__(self, app: ASGIApp, *, routes: Mapping[str, str] = ROUTE_METHODS) -> None:
        super().__init__(app)
        self.routes = routes

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        allowed_method = self.routes.get(request.url.path)
        if allowed_method is None:
            return error_response(404, "Not found")
        if request.method != allowed_method:
            return error_response(405, "Method not allowed")
        return await call_next(request)


class AuthenticationMiddleware(BaseHTTPMiddleware):
    """Session cookie check; each recognized token maps to a capability."""

    def __init__(
        self,
        app: ASGIApp,
        *,
        cookie_name: str,
        session_tokens: Mapping[str, str],
        public_routes: Mapping[str, str] = PUBLIC_ROUTES,
    ) -> None:
        super().__init__(app)
        self.cookie_name = cookie_name
        self.session_tokens = MappingProxyType(dict(session_tokens))
        self.public_routes = public_routes

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        if request.url.path in self.public_routes:
            return await call_next(request)

        token = request.cookies.get(self.cookie_name)
        if not token:
            return error_response(401, "missing token unauthorized")

        capability = self.session_tokens.get(token)
        if capability is None:
            return error_response(401, "invalid token")

        if capability == CAPABILITY_READ_ONLY and request.method != "GET":
            return error_response(403, "forbidden")

        return await call_next(request)


def register_middleware(app: FastAPI, config: ApiConfig) -> None:
    """Install the pipeline; the last middleware added runs first."""

    app.add_middleware(
        AuthenticationMiddleware,
        cookie_name=config.session_cookie_name,
        session_tokens=config.session_tokens,
    )
    app.add_middleware(AllowlistMiddleware)
    app.add_middleware(LoggingMiddleware, enable_metrics=config.enable_metrics)
    app.add_middleware(RecoveryMiddleware)

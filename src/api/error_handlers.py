# This file defines consistent API error payloads and exception handlers.
# It exists so every endpoint returns the same `{status, message}` error envelope.
# The handlers translate validation, HTTP, and data-access failures into safe client messages.
# Driver details are logged here and never copied into the response body.

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import Response
from starlette.exceptions import HTTPException as StarletteHTTPException

from src.api.errors import NotFoundError, StoreError
from src.api.response_envelope import error_response

logger = logging.getLogger(__name__)

BAD_QUERY_PARAM = "Bad query param"
CORRUPTED_BODY = "Corrupted request body"
INVALID_REQUEST = "Invalid request"
OBJECT_NOT_FOUND = "Object does not exist"
INTERNAL_ERROR = "Internal server error"


class APIError(Exception):
    """Edge error with the status code and message sent to the client."""

    def __init__(self, *, status_code: int, message: str) -> None:
        self.status_code = status_code
        self.message = message
        super().__init__(message)


def validation_message(errors: Sequence[dict[str, Any]]) -> str:
    """Pick the client message for a failed request validation."""

    if any(error.get("type") == "json_invalid" for error in errors):
        return CORRUPTED_BODY
    query_errors = [error for error in errors if tuple(error.get("loc", ()))[:1] == ("query",)]
    if query_errors:
        # A well-formed but negative id is a rejected request, not a malformed parameter.
        if all(error.get("type") == "greater_than_equal" for error in query_errors):
            return INVALID_REQUEST
        return BAD_QUERY_PARAM
    return INVALID_REQUEST


def register_error_handlers(app: FastAPI) -> None:
    """Register global exception handlers."""

    @app.exception_handler(APIError)
    async def api_error_handler(request: Request, exc: APIError) -> Response:
        return error_response(exc.status_code, exc.message)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError) -> Response:
        errors = exc.errors()
        logger.info("Rejected %s %s: %s", request.method, request.url.path, errors)
        return error_response(400, validation_message(errors))

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> Response:
        return error_response(exc.status_code, str(exc.detail))

    @app.exception_handler(NotFoundError)
    async def not_found_handler(request: Request, exc: NotFoundError) -> Response:
        logger.info("user bad request: %s", exc)
        return error_response(404, OBJECT_NOT_FOUND)

    @app.exception_handler(StoreError)
    async def store_error_handler(request: Request, exc: StoreError) -> Response:
        logger.error("Store failure on %s %s: %r", request.method, request.url.path, exc.__cause__ or exc)
        return error_response(500, INTERNAL_ERROR)

# This file builds the success and error envelopes returned by every endpoint.
# It exists so downstream clients always receive `{status, body}` or `{status, message}` as JSON.
# Encoding failures never escape: a success degrades to a bare 500 and an error falls back to plain text.
# Middleware and routers both use these helpers so short-circuited requests look the same as handled ones.

from __future__ import annotations

import logging
from typing import Any

from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse, PlainTextResponse, Response

logger = logging.getLogger(__name__)

JSON_MEDIA_TYPE = "application/json"


def success_response(status_code: int, body: Any) -> Response:
    """Return `{"status": status_code, "body": body}` as JSON."""

    try:
        content = jsonable_encoder({"status": status_code, "body": body})
        return JSONResponse(status_code=status_code, content=content, media_type=JSON_MEDIA_TYPE)
    except (TypeError, ValueError) as exc:
        logger.error("Failed to encode success response: %s", exc)
        return Response(status_code=500, media_type=JSON_MEDIA_TYPE)


def error_response(status_code: int, message: str) -> Response:
    """Return `{"status": status_code, "message": message}` as JSON."""

    try:
        content = jsonable_encoder({"status": status_code, "message": message})
        return JSONResponse(status_code=status_code, content=content, media_type=JSON_MEDIA_TYPE)
    except (TypeError, ValueError) as exc:
        logger.error("Failed to encode error message: %s", exc)
        return PlainTextResponse(
            f"Can't encode error message into json, message: {message}",
            status_code=500,
        )

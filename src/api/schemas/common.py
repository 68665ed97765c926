# This file defines the envelope models shared by every endpoint.
# Success payloads wrap their data in `body`; failures carry only a human-readable `message`.
# The routers name these models in OpenAPI; the envelope helpers build the matching JSON bodies.

from __future__ import annotations

from typing import Generic, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class SuccessEnvelope(BaseModel, Generic[T]):
    status: int
    body: T


class ErrorEnvelope(BaseModel):
    status: int
    message: str

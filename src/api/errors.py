# This file defines the data-access error types shared by repositories, usecases, and routers.
# Repositories raise them, usecases let them pass through untouched, and routers map them to HTTP codes.
# NotFoundError must stay distinguishable from StoreError so a missing record is never reported as a 500.

from __future__ import annotations


class CatalogError(Exception):
    """Base class for film library data errors."""


class NotFoundError(CatalogError):
    """Referenced record does not exist."""

    def __init__(self, entity: str, record_id: int) -> None:
        self.entity = entity
        self.record_id = record_id
        super().__init__(f"{entity} {record_id} does not exist")


class StoreError(CatalogError):
    """Opaque persistence or connectivity failure."""

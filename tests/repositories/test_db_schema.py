"""
Schema provisioning tests.
Creating the schema must be repeatable and leave every catalog table visible to readiness checks.
"""

from __future__ import annotations

import pytest

from src.api.db_access import DatabaseClient
from src.api.db_schema import CATALOG_TABLES, create_schema
from src.api.errors import StoreError


def test_create_schema_is_repeatable(db_client: DatabaseClient) -> None:
    create_schema(db_client.engine)

    assert db_client.can_connect() is True
    assert all(db_client.table_exists(name) for name in CATALOG_TABLES)
    assert db_client.table_exists("rental") is False


def test_driver_errors_surface_as_store_error(db_client: DatabaseClient) -> None:
    with pytest.raises(StoreError, match="database read failed"):
        db_client.fetch_all("SELECT missing_column FROM film")

# This file wraps database access so repositories can run parameterized SQL safely.
# It exists to keep SQL execution details out of repository code and make testing easier.
# Every driver failure is re-raised as StoreError so callers never depend on SQLAlchemy types.
# Each call checks one connection out of the engine pool and returns it when the statement ends.
# SQLite connections get foreign keys switched on so link rows cascade like they do on Postgres.

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from typing import Any

from sqlalchemy import create_engine, event, inspect, text
from sqlalchemy.engine import Connection, Engine
from sqlalchemy.exc import SQLAlchemyError

from src.api.errors import StoreError

logger = logging.getLogger(__name__)


@contextmanager
def _store_errors(action: str) -> Iterator[None]:
    try:
        yield
    except SQLAlchemyError as exc:
        logger.error("Database %s failed: %s", action, exc)
        raise StoreError(f"database {action} failed") from exc


def _enable_sqlite_foreign_keys(dbapi_connection: Any, connection_record: Any) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


class DatabaseClient:
    """Minimal SQLAlchemy wrapper for catalog read/write access."""

    def __init__(
        self,
        *,
        database_url: str | None = None,
        engine: Engine | None = None,
        pool_size: int = 5,
    ) -> None:
        if engine is None:
            if not database_url:
                raise ValueError("Either database_url or engine is required.")
            engine_kwargs: dict[str, Any] = {"pool_pre_ping": True}
            if not database_url.startswith("sqlite"):
                engine_kwargs["pool_size"] = pool_size
            engine = create_engine(database_url, **engine_kwargs)
        if engine.dialect.name == "sqlite":
            event.listen(engine, "connect", _enable_sqlite_foreign_keys)
        self._engine: Engine = engine

    @property
    def engine(self) -> Engine:
        return self._engine

    def can_connect(self) -> bool:
        try:
            with self._engine.connect() as connection:
                connection.execute(text("SELECT 1"))
            return True
        except SQLAlchemyError:
            return False

    def table_exists(self, table_name: str) -> bool:
        with _store_errors("inspection"):
            return inspect(self._engine).has_table(table_name)

    def fetch_all(self, query: str, params: Mapping[str, Any] | None = None) -> list[dict[str, Any]]:
        with _store_errors("read"), self._engine.connect() as connection:
            rows = connection.execute(text(query), dict(params or {})).mappings().all()
        return [dict(row) for row in rows]

    def fetch_one(self, query: str, params: Mapping[str, Any] | None = None) -> dict[str, Any] | None:
        with _store_errors("read"), self._engine.connect() as connection:
            row = connection.execute(text(query), dict(params or {})).mappings().first()
        return dict(row) if row is not None else None

    def write_returning(
        self, query: str, params: Mapping[str, Any] | None = None
    ) -> dict[str, Any] | None:
        """Run a committed write and return the first RETURNING row, if any."""

        with _store_errors("write"), self._engine.begin() as connection:
            row = connection.execute(text(query), dict(params or {})).mappings().first()
        return dict(row) if row is not None else None

    @contextmanager
    def transaction(self) -> Iterator[Connection]:
        """Yield one connection whose statements commit or roll back together."""

        with _store_errors("transaction"), self._engine.begin() as connection:
            yield connection

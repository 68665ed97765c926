# This file declares the relational catalog tables with SQLAlchemy Core metadata.
# It exists so the schema can be created the same way against Postgres and the SQLite test engine.
# Repositories still issue hand-written SQL; these tables only describe the storage contract.

from __future__ import annotations

from sqlalchemy import (
    Column,
    Date,
    DateTime,
    ForeignKey,
    Integer,
    MetaData,
    String,
    Table,
)
from sqlalchemy.engine import Engine

metadata = MetaData()

film_table = Table(
    "film",
    metadata,
    Column("film_id", Integer, primary_key=True, autoincrement=True),
    Column("title", String(150), nullable=False),
    Column("description", String(1000), nullable=False, server_default=""),
    Column("release_date", DateTime, nullable=False),
    Column("rating", Integer, nullable=False, server_default="0"),
)

actor_table = Table(
    "actor",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("name", String(255), nullable=False),
    Column("sex", String(1), nullable=False),
    Column("birth_date", Date, nullable=True),
)

film_actor_table = Table(
    "film_actor",
    metadata,
    Column(
        "film_id",
        Integer,
        ForeignKey("film.film_id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column(
        "actor_id",
        Integer,
        ForeignKey("actor.id", ondelete="CASCADE"),
        primary_key=True,
    ),
)

CATALOG_TABLES = ("film", "actor", "film_actor")

# Largest value the Integer id columns hold on Postgres.
MAX_RECORD_ID = 2_147_483_647


def create_schema(engine: Engine) -> None:
    """Create catalog tables that do not exist yet."""

    metadata.create_all(engine)

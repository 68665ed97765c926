"""
Fixtures for repository tests backed by an in-memory SQLite database.
The schema comes from the same SQLAlchemy metadata used to provision Postgres.
"""

from __future__ import annotations

from collections.abc import Iterator
from datetime import date, datetime

import pytest
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool

from src.api.db_access import DatabaseClient
from src.api.db_schema import create_schema
from src.api.repositories.actor_repository import ActorRepository
from src.api.repositories.film_repository import FilmRepository
from src.api.schemas.actor_schemas import AddActorRequest
from src.api.schemas.film_schemas import AddFilmRequest


@pytest.fixture()
def db_client() -> Iterator[DatabaseClient]:
    engine = create_engine(
        "sqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    client = DatabaseClient(engine=engine)
    create_schema(client.engine)
    yield client
    engine.dispose()


@pytest.fixture()
def film_repository(db_client: DatabaseClient) -> FilmRepository:
    return FilmRepository(db=db_client)


@pytest.fixture()
def actor_repository(db_client: DatabaseClient) -> ActorRepository:
    return ActorRepository(db=db_client)


@pytest.fixture()
def seeded_catalog(
    film_repository: FilmRepository, actor_repository: ActorRepository
) -> dict[str, int]:
    """Three actors and three films; Hanks plays in two, the newcomer in none."""

    hanks = actor_repository.add_actor(
        AddActorRequest(name="Tom Hanks", sex="M", birth_date=date(1956, 7, 9))
    )
    wright = actor_repository.add_actor(
        AddActorRequest(name="Robin Wright", sex="W", birth_date=date(1966, 4, 8))
    )
    newcomer = actor_repository.add_actor(AddActorRequest(name="Newcomer", sex="N"))

    gump = film_repository.add_film(
        AddFilmRequest(
            title="Forrest Gump",
            description="Life is like a box of chocolates.",
            release_date=datetime(1994, 7, 6),
            rating=9,
            actors=[hanks, wright],
        )
    )
    big = film_repository.add_film(
        AddFilmRequest(
            title="Big",
            release_date=datetime(1988, 6, 3),
            rating=7,
            actors=[hanks],
        )
    )
    heat = film_repository.add_film(
        AddFilmRequest(title="Heat", release_date=datetime(1995, 12, 15), rating=8)
    )
    return {
        "hanks": hanks,
        "wright": wright,
        "newcomer": newcomer,
        "gump": gump,
        "big": big,
        "heat": heat,
    }

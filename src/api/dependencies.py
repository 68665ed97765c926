# This file provides dependency factories for FastAPI routes and middleware.
# It exists so the database client, repositories, and usecases are created once and shared.
# The setup keeps routers thin and makes endpoint tests easy to override.
# Centralized construction also ensures one consistent API configuration is used.

from __future__ import annotations

from functools import lru_cache

from src.api.api_config import ApiConfig, get_api_config
from src.api.db_access import DatabaseClient
from src.api.repositories.actor_repository import ActorRepository
from src.api.repositories.film_repository import FilmRepository
from src.api.usecases.actor_usecase import ActorUsecase
from src.api.usecases.film_usecase import FilmUsecase


@lru_cache(maxsize=1)
def get_database_client() -> DatabaseClient:
    config = get_api_config()
    return DatabaseClient(database_url=config.database_url, pool_size=config.db_pool_size)


@lru_cache(maxsize=1)
def get_film_usecase() -> FilmUsecase:
    repository = FilmRepository(db=get_database_client())
    return FilmUsecase(repository=repository)


@lru_cache(maxsize=1)
def get_actor_usecase() -> ActorUsecase:
    config = get_api_config()
    repository = ActorRepository(
        db=get_database_client(),
        filmography_strategy=config.filmography_strategy,
    )
    return ActorUsecase(repository=repository)


def get_config() -> ApiConfig:
    return get_api_config()

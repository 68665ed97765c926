# This file implements actor data access, including the filmography aggregation.
# Actor listings attach each actor's films from film_actor at read time.
# The default strategy issues one query for actors plus one per actor; the joined strategy
# reads everything in a single LEFT JOIN and groups rows in Python. Both return the same shape.

from __future__ import annotations

import logging
from typing import Any, Literal

from src.api.db_access import DatabaseClient
from src.api.errors import NotFoundError, StoreError
from src.api.schemas.actor_schemas import Actor, ActorWithFilms, AddActorRequest, FilmObj

logger = logging.getLogger(__name__)

FilmographyStrategy = Literal["per_actor", "joined"]


class ActorRepository:
    """Actor queries against the relational store."""

    def __init__(
        self,
        *,
        db: DatabaseClient,
        filmography_strategy: FilmographyStrategy = "per_actor",
    ) -> None:
        self.db = db
        self.filmography_strategy = filmography_strategy

    def add_actor(self, actor: AddActorRequest) -> int:
        query = """
        INSERT INTO actor (name, sex, birth_date)
        VALUES (:name, :sex, :birth_date)
        RETURNING id
        """
        row = self.db.write_returning(query, actor.model_dump())
        if row is None:
            raise StoreError("actor insert returned no id")
        logger.info("Added actor %s", row["id"])
        return int(row["id"])

    def update_actor(self, actor: Actor) -> Actor:
        query = """
        UPDATE actor
        SET name = :name, sex = :sex, birth_date = :birth_date
        WHERE id = :id
        RETURNING id
        """
        if self.db.write_returning(query, actor.model_dump()) is None:
            raise NotFoundError("actor", actor.id)
        return actor

    def delete_actor(self, actor_id: int) -> int:
        query = "DELETE FROM actor WHERE id = :actor_id RETURNING id"
        row = self.db.write_returning(query, {"actor_id": actor_id})
        if row is None:
            raise NotFoundError("actor", actor_id)
        return int(row["id"])

    def get_actor(self, actor_id: int) -> Actor:
        query = "SELECT id, name, sex, birth_date FROM actor WHERE id = :actor_id"
        row = self.db.fetch_one(query, {"actor_id": actor_id})
        if row is None:
            raise NotFoundError("actor", actor_id)
        return Actor.model_validate(row)

    def get_actors(self) -> list[ActorWithFilms]:
        if self.filmography_strategy == "joined":
            return self.get_actors_joined()
        return self.get_actors_per_actor()

    def get_actors_per_actor(self) -> list[ActorWithFilms]:
        actor_query = """
        SELECT a.id AS actor_id, a.name, a.sex, a.birth_date
        FROM actor a
        ORDER BY a.id ASC
        """
        films_query = """
        SELECT f.film_id, f.title
        FROM film_actor fa
        JOIN film f ON f.film_id = fa.film_id
        WHERE fa.actor_id = :actor_id
        ORDER BY f.film_id ASC
        """
        actors: list[ActorWithFilms] = []
        for row in self.db.fetch_all(actor_query):
            film_rows = self.db.fetch_all(films_query, {"actor_id": row["actor_id"]})
            actors.append(
                ActorWithFilms(
                    **row,
                    films=[FilmObj.model_validate(film_row) for film_row in film_rows],
                )
            )
        return actors

    def get_actors_joined(self) -> list[ActorWithFilms]:
        query = """
        SELECT a.id AS actor_id, a.name, a.sex, a.birth_date, f.film_id, f.title
        FROM actor a
        LEFT JOIN film_actor fa ON fa.actor_id = a.id
        LEFT JOIN film f ON f.film_id = fa.film_id
        ORDER BY a.id ASC, f.film_id ASC
        """
        grouped: dict[int, ActorWithFilms] = {}
        for row in self.db.fetch_all(query):
            actor = grouped.get(row["actor_id"])
            if actor is None:
                actor = self._actor_from_joined_row(row)
                grouped[actor.actor_id] = actor
            if row["film_id"] is not None:
                actor.films.append(FilmObj(film_id=row["film_id"], title=row["title"]))
        return list(grouped.values())

    @staticmethod
    def _actor_from_joined_row(row: dict[str, Any]) -> ActorWithFilms:
        return ActorWithFilms(
            actor_id=row["actor_id"],
            name=row["name"],
            sex=row["sex"],
            birth_date=row["birth_date"],
        )

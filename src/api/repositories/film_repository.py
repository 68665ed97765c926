# This file implements film data access: listing, lookup, mutation, and search.
# It exists so routers and usecases never embed SQL or depend on driver result types.
# Sort columns come from a fixed field map so user input is never interpolated into query text.
# Film creation writes the film row and its actor links inside one transaction.

from __future__ import annotations

import logging
from typing import Any

from sqlalchemy import text

from src.api.db_access import DatabaseClient
from src.api.errors import NotFoundError
from src.api.schemas.film_schemas import AddFilmRequest, Film, FilmFilter

logger = logging.getLogger(__name__)

FILM_SORT_FIELD_MAP: dict[str, str] = {
    "rating": "f.rating",
    "release_date": "f.release_date",
    "title": "f.title",
}

SORT_ORDER_MAP: dict[str, str] = {
    "asc": "ASC",
    "desc": "DESC",
}

_FILM_COLUMNS = "f.film_id, f.title, f.description, f.release_date, f.rating"


def escape_like(term: str) -> str:
    """Escape LIKE wildcards so the term matches as a literal substring."""

    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class FilmRepository:
    """Film queries against the relational store."""

    def __init__(self, *, db: DatabaseClient) -> None:
        self.db = db

    def get_films(self, film_filter: FilmFilter) -> list[Film]:
        query = f"""
        SELECT {_FILM_COLUMNS}
        FROM film f
        ORDER BY {self._order_by_clause(film_filter)}, f.film_id ASC
        """
        return [self._to_film(row) for row in self.db.fetch_all(query)]

    def get_film(self, film_id: int) -> Film:
        query = f"SELECT {_FILM_COLUMNS} FROM film f WHERE f.film_id = :film_id"
        row = self.db.fetch_one(query, {"film_id": film_id})
        if row is None:
            raise NotFoundError("film", film_id)
        return self._to_film(row)

    def add_film(self, film: AddFilmRequest) -> int:
        insert_film = text(
            """
            INSERT INTO film (title, description, release_date, rating)
            VALUES (:title, :description, :release_date, :rating)
            RETURNING film_id
            """
        )
        insert_link = text(
            "INSERT INTO film_actor (film_id, actor_id) VALUES (:film_id, :actor_id)"
        )
        actor_ids = list(dict.fromkeys(film.actors))

        with self.db.transaction() as connection:
            film_id = int(
                connection.execute(
                    insert_film,
                    {
                        "title": film.title,
                        "description": film.description,
                        "release_date": film.release_date,
                        "rating": film.rating,
                    },
                ).scalar_one()
            )
            if actor_ids:
                connection.execute(
                    insert_link,
                    [{"film_id": film_id, "actor_id": actor_id} for actor_id in actor_ids],
                )

        logger.info("Added film %s with %s linked actors", film_id, len(actor_ids))
        return film_id

    def update_film(self, film: Film) -> int:
        query = """
        UPDATE film
        SET title = :title, description = :description, release_date = :release_date, rating = :rating
        WHERE film_id = :film_id
        RETURNING film_id
        """
        row = self.db.write_returning(query, film.model_dump())
        if row is None:
            raise NotFoundError("film", film.film_id)
        return int(row["film_id"])

    def delete_film(self, film_id: int) -> int:
        query = "DELETE FROM film WHERE film_id = :film_id RETURNING film_id"
        row = self.db.write_returning(query, {"film_id": film_id})
        if row is None:
            raise NotFoundError("film", film_id)
        return int(row["film_id"])

    def search_films(self, term: str) -> list[Film]:
        # LEFT JOINs keep films without actors searchable by title.
        query = rf"""
        SELECT DISTINCT {_FILM_COLUMNS}
        FROM film f
        LEFT JOIN film_actor fa ON fa.film_id = f.film_id
        LEFT JOIN actor a ON a.id = fa.actor_id
        WHERE f.title LIKE :pattern ESCAPE '\'
           OR a.name LIKE :pattern ESCAPE '\'
        ORDER BY f.film_id ASC
        """
        rows = self.db.fetch_all(query, {"pattern": f"%{escape_like(term)}%"})
        return [self._to_film(row) for row in rows]

    @staticmethod
    def _order_by_clause(film_filter: FilmFilter) -> str:
        return f"{FILM_SORT_FIELD_MAP[film_filter.sort_by]} {SORT_ORDER_MAP[film_filter.sort_order]}"

    @staticmethod
    def _to_film(row: dict[str, Any]) -> Film:
        return Film.model_validate(row)

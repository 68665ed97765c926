"""
Film repository tests against SQLite.
They cover sort ordering, round-trips through add/get, not-found handling, and search de-duplication.
"""

from __future__ import annotations

from datetime import datetime

import pytest

from src.api.errors import NotFoundError, StoreError
from src.api.repositories.film_repository import FilmRepository, escape_like
from src.api.schemas.film_schemas import AddFilmRequest, Film, FilmFilter


@pytest.mark.parametrize(
    ("sort_by", "sort_order", "expected_titles"),
    [
        ("rating", "desc", ["Forrest Gump", "Heat", "Big"]),
        ("rating", "asc", ["Big", "Heat", "Forrest Gump"]),
        ("release_date", "asc", ["Big", "Forrest Gump", "Heat"]),
        ("release_date", "desc", ["Heat", "Forrest Gump", "Big"]),
        ("title", "asc", ["Big", "Forrest Gump", "Heat"]),
        ("title", "desc", ["Heat", "Forrest Gump", "Big"]),
    ],
)
def test_get_films_orders_by_filter(
    film_repository: FilmRepository,
    seeded_catalog: dict[str, int],
    sort_by: str,
    sort_order: str,
    expected_titles: list[str],
) -> None:
    films = film_repository.get_films(FilmFilter(sort_by=sort_by, sort_order=sort_order))

    assert [film.title for film in films] == expected_titles


def test_add_then_get_returns_same_film(film_repository: FilmRepository) -> None:
    request = AddFilmRequest(
        title="Cast Away",
        description="Wilson!",
        release_date=datetime(2000, 12, 22, 18, 30),
        rating=8,
    )
    film_id = film_repository.add_film(request)

    stored = film_repository.get_film(film_id)

    assert film_id > 0
    assert stored == Film(
        film_id=film_id,
        title=request.title,
        description=request.description,
        release_date=request.release_date,
        rating=request.rating,
    )


def test_add_film_links_actors(
    film_repository: FilmRepository, seeded_catalog: dict[str, int]
) -> None:
    rows = film_repository.db.fetch_all(
        "SELECT actor_id FROM film_actor WHERE film_id = :film_id ORDER BY actor_id",
        {"film_id": seeded_catalog["gump"]},
    )

    assert [row["actor_id"] for row in rows] == [seeded_catalog["hanks"], seeded_catalog["wright"]]


def test_add_film_ignores_duplicate_actor_ids(
    film_repository: FilmRepository, seeded_catalog: dict[str, int]
) -> None:
    hanks = seeded_catalog["hanks"]
    film_id = film_repository.add_film(
        AddFilmRequest(
            title="Splash", release_date=datetime(1984, 3, 9), rating=6, actors=[hanks, hanks]
        )
    )
    rows = film_repository.db.fetch_all(
        "SELECT actor_id FROM film_actor WHERE film_id = :film_id", {"film_id": film_id}
    )

    assert [row["actor_id"] for row in rows] == [hanks]


def test_get_missing_film_raises_not_found(film_repository: FilmRepository) -> None:
    with pytest.raises(NotFoundError):
        film_repository.get_film(404)


def test_update_film_replaces_all_fields(
    film_repository: FilmRepository, seeded_catalog: dict[str, int]
) -> None:
    replacement = Film(
        film_id=seeded_catalog["heat"],
        title="Heat (Director's Cut)",
        description="",
        release_date=datetime(1995, 12, 16),
        rating=-1,
    )

    assert film_repository.update_film(replacement) == seeded_catalog["heat"]
    assert film_repository.get_film(seeded_catalog["heat"]) == replacement


def test_update_missing_film_raises_not_found(film_repository: FilmRepository) -> None:
    film = Film(film_id=99, title="Ghost", release_date=datetime(1990, 7, 13), rating=5)

    with pytest.raises(NotFoundError):
        film_repository.update_film(film)


def test_delete_film_removes_it(
    film_repository: FilmRepository, seeded_catalog: dict[str, int]
) -> None:
    assert film_repository.delete_film(seeded_catalog["big"]) == seeded_catalog["big"]

    with pytest.raises(NotFoundError):
        film_repository.get_film(seeded_catalog["big"])
    with pytest.raises(NotFoundError):
        film_repository.delete_film(seeded_catalog["big"])


def test_search_matches_title_and_actor_without_duplicates(
    film_repository: FilmRepository, seeded_catalog: dict[str, int]
) -> None:
    by_title = film_repository.search_films("Gump")
    by_actor = film_repository.search_films("Hanks")
    by_either = film_repository.search_films("r")

    assert [film.film_id for film in by_title] == [seeded_catalog["gump"]]
    assert [film.film_id for film in by_actor] == [seeded_catalog["gump"], seeded_catalog["big"]]
    ids = [film.film_id for film in by_either]
    assert len(ids) == len(set(ids))
    assert seeded_catalog["gump"] in ids


def test_search_finds_films_without_actors_by_title(
    film_repository: FilmRepository, seeded_catalog: dict[str, int]
) -> None:
    assert [film.film_id for film in film_repository.search_films("Heat")] == [seeded_catalog["heat"]]


def test_search_treats_wildcards_literally(
    film_repository: FilmRepository, seeded_catalog: dict[str, int]
) -> None:
    assert film_repository.search_films("%") == []
    assert film_repository.search_films("_") == []


def test_escape_like() -> None:
    assert escape_like("50%_off\\") == "50\\%\\_off\\\\"


def test_add_film_with_unknown_actor_rolls_back(
    film_repository: FilmRepository, seeded_catalog: dict[str, int]
) -> None:
    count_query = "SELECT COUNT(*) AS film_count FROM film"
    before = film_repository.db.fetch_one(count_query)

    with pytest.raises(StoreError):
        film_repository.add_film(
            AddFilmRequest(
                title="Splash",
                release_date=datetime(1984, 3, 9),
                rating=6,
                actors=[seeded_catalog["hanks"], 9999],
            )
        )

    assert film_repository.db.fetch_one(count_query) == before
    assert [film.title for film in film_repository.search_films("Splash")] == []


def test_delete_film_removes_actor_links(
    film_repository: FilmRepository, seeded_catalog: dict[str, int]
) -> None:
    link_query = "SELECT COUNT(*) AS link_count FROM film_actor WHERE film_id = :film_id"
    params = {"film_id": seeded_catalog["gump"]}
    assert film_repository.db.fetch_one(link_query, params) == {"link_count": 2}

    film_repository.delete_film(seeded_catalog["gump"])

    assert film_repository.db.fetch_one(link_query, params) == {"link_count": 0}

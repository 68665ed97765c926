# This file implements the film usecase consumed by the film router.
# Each method makes exactly one repository call; results and errors pass through unchanged.

from __future__ import annotations

import logging
from typing import Protocol

from src.api.schemas.film_schemas import AddFilmRequest, Film, FilmFilter

logger = logging.getLogger(__name__)


class FilmStore(Protocol):
    def get_films(self, film_filter: FilmFilter) -> list[Film]: ...

    def get_film(self, film_id: int) -> Film: ...

    def add_film(self, film: AddFilmRequest) -> int: ...

    def update_film(self, film: Film) -> int: ...

    def delete_film(self, film_id: int) -> int: ...

    def search_films(self, term: str) -> list[Film]: ...


class FilmUsecase:
    def __init__(self, *, repository: FilmStore) -> None:
        self.repository = repository

    def get_films(self, film_filter: FilmFilter) -> list[Film]:
        logger.debug("Listing films sort_by=%s sort_order=%s", film_filter.sort_by, film_filter.sort_order)
        return self.repository.get_films(film_filter)

    def get_film(self, film_id: int) -> Film:
        return self.repository.get_film(film_id)

    def add_film(self, film: AddFilmRequest) -> int:
        return self.repository.add_film(film)

    def update_film(self, film: Film) -> int:
        return self.repository.update_film(film)

    def delete_film(self, film_id: int) -> int:
        return self.repository.delete_film(film_id)

    def search_films(self, term: str) -> list[Film]:
        return self.repository.search_films(term)

# This file defines the film read model, mutation payloads, and the list sort filter.
# Constraints here are the validation boundary: the store does not enforce rating or length rules.
# Mutation payloads fail closed while the sort filter falls back to its default.

from __future__ import annotations

import logging
from datetime import datetime
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from src.api.db_schema import MAX_RECORD_ID

logger = logging.getLogger(__name__)

SortField = Literal["rating", "release_date", "title"]
SortOrder = Literal["asc", "desc"]

DEFAULT_SORT_BY: SortField = "rating"
DEFAULT_SORT_ORDER: SortOrder = "desc"


class Film(BaseModel):
    """Stored film record; also the full-replace payload for updates."""

    model_config = ConfigDict(extra="ignore")

    film_id: int = Field(gt=0, le=MAX_RECORD_ID)
    title: str = Field(min_length=1, max_length=150)
    description: str = Field(default="", max_length=1000)
    release_date: datetime
    rating: int = Field(ge=-1, le=10)


class AddFilmRequest(BaseModel):
    model_config = ConfigDict(extra="ignore")

    title: str = Field(min_length=1, max_length=150)
    description: str = Field(default="", max_length=1000)
    release_date: datetime
    rating: int = Field(ge=0, le=10)
    actors: list[Annotated[int, Field(gt=0, le=MAX_RECORD_ID)]] = Field(default_factory=list)


class FilmFilter(BaseModel):
    """Sort specification for the film listing."""

    model_config = ConfigDict(frozen=True)

    sort_by: SortField = DEFAULT_SORT_BY
    sort_order: SortOrder = DEFAULT_SORT_ORDER

    @classmethod
    def from_query(cls, sort_by: str | None, sort_order: str | None) -> FilmFilter:
        """Build a filter from raw query values, falling back to the default when invalid."""

        try:
            return cls(
                sort_by=sort_by or DEFAULT_SORT_BY,
                sort_order=sort_order or DEFAULT_SORT_ORDER,
            )
        except ValidationError:
            logger.info(
                "Ignoring invalid film sort sort_by=%r sort_order=%r", sort_by, sort_order
            )
            return cls()

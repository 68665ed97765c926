# This file defines actor payloads and the actor read model with its derived filmography.
# The filmography is computed from film_actor at read time and is never written through these models.
# On the wire the filmography key is `film`, which existing catalog clients read.

from __future__ import annotations

from datetime import date
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from src.api.db_schema import MAX_RECORD_ID

Sex = Literal["M", "W", "N"]


class FilmObj(BaseModel):
    film_id: int
    title: str


class AddActorRequest(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: str = Field(min_length=1)
    sex: Sex
    birth_date: date | None = None


class Actor(AddActorRequest):
    """Stored actor record; also the full-replace payload for updates."""

    id: int = Field(gt=0, le=MAX_RECORD_ID)


class ActorWithFilms(BaseModel):
    actor_id: int
    name: str
    sex: str
    birth_date: date | None = None
    films: list[FilmObj] = Field(default_factory=list, serialization_alias="film")

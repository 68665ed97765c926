# This file defines the film endpoints: listing, creation, replacement, deletion, and search.
# It exists so transport concerns (query parsing, status codes) stay out of the usecase layer.
# Invalid sort parameters fall back to the default order; invalid mutation bodies are rejected with 400.
# Not-found and store failures propagate to the registered error handlers.

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Response

from src.api.db_schema import MAX_RECORD_ID
from src.api.dependencies import get_film_usecase
from src.api.error_handlers import APIError
from src.api.response_envelope import success_response
from src.api.schemas.common import ErrorEnvelope, SuccessEnvelope
from src.api.schemas.film_schemas import AddFilmRequest, Film, FilmFilter
from src.api.usecases.film_usecase import FilmUsecase

router = APIRouter(
    prefix="/film",
    tags=["film"],
    responses={400: {"model": ErrorEnvelope}, 500: {"model": ErrorEnvelope}},
)
FilmUsecaseDep = Annotated[FilmUsecase, Depends(get_film_usecase)]


@router.get("", response_model=SuccessEnvelope[list[Film]])
def get_films(
    usecase: FilmUsecaseDep,
    sort_by: str | None = Query(default=None, description="rating, release_date or title"),
    sort_order: str | None = Query(default=None, description="asc or desc"),
) -> Response:
    film_filter = FilmFilter.from_query(sort_by, sort_order)
    return success_response(200, usecase.get_films(film_filter))


@router.post("/add", status_code=201, response_model=SuccessEnvelope[int])
def add_film(film: AddFilmRequest, usecase: FilmUsecaseDep) -> Response:
    return success_response(201, usecase.add_film(film))


@router.put(
    "/update",
    response_model=SuccessEnvelope[int],
    responses={404: {"model": ErrorEnvelope}},
)
def update_film(film: Film, usecase: FilmUsecaseDep) -> Response:
    return success_response(200, usecase.update_film(film))


@router.delete(
    "/delete",
    response_model=SuccessEnvelope[int],
    responses={404: {"model": ErrorEnvelope}},
)
def delete_film(
    usecase: FilmUsecaseDep,
    film_id: int = Query(alias="id", ge=0, le=MAX_RECORD_ID),
) -> Response:
    return success_response(200, usecase.delete_film(film_id))


@router.get("/search", response_model=SuccessEnvelope[list[Film]])
def search_films(
    usecase: FilmUsecaseDep,
    search: str = Query(default="", description="Substring of a film title or actor name"),
) -> Response:
    if not search:
        raise APIError(status_code=400, message="Empty title")
    return success_response(200, usecase.search_films(search))

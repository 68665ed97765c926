# This file defines the actor endpoints, including the listing with nested filmographies.
# Request bodies are validated before the usecase runs; a missing actor surfaces as 404.

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Response

from src.api.db_schema import MAX_RECORD_ID
from src.api.dependencies import get_actor_usecase
from src.api.response_envelope import success_response
from src.api.schemas.actor_schemas import Actor, ActorWithFilms, AddActorRequest
from src.api.schemas.common import ErrorEnvelope, SuccessEnvelope
from src.api.usecases.actor_usecase import ActorUsecase

router = APIRouter(
    prefix="/actor",
    tags=["actor"],
    responses={400: {"model": ErrorEnvelope}, 500: {"model": ErrorEnvelope}},
)
ActorUsecaseDep = Annotated[ActorUsecase, Depends(get_actor_usecase)]


@router.get("", response_model=SuccessEnvelope[list[ActorWithFilms]])
def get_actors(usecase: ActorUsecaseDep) -> Response:
    return success_response(200, usecase.get_actors())


@router.post("/add", response_model=SuccessEnvelope[int])
def add_actor(actor: AddActorRequest, usecase: ActorUsecaseDep) -> Response:
    return success_response(200, usecase.add_actor(actor))


@router.put(
    "/update",
    response_model=SuccessEnvelope[Actor],
    responses={404: {"model": ErrorEnvelope}},
)
def update_actor(actor: Actor, usecase: ActorUsecaseDep) -> Response:
    return success_response(200, usecase.update_actor(actor))


@router.delete(
    "/delete",
    response_model=SuccessEnvelope[int],
    responses={404: {"model": ErrorEnvelope}},
)
def delete_actor(
    usecase: ActorUsecaseDep,
    actor_id: int = Query(alias="id", ge=0, le=MAX_RECORD_ID),
) -> Response:
    return success_response(200, usecase.delete_actor(actor_id))

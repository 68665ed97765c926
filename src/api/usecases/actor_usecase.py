# This file implements the actor usecase consumed by the actor router.

from __future__ import annotations

from typing import Protocol

from src.api.schemas.actor_schemas import Actor, ActorWithFilms, AddActorRequest


class ActorStore(Protocol):
    def add_actor(self, actor: AddActorRequest) -> int: ...

    def update_actor(self, actor: Actor) -> Actor: ...

    def delete_actor(self, actor_id: int) -> int: ...

    def get_actor(self, actor_id: int) -> Actor: ...

    def get_actors(self) -> list[ActorWithFilms]: ...


class ActorUsecase:
    """Pass-through orchestration for actor operations."""

    def __init__(self, *, repository: ActorStore) -> None:
        self.repository = repository

    def add_actor(self, actor: AddActorRequest) -> int:
        return self.repository.add_actor(actor)

    def update_actor(self, actor: Actor) -> Actor:
        return self.repository.update_actor(actor)

    def delete_actor(self, actor_id: int) -> int:
        return self.repository.delete_actor(actor_id)

    def get_actor(self, actor_id: int) -> Actor:
        return self.repository.get_actor(actor_id)

    def get_actors(self) -> list[ActorWithFilms]:
        return self.repository.get_actors()

"""Actors, roles and the capability table."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, field_validator

from pyfleet.exceptions import UnknownActorError


class Role(StrEnum):
    ADMIN = "admin"
    OPERATOR = "operator"
    CONSULTANT = "consultant"


class Capabilities(BaseModel):
    """Permissions granted by a role."""

    model_config = ConfigDict(frozen=True)

    can_edit: bool
    can_delete: bool
    can_add_comments: bool


_CAPABILITIES: dict[Role, Capabilities] = {
    Role.ADMIN: Capabilities(can_edit=True, can_delete=True, can_add_comments=True),
    Role.OPERATOR: Capabilities(can_edit=True, can_delete=False, can_add_comments=True),
    Role.CONSULTANT: Capabilities(can_edit=False, can_delete=False, can_add_comments=False),
}


def capabilities(role: Role) -> Capabilities:
    """Return the capabilities of *role*."""
    return _CAPABILITIES[role]


class Actor(BaseModel):
    """A named user selected from the roster."""

    model_config = ConfigDict(frozen=True)

    name: str
    role: Role

    @field_validator("name")
    @classmethod
    def _normalize_name(cls, value: str) -> str:
        name = value.strip()
        if not name:
            raise ValueError("name must be non-empty")
        return name

    @property
    def capabilities(self) -> Capabilities:
        return capabilities(self.role)

    def can_edit(self) -> bool:
        return self.capabilities.can_edit

    def can_delete(self) -> bool:
        return self.capabilities.can_delete

    def can_add_comments(self) -> bool:
        return self.capabilities.can_add_comments


class TeamMember(BaseModel):
    """An actor paired with its capabilities, for the team panel."""

    model_config = ConfigDict(frozen=True)

    actor: Actor
    capabilities: Capabilities


class Roster:
    """Fixed, ordered set of actors with unique names."""

    def __init__(self, actors: Iterable[Actor]) -> None:
        self._actors: tuple[Actor, ...] = tuple(actors)
        if not self._actors:
            raise ValueError("roster must contain at least one actor")
        names = [actor.name for actor in self._actors]
        duplicates = sorted({name for name in names if names.count(name) > 1})
        if duplicates:
            raise ValueError(f"duplicate actor names in roster: {', '.join(duplicates)}")
        self._by_name: dict[str, Actor] = {actor.name: actor for actor in self._actors}

    def __iter__(self) -> Iterator[Actor]:
        return iter(self._actors)

    def __len__(self) -> int:
        return len(self._actors)

    def __contains__(self, name: object) -> bool:
        return name in self._by_name

    @property
    def default(self) -> Actor:
        """The actor a fresh session starts as."""
        return self._actors[0]

    def names(self) -> list[str]:
        return [actor.name for actor in self._actors]

    def get(self, name: str) -> Actor:
        try:
            return self._by_name[name]
        except KeyError:
            raise UnknownActorError(name) from None

    def team(self) -> list[TeamMember]:
        return [TeamMember(actor=actor, capabilities=actor.capabilities) for actor in self._actors]


DEFAULT_ROSTER = Roster(
    (
        Actor(name="Felipe", role=Role.ADMIN),
        Actor(name="Tiago", role=Role.OPERATOR),
        Actor(name="Pedro", role=Role.CONSULTANT),
    )
)

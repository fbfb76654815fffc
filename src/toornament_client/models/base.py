"""Shared pieces of the resource models."""

import enum
from dataclasses import dataclass
from typing import ClassVar


class Entity:
    """Base class of every resource model.

    ``identity_field`` names the attribute holding the server-assigned
    identity. ``None`` marks resources that are never addressed by id (a match
    result is reached through its match).
    """

    identity_field: ClassVar[str | None] = "id"


class MatchResultSimple(enum.IntEnum):
    """Outcome of an opponent in a match or game."""

    WIN = 1
    DRAW = 2
    LOSS = 3


@dataclass
class TeamSize:
    min: int | None = None
    max: int | None = None

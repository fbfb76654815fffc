"""Match, game and result models."""

import enum
from dataclasses import dataclass, field

from toornament_client.models.base import Entity, MatchResultSimple
from toornament_client.models.participants import Participant


class MatchType(str, enum.Enum):
    DUEL = "duel"
    FREE_FOR_ALL = "ffa"


class MatchStatus(str, enum.Enum):
    PENDING = "pending"
    RUNNING = "running"
    COMPLETED = "completed"


class MatchFormat(str, enum.Enum):
    NONE = "none"
    ONE = "one"
    HOME_AWAY = "home_away"
    BEST_OF_3 = "bo3"
    BEST_OF_5 = "bo5"
    BEST_OF_7 = "bo7"
    BEST_OF_9 = "bo9"
    BEST_OF_11 = "bo11"


@dataclass
class Opponent:
    """One side of a match or game."""

    number: int | None = None
    participant: Participant | None = None
    result: MatchResultSimple | None = None
    rank: int | None = None
    score: int | None = None
    forfeit: bool = False


@dataclass
class Game(Entity):
    """A game of a match, addressed by its number within the match."""

    identity_field = "number"

    number: int | None = None
    status: MatchStatus | None = None
    opponents: list[Opponent] = field(default_factory=list)


@dataclass
class Match(Entity):
    """A tournament or discipline match.

    ``games`` is only present when the matches were requested with
    ``with_games``.
    """

    id: str | None = None
    match_type: MatchType | None = field(default=None, metadata={"wire": "type"})
    discipline_id: str | None = field(default=None, metadata={"wire": "discipline", "read_only": True})
    status: MatchStatus | None = None
    tournament_id: str | None = field(default=None, metadata={"read_only": True})
    number: int | None = None
    stage_number: int | None = None
    group_number: int | None = None
    round_number: int | None = None
    date: str | None = None
    time_zone: str | None = field(default=None, metadata={"wire": "timezone"})
    match_format: MatchFormat | None = None
    opponents: list[Opponent] = field(default_factory=list)
    games: list[Game] | None = field(default=None, metadata={"read_only": True})


@dataclass
class MatchResult(Entity):
    """Result of a match or of one of its games.

    A result belongs to its match (or game) and has no identity of its own;
    writing it always replaces the existing one.
    """

    identity_field = None

    status: MatchStatus | None = None
    opponents: list[Opponent] = field(default_factory=list)

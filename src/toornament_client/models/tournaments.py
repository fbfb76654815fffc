"""Tournament models."""

import enum
from dataclasses import dataclass, field

from toornament_client.models.base import Entity
from toornament_client.models.matches import MatchFormat, MatchType
from toornament_client.models.participants import ParticipantType


class TournamentStatus(str, enum.Enum):
    SETUP = "setup"  # not started yet
    RUNNING = "running"  # at least one match result
    PENDING = "pending"
    COMPLETED = "completed"  # all matches have a result


@dataclass
class Stream(Entity):
    id: str | None = None
    name: str | None = None
    url: str | None = None
    language: str | None = None


@dataclass
class Tournament(Entity):
    """A tournament.

    Dates are ISO 8601 strings as sent by the service (``"2015-09-06"``).
    ``streams`` is only present when the tournaments were requested with
    ``with_streams``.
    """

    id: str | None = None
    discipline: str | None = None
    name: str | None = None  # at most 30 characters
    full_name: str | None = None
    status: TournamentStatus | None = None
    date_start: str | None = None
    date_end: str | None = None
    time_zone: str | None = field(default=None, metadata={"wire": "timezone"})
    online: bool | None = None
    public: bool | None = None
    location: str | None = None
    country: str | None = None
    size: int | None = None
    participant_type: ParticipantType | None = None
    match_type: MatchType | None = None
    organization: str | None = None
    website: str | None = None
    description: str | None = None
    rules: str | None = None
    prize: str | None = None
    team_size_min: int | None = None
    team_size_max: int | None = None
    streams: list[Stream] | None = field(default=None, metadata={"read_only": True})
    check_in: bool | None = None
    participant_nationality: bool | None = None
    match_format: MatchFormat | None = None

"""Typed models of the Toornament resources."""

from toornament_client.models.base import Entity, MatchResultSimple, TeamSize
from toornament_client.models.disciplines import Discipline
from toornament_client.models.matches import (
    Game,
    Match,
    MatchFormat,
    MatchResult,
    MatchStatus,
    MatchType,
    Opponent,
)
from toornament_client.models.participants import CustomField, CustomFieldType, Participant, ParticipantType
from toornament_client.models.permissions import Permission, PermissionAttribute
from toornament_client.models.stages import Stage, StageType
from toornament_client.models.tournaments import Stream, Tournament, TournamentStatus
from toornament_client.models.videos import Video, VideoCategory

# Model decoded for each path segment name
RESOURCE_SHAPES: dict[str, type] = {
    "disciplines": Discipline,
    "tournaments": Tournament,
    "matches": Match,
    "games": Game,
    "result": MatchResult,
    "participants": Participant,
    "permissions": Permission,
    "stages": Stage,
    "streams": Stream,
    "videos": Video,
}

__all__ = [
    "CustomField",
    "CustomFieldType",
    "Discipline",
    "Entity",
    "Game",
    "Match",
    "MatchFormat",
    "MatchResult",
    "MatchResultSimple",
    "MatchStatus",
    "MatchType",
    "Opponent",
    "Participant",
    "ParticipantType",
    "Permission",
    "PermissionAttribute",
    "RESOURCE_SHAPES",
    "Stage",
    "StageType",
    "Stream",
    "TeamSize",
    "Tournament",
    "TournamentStatus",
    "Video",
    "VideoCategory",
]

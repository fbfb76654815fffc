"""Participant models."""

import enum
from dataclasses import dataclass
from typing import Any

from toornament_client.models.base import Entity


class ParticipantType(str, enum.Enum):
    TEAM = "team"
    SINGLE = "single"


class CustomFieldType(str, enum.Enum):
    STEAM_PLAYER_ID = "steam_player_id"
    BATTLE_NET_ID = "battle_net_id"
    PSN_ID = "psn_id"
    XBOX_LIVE_GAMERTAG = "xbox_live_gamertag"
    LOL_SUMMONER = "lol_summoner"
    TEXT = "text"
    EMAIL = "email"
    URL = "url"
    COUNTRY = "country"
    BIRTH_DATE = "birth_date"
    CHECKBOX = "checkbox"


@dataclass
class CustomField:
    type: CustomFieldType | None = None
    label: str | None = None
    value: Any = None


@dataclass
class Participant(Entity):
    """A player or team registered in a tournament.

    ``lineup`` lists the players of a team and is only returned when the
    request asked for it (``with_lineup``); the same goes for
    ``custom_fields``.
    """

    id: str | None = None
    name: str | None = None  # at most 40 characters
    email: str | None = None
    country: str | None = None  # ISO 3166-1 alpha-2
    check_in: bool | None = None
    lineup: "list[Participant] | None" = None
    custom_fields: list[CustomField] | None = None

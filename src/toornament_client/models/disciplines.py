"""Discipline (game title) models."""

from dataclasses import dataclass, field
from typing import Any

from toornament_client.models.base import Entity, TeamSize


@dataclass
class Discipline(Entity):
    """A discipline supported by the service, e.g. ``"wwe2k17"``."""

    id: str | None = None
    name: str | None = None
    short_name: str | None = field(default=None, metadata={"wire": "shortname"})
    full_name: str | None = field(default=None, metadata={"wire": "fullname"})
    copyrights: str | None = None
    team_size: TeamSize | None = None
    additional_fields: dict[str, Any] | None = None

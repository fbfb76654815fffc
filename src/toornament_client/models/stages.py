"""Tournament stage models."""

import enum
from dataclasses import dataclass, field

from toornament_client.models.base import Entity


class StageType(str, enum.Enum):
    GROUP = "group"
    LEAGUE = "league"
    SWISS = "swiss"
    SINGLE_ELIMINATION = "single_elimination"
    DOUBLE_ELIMINATION = "double_elimination"
    BRACKET_GROUP = "bracket_group"


@dataclass
class Stage(Entity):
    # Stages are numbered within their tournament
    identity_field = "number"

    number: int | None = None
    name: str | None = None
    stage_type: StageType | None = field(default=None, metadata={"wire": "type"})
    size: int | None = None

"""Tournament video models."""

import enum
from dataclasses import dataclass

from toornament_client.models.base import Entity


class VideoCategory(str, enum.Enum):
    REPLAY = "replay"
    HIGHLIGHT = "highlight"
    BONUS = "bonus"


@dataclass
class Video(Entity):
    identity_field = None

    name: str | None = None
    url: str | None = None
    language: str | None = None
    category: VideoCategory | None = None
    match_id: str | None = None

"""Tournament permission models."""

import enum
from dataclasses import dataclass, field

from toornament_client.models.base import Entity


class PermissionAttribute(str, enum.Enum):
    EDIT = "edit"
    DELETE = "delete"
    AUTHORIZE = "authorize"
    REPORT = "report"
    FILL = "fill"
    PLACE = "place"
    REGISTER = "register"


@dataclass
class Permission(Entity):
    """Access granted to a user (by e-mail) on one tournament."""

    id: str | None = None
    email: str | None = None
    attributes: list[PermissionAttribute] = field(default_factory=list)

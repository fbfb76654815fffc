"""Verbs and the ephemeral request value handed to the dispatcher."""

import enum
from dataclasses import dataclass, field
from typing import Any

from toornament_client.dispatch.path import ResourcePath


class Verb(enum.Enum):
    READ = "read"
    COLLECT = "collect"
    CREATE = "create"
    EDIT = "edit"
    DELETE = "delete"

    @property
    def is_write(self) -> bool:
        return self in (Verb.CREATE, Verb.EDIT)


@dataclass(frozen=True)
class DispatchRequest:
    """A resolved path, the verb to apply to it and the optional payload.

    ``query`` holds rendered parameters sent with the request whatever the
    path scope; path filters stay restricted to collection listings.
    """

    path: ResourcePath
    verb: Verb
    payload: Any = None
    query: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class RequestTarget:
    """Concrete HTTP method, URL path and query parameters of a request."""

    method: str
    url: str
    params: dict[str, str] = field(default_factory=dict)

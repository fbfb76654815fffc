"""Immutable description of a nested resource path.

A ``ResourcePath`` is an ordered tuple of segments plus the query filters
attached to its last segment. Every builder call returns a new value, so a
partially built path can be shared and reused as a template:

    ```python
    matches = ResourcePath.of("tournaments").identified_by("1").into("matches")
    second = matches.identified_by("2")  # /tournaments/1/matches/2
    third = matches.identified_by("3")  # /tournaments/1/matches/3
    ```

Which calls are legal depends on the scope of the last segment; illegal
calls raise ``InvalidNavigationError``.
"""

import datetime
import enum
from collections.abc import Mapping
from dataclasses import dataclass, replace
from typing import Any
from urllib.parse import quote, urlencode

from toornament_client.errors.exceptions import InvalidNavigationError

# Sub-resources with exactly one instance per parent, addressed without an id
SINGULAR_RESOURCES = frozenset({"result", "me"})


class Scope(enum.Enum):
    ROOT = "root"
    COLLECTION = "collection"  # e.g. /tournaments
    ENTITY = "entity"  # e.g. /tournaments/1
    SINGLETON = "singleton"  # e.g. /tournaments/1/matches/2/result


@dataclass(frozen=True)
class Segment:
    name: str
    identifier: str | None = None
    singular: bool = False

    @property
    def scope(self) -> Scope:
        if self.singular:
            return Scope.SINGLETON
        if self.identifier is None:
            return Scope.COLLECTION
        return Scope.ENTITY

    def render(self) -> str:
        if self.identifier is None:
            return self.name
        return f"{self.name}/{quote(self.identifier, safe='')}"


def render_value(value: Any) -> str | None:
    """Render one filter value the way the service expects it."""
    if value is None:
        return None
    if isinstance(value, bool):
        return "1" if value else "0"
    if isinstance(value, enum.Enum):
        return render_value(value.value)
    if isinstance(value, (datetime.date, datetime.datetime)):
        return value.isoformat()
    if isinstance(value, (list, tuple, set, frozenset)):
        return ",".join(r for r in (render_value(v) for v in value) if r is not None)
    return str(value)


def render_params(filters: Any) -> dict[str, str]:
    """Turn a mapping or filter object into wire query parameters.

    ``None`` values are dropped.
    """
    if filters is None:
        return {}
    if hasattr(filters, "to_params"):
        filters = filters.to_params()
    if not isinstance(filters, Mapping):
        raise TypeError(f"Filters must be a mapping or expose to_params(), got {type(filters).__name__}")
    rendered = {}
    for key, value in filters.items():
        text = render_value(value)
        if text is not None:
            rendered[str(key)] = text
    return rendered


@dataclass(frozen=True)
class ResourcePath:
    segments: tuple[Segment, ...] = ()
    filters: tuple[tuple[str, str], ...] = ()

    @classmethod
    def of(cls, *names: str) -> "ResourcePath":
        path = cls()
        for name in names:
            path = path.into(name)
        return path

    @property
    def scope(self) -> Scope:
        if not self.segments:
            return Scope.ROOT
        return self.segments[-1].scope

    @property
    def resource(self) -> str | None:
        """Name of the last segment, e.g. ``"matches"``."""
        if not self.segments:
            return None
        return self.segments[-1].name

    @property
    def identifier(self) -> str | None:
        if not self.segments:
            return None
        return self.segments[-1].identifier

    def into(self, name: str, *, singular: bool | None = None) -> "ResourcePath":
        """Append a collection (or singular) segment."""
        if not name or "/" in name:
            raise InvalidNavigationError(f"Invalid segment name: {name!r}")
        if self.filters:
            raise InvalidNavigationError(f"Cannot navigate into '{name}' after filtering {self}")
        if self.scope is Scope.COLLECTION:
            raise InvalidNavigationError(
                f"Cannot navigate into '{name}' from the collection {self}; identify an entity first"
            )
        if singular is None:
            singular = name in SINGULAR_RESOURCES
        return replace(self, segments=self.segments + (Segment(name, singular=singular),))

    def identified_by(self, identifier: Any) -> "ResourcePath":
        """Scope the last collection segment to one entity."""
        if self.scope is not Scope.COLLECTION:
            raise InvalidNavigationError(f"Only a collection can be identified, {self} is {self.scope.value}")
        if self.filters:
            raise InvalidNavigationError(f"Cannot identify an entity in the filtered collection {self}")
        if identifier is None or str(identifier) == "":
            raise InvalidNavigationError("Identifier must not be empty")
        last = replace(self.segments[-1], identifier=str(identifier))
        return replace(self, segments=self.segments[:-1] + (last,))

    def filtered_by(self, filters: Any = None, **params: Any) -> "ResourcePath":
        """Attach query parameters to the current collection segment.

        Later values override earlier ones with the same key.
        """
        if self.scope is not Scope.COLLECTION:
            raise InvalidNavigationError(f"Only a collection can be filtered, {self} is {self.scope.value}")
        merged = dict(self.filters)
        merged.update(render_params(filters))
        merged.update(render_params(params))
        return replace(self, filters=tuple(merged.items()))

    def collection(self) -> "ResourcePath":
        """The unscoped, unfiltered collection this path points into."""
        if self.scope is Scope.COLLECTION:
            return ResourcePath(self.segments)
        if self.scope is Scope.ENTITY:
            return ResourcePath(self.segments[:-1] + (replace(self.segments[-1], identifier=None),))
        raise InvalidNavigationError(f"{self} does not point into a collection")

    def to_url(self) -> str:
        return "/" + "/".join(segment.render() for segment in self.segments)

    def query_params(self) -> dict[str, str]:
        return dict(self.filters)

    def __str__(self) -> str:
        url = self.to_url()
        if self.filters:
            url += "?" + urlencode(self.filters)
        return url

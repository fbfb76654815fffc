"""Fluent, lazy navigation over the nested Toornament resources.

Nothing is sent until a terminal call (``collect``, ``fetch``, ``create``,
``edit``, ``delete``, ``replace_all``). Builder calls return new navigators,
so intermediate values can be kept and reused.

Example:
    ```python
    matches = client.tournaments_nav().identified_by("1").into("matches")

    # GET /tournaments/1/matches/2/games?number=3
    games = matches.identified_by("2").into("games").filtered_by({"number": 3}).collect()

    # GET /tournaments/1/matches/2/result
    result = matches.identified_by("2").into("result").fetch()

    # Fetch, modify and write back match 3
    match = matches.identified_by("3").edit(lambda m: replace(m, number=3))

    # POST /tournaments/1/participants
    participant = (
        client.tournaments_nav()
        .identified_by("1")
        .into("participants")
        .create(lambda: Participant(name="Evil Geniuses"))
    )
    ```
"""

import dataclasses
from collections.abc import Callable, Iterable
from typing import Any

from toornament_client.dispatch.dispatcher import Dispatcher
from toornament_client.dispatch.path import ResourcePath, Scope, render_params
from toornament_client.dispatch.request import DispatchRequest, Verb
from toornament_client.errors.exceptions import InvalidNavigationError
from toornament_client.models import RESOURCE_SHAPES


class ResourceNavigator:
    """A ``ResourcePath`` bound to the dispatcher that will execute it.

    Args:
        dispatcher: Dispatcher executing the terminal calls.
        path: Path accumulated so far (the root by default).
        shapes: Model decoded for each segment name; segments without an
            entry decode to plain JSON.
    """

    def __init__(
        self,
        dispatcher: Dispatcher,
        path: ResourcePath | None = None,
        shapes: dict[str, type] | None = None,
    ) -> None:
        self._dispatcher = dispatcher
        self.path = path if path is not None else ResourcePath()
        self._shapes = shapes if shapes is not None else RESOURCE_SHAPES

    def __repr__(self) -> str:
        return f"ResourceNavigator({self.path})"

    def _derive(self, path: ResourcePath) -> "ResourceNavigator":
        return ResourceNavigator(self._dispatcher, path, self._shapes)

    def _shape(self) -> type | None:
        return self._shapes.get(self.path.resource)

    # Builder operations

    def into(self, name: str) -> "ResourceNavigator":
        return self._derive(self.path.into(name))

    def identified_by(self, identifier: Any) -> "ResourceNavigator":
        return self._derive(self.path.identified_by(identifier))

    def filtered_by(self, filters: Any = None, **params: Any) -> "ResourceNavigator":
        return self._derive(self.path.filtered_by(filters, **params))

    # Terminal operations

    def collect(self, shape: Any = None) -> list:
        """List the collection (``GET``), applying the attached filters."""
        item_shape = shape or self._shape()
        list_shape = list[item_shape] if item_shape is not None else None
        return self._dispatcher.dispatch(DispatchRequest(self.path, Verb.COLLECT), list_shape)

    def fetch(self, shape: Any = None, query: Any = None) -> Any:
        """Read the identified entity or singular resource (``GET``).

        ``query`` holds extra request parameters such as inclusion flags.
        """
        request = DispatchRequest(self.path, Verb.READ, query=render_params(query))
        return self._dispatcher.dispatch(request, shape or self._shape())

    def create(self, factory: Callable[[], Any]) -> Any:
        """Write the entity built by ``factory`` into this collection.

        The entity is created unless it already carries an identity, in
        which case it is edited; returns the entity as stored by the service.
        """
        if self.path.scope is not Scope.COLLECTION:
            raise InvalidNavigationError(f"create() needs a collection path, {self.path} is {self.path.scope.value}")
        return self._save(factory())

    def edit(self, mutator: Any, query: Any = None) -> Any:
        """Write a new state of the identified entity or singular resource.

        ``mutator`` is either the full replacement value, written as is, or a
        callable receiving the current state (fetched first) and returning
        the new one. A callable returning None is assumed to have modified
        its argument in place. ``query`` is sent with the write only.
        """
        if self.path.scope not in (Scope.ENTITY, Scope.SINGLETON):
            raise InvalidNavigationError(
                f"edit() needs an identified or singular path, {self.path} is {self.path.scope.value}"
            )
        if callable(mutator):
            current = self.fetch()
            updated = mutator(current)
            entity = current if updated is None else updated
        else:
            entity = mutator
        return self._save(entity, render_params(query))

    def delete(self) -> None:
        """Delete the identified entity."""
        self._dispatcher.dispatch(DispatchRequest(self.path, Verb.DELETE))

    def replace_all(self, entities: Iterable[Any]) -> list:
        """Replace the whole collection with ``entities`` (``PUT``)."""
        if self.path.scope is not Scope.COLLECTION:
            raise InvalidNavigationError(
                f"replace_all() needs a collection path, {self.path} is {self.path.scope.value}"
            )
        item_shape = self._shape()
        list_shape = list[item_shape] if item_shape is not None else None
        request = DispatchRequest(self.path.collection(), Verb.EDIT, list(entities))
        return self._dispatcher.dispatch(request, list_shape)

    def _save(self, entity: Any, query: dict[str, str] | None = None) -> Any:
        request = self._dispatcher.write_request(self.path, entity, query)
        shape = self._shape()
        if shape is None and dataclasses.is_dataclass(entity):
            shape = type(entity)
        return self._dispatcher.dispatch(request, shape)

"""Conversion between wire JSON and resource dataclasses.

Models are plain dataclasses. A field whose JSON name differs from the Python
attribute declares it with ``field(metadata={"wire": "type"})``; fields the
server computes and refuses on write declare ``{"read_only": True}``.
``None`` values are left out of encoded bodies.

The codec also owns the identity rule: an entity is persisted when its
identity field (``identity_field`` on the model class, ``"id"`` unless
overridden) holds a non-empty value.
"""

import dataclasses
import enum
import functools
import types
import typing
from collections.abc import Mapping
from typing import Any

from toornament_client.errors.exceptions import CodecError

DEFAULT_IDENTITY_FIELD = "id"


def wire_name(f: dataclasses.Field) -> str:
    return f.metadata.get("wire", f.name)


@functools.lru_cache(maxsize=None)
def _type_hints(cls: type) -> dict[str, Any]:
    return typing.get_type_hints(cls)


def _describe(shape: Any) -> str:
    return getattr(shape, "__name__", None) or repr(shape)


class EntityCodec:
    """Encode models to JSON-compatible values and decode them back."""

    # Identity

    def identity_field(self, entity: Any) -> str | None:
        return getattr(type(entity), "identity_field", DEFAULT_IDENTITY_FIELD)

    def identity(self, entity: Any) -> Any:
        """Return the server-assigned identity of ``entity``, or None."""
        name = self.identity_field(entity)
        if name is None:
            return None
        if isinstance(entity, Mapping):
            value = entity.get(name)
        else:
            value = getattr(entity, name, None)
        if value is None or value == "":
            return None
        return value

    def is_persisted(self, entity: Any) -> bool:
        return self.identity(entity) is not None

    # Encoding

    def encode(self, value: Any) -> Any:
        """Convert a model (or list of models) to a JSON-compatible value.

        Raises:
            CodecError: If the value holds something JSON cannot carry.
        """
        if dataclasses.is_dataclass(value) and not isinstance(value, type):
            body = {}
            for f in dataclasses.fields(value):
                if f.metadata.get("read_only"):
                    continue
                item = getattr(value, f.name)
                if item is None:
                    continue
                body[wire_name(f)] = self.encode(item)
            return body
        if isinstance(value, enum.Enum):
            return value.value
        if isinstance(value, (list, tuple, set, frozenset)):
            return [self.encode(item) for item in value]
        if isinstance(value, dict):
            return {str(k): self.encode(v) for k, v in value.items()}
        if value is None or isinstance(value, (str, int, float, bool)):
            return value
        raise CodecError(f"Cannot encode value of type {type(value).__name__}", shape=type(value))

    # Decoding

    def decode(self, data: Any, shape: Any = None) -> Any:
        """Decode JSON data into ``shape``.

        ``shape`` may be a model class, an enum, a builtin scalar type, or a
        ``list[...]`` / ``dict[str, ...]`` / ``X | None`` of those. ``None``
        (or ``Any``) returns the data untouched.

        Raises:
            CodecError: If the data does not fit the shape.
        """
        if shape is None or shape is Any:
            return data

        origin = typing.get_origin(shape)
        if origin in (typing.Union, types.UnionType):
            return self._decode_union(data, shape)
        if origin in (list, tuple, set, frozenset):
            if not isinstance(data, list):
                raise CodecError(f"Expected a JSON array for {shape}, got {type(data).__name__}", shape=shape)
            args = typing.get_args(shape)
            item_shape = args[0] if args else None
            return [self.decode(item, item_shape) for item in data]
        if origin is dict:
            if not isinstance(data, dict):
                raise CodecError(f"Expected a JSON object for {shape}, got {type(data).__name__}", shape=shape)
            args = typing.get_args(shape)
            value_shape = args[1] if len(args) == 2 else None
            return {k: self.decode(v, value_shape) for k, v in data.items()}

        if dataclasses.is_dataclass(shape):
            return self._decode_dataclass(data, shape)
        if isinstance(shape, type) and issubclass(shape, enum.Enum):
            try:
                return shape(data)
            except ValueError:
                raise CodecError(f"{data!r} is not a valid {shape.__name__}", shape=shape) from None
        if shape is float:
            if isinstance(data, (int, float)) and not isinstance(data, bool):
                return float(data)
            raise CodecError(f"Expected a number, got {data!r}", shape=shape)
        if shape in (str, int, bool):
            if type(data) is shape:
                return data
            raise CodecError(f"Expected {shape.__name__}, got {data!r}", shape=shape)
        return data

    def _decode_union(self, data: Any, shape: Any) -> Any:
        args = typing.get_args(shape)
        if data is None:
            if type(None) in args:
                return None
            raise CodecError(f"Unexpected null for {shape}", shape=shape)
        last_error = None
        for arg in args:
            if arg is type(None):
                continue
            try:
                return self.decode(data, arg)
            except CodecError as e:
                last_error = e
        raise CodecError(f"{data!r} does not match {shape}: {last_error}", shape=shape)

    def _decode_dataclass(self, data: Any, shape: type) -> Any:
        if not isinstance(data, dict):
            raise CodecError(
                f"Expected a JSON object for {_describe(shape)}, got {type(data).__name__}", shape=shape
            )
        hints = _type_hints(shape)
        kwargs = {}
        for f in dataclasses.fields(shape):
            if not f.init:
                continue
            key = wire_name(f)
            if key not in data:
                continue
            try:
                kwargs[f.name] = self.decode(data[key], hints.get(f.name))
            except CodecError as e:
                raise CodecError(f"{_describe(shape)}.{f.name}: {e}", shape=shape) from e
        try:
            return shape(**kwargs)
        except TypeError as e:
            raise CodecError(f"Cannot build {_describe(shape)}: {e}", shape=shape) from e

# Copyright 2026 busstep Contributors
# SPDX-License-Identifier: Apache-2.0

"""Derive D-Bus wire signatures from Python type annotations.

Structured types (dataclasses, pydantic models and named tuples) marshal as
D-Bus structs. Their fields are visited in declaration order, so a dataclass
with ``name: str`` and ``path: ObjectPath`` has the signature ``(so)``.
"""

from __future__ import annotations

import collections.abc
import dataclasses
import enum
import typing
from typing import Annotated, Any

from pydantic import BaseModel, GetCoreSchemaHandler
from pydantic_core import CoreSchema, core_schema

# ###############
# Public Interface
# ###############


class SignatureReflectionError(TypeError):
    """Raised when a Python type has no D-Bus signature."""


@dataclasses.dataclass(frozen=True)
class WireType:
    """An ``Annotated`` marker that pins the wire signature of a type.

    Example::

        Handle = Annotated[int, WireType("h")]
    """

    signature: str


class ObjectPath(str):
    """A D-Bus object path (``o``)."""

    @classmethod
    def __get_pydantic_core_schema__(cls, source: Any, handler: GetCoreSchemaHandler) -> CoreSchema:
        return core_schema.no_info_after_validator_function(cls, core_schema.str_schema())


class SignatureStr(str):
    """A D-Bus type signature value (``g``)."""

    @classmethod
    def __get_pydantic_core_schema__(cls, source: Any, handler: GetCoreSchemaHandler) -> CoreSchema:
        return core_schema.no_info_after_validator_function(cls, core_schema.str_schema())


class Variant:
    """Placeholder for a D-Bus variant (``v``); the contained type is chosen at runtime.

    As a pydantic field type it accepts any value unchanged.
    """

    @classmethod
    def __get_pydantic_core_schema__(cls, source: Any, handler: GetCoreSchemaHandler) -> CoreSchema:
        return core_schema.any_schema()


Byte = Annotated[int, WireType("y")]
Int16 = Annotated[int, WireType("n")]
UInt16 = Annotated[int, WireType("q")]
Int32 = Annotated[int, WireType("i")]
UInt32 = Annotated[int, WireType("u")]
Int64 = Annotated[int, WireType("x")]
UInt64 = Annotated[int, WireType("t")]
UnixFd = Annotated[int, WireType("h")]


def signature_of(tp: Any) -> str:
    """Return the D-Bus signature of the Python type *tp*.

    Args:
        tp: A type or type annotation.

    Returns:
        The wire signature, e.g. ``"a{sv}"`` for ``dict[str, Variant]``.

    Raises:
        SignatureReflectionError: If *tp* (or a type nested in it) cannot be
            expressed as a D-Bus signature, or if it refers to itself.
    """
    return _Reflector().signature(tp)


# ################
# Implementation
# ################

# bool must precede int since it is a subclass.
_SCALARS: tuple[tuple[type, str], ...] = (
    (ObjectPath, "o"),
    (SignatureStr, "g"),
    (bool, "b"),
    (int, "i"),
    (float, "d"),
    (str, "s"),
    (bytes, "ay"),
    (bytearray, "ay"),
)

_ARRAY_ORIGINS: frozenset[Any] = frozenset(
    {
        list,
        set,
        frozenset,
        collections.abc.Sequence,
        collections.abc.MutableSequence,
        collections.abc.Set,
        collections.abc.MutableSet,
        collections.abc.Iterable,
    }
)

_DICT_ORIGINS: frozenset[Any] = frozenset(
    {
        dict,
        collections.abc.Mapping,
        collections.abc.MutableMapping,
    }
)


class _Reflector:
    """Walks a type annotation, tracking structs in progress to reject recursion."""

    def __init__(self) -> None:
        self._in_progress: set[type] = set()

    def signature(self, tp: Any) -> str:
        if tp is Any or tp is Variant:
            return "v"

        origin = typing.get_origin(tp)
        if origin is Annotated:
            return self._annotated(tp)
        if origin is not None:
            return self._generic(tp, origin)

        explicit = getattr(tp, "__dbus_signature__", None)
        if isinstance(explicit, str):
            return explicit

        if isinstance(tp, type):
            return self._class(tp)

        raise SignatureReflectionError(f"Cannot derive a D-Bus signature from {tp!r}")

    def _annotated(self, tp: Any) -> str:
        base, *metadata = typing.get_args(tp)
        for marker in metadata:
            if isinstance(marker, WireType):
                return marker.signature
        return self.signature(base)

    def _generic(self, tp: Any, origin: Any) -> str:
        args = typing.get_args(tp)
        if origin in _ARRAY_ORIGINS:
            if len(args) != 1:
                raise SignatureReflectionError(f"Array type {tp!r} needs exactly one element type")
            return "a" + self.signature(args[0])
        if origin in _DICT_ORIGINS:
            if len(args) != 2:
                raise SignatureReflectionError(f"Dictionary type {tp!r} needs a key and a value type")
            return "a{" + self.signature(args[0]) + self.signature(args[1]) + "}"
        if origin is tuple:
            if len(args) == 2 and args[1] is Ellipsis:
                return "a" + self.signature(args[0])
            if not args:
                raise SignatureReflectionError("An empty tuple has no D-Bus signature")
            return "(" + "".join(self.signature(arg) for arg in args) + ")"
        raise SignatureReflectionError(f"Cannot derive a D-Bus signature from {tp!r}")

    def _class(self, cls: type) -> str:
        if issubclass(cls, enum.Enum):
            return self._enum(cls)
        for scalar, code in _SCALARS:
            if issubclass(cls, scalar):
                return code
        if dataclasses.is_dataclass(cls) or _is_named_tuple(cls) or issubclass(cls, BaseModel):
            return self._struct(cls)
        raise SignatureReflectionError(f"Cannot derive a D-Bus signature from {cls.__qualname__}")

    def _enum(self, cls: type[enum.Enum]) -> str:
        if issubclass(cls, int):
            return "u"
        if issubclass(cls, str):
            return "s"
        raise SignatureReflectionError(
            f"Enum {cls.__qualname__} must derive from int or str to have a D-Bus signature"
        )

    def _struct(self, cls: type) -> str:
        if cls in self._in_progress:
            raise SignatureReflectionError(f"Recursive type {cls.__qualname__} has no D-Bus signature")
        fields = _struct_field_types(cls)
        if not fields:
            raise SignatureReflectionError(f"Struct type {cls.__qualname__} has no fields")
        self._in_progress.add(cls)
        try:
            return "(" + "".join(self.signature(field_type) for field_type in fields) + ")"
        finally:
            self._in_progress.discard(cls)


def _is_named_tuple(cls: type) -> bool:
    return issubclass(cls, tuple) and hasattr(cls, "_fields")


def _struct_field_types(cls: type) -> list[Any]:
    """Return the annotated field types of a struct-like class in declaration order."""
    if issubclass(cls, BaseModel):
        # pydantic moves top-level Annotated metadata into the field info.
        return [
            Annotated[(info.annotation, *info.metadata)] if info.metadata else info.annotation
            for info in cls.model_fields.values()
        ]

    try:
        hints = typing.get_type_hints(cls, include_extras=True)
    except NameError as exc:
        raise SignatureReflectionError(f"Cannot resolve annotations of {cls.__qualname__}: {exc}") from exc

    if dataclasses.is_dataclass(cls):
        names = [f.name for f in dataclasses.fields(cls)]
    else:
        names = list(cls._fields)  # type: ignore[attr-defined]

    missing = [name for name in names if name not in hints]
    if missing:
        raise SignatureReflectionError(f"Fields of {cls.__qualname__} lack type annotations: {', '.join(missing)}")
    return [hints[name] for name in names]

# Copyright 2026 busstep Contributors
# SPDX-License-Identifier: Apache-2.0

"""Interface entities parsed from D-Bus introspection documents."""

from __future__ import annotations

from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict
from pydantic import Field as _Field

# ###############
# Public Interface
# ###############


class MemberKind(Enum):
    """The kinds of interface member that carry a signature."""

    METHOD = "method"
    SIGNAL = "signal"
    PROPERTY = "property"


class Arg(BaseModel):
    """A method or signal argument.

    Method arguments without an explicit direction are inputs. Signal
    arguments are always outputs; their direction is left as declared.
    """

    model_config = ConfigDict(frozen=True)

    name: str | None = None
    signature: str
    direction: Literal["in", "out"] | None = None
    annotations: dict[str, str] = _Field(default_factory=dict)


class Method(BaseModel):
    """A method with its ordered input and output arguments."""

    model_config = ConfigDict(frozen=True)

    name: str
    args: tuple[Arg, ...] = ()
    annotations: dict[str, str] = _Field(default_factory=dict)

    @property
    def in_args(self) -> tuple[Arg, ...]:
        """Input arguments in declared order."""
        return tuple(arg for arg in self.args if arg.direction != "out")

    @property
    def out_args(self) -> tuple[Arg, ...]:
        """Output arguments in declared order."""
        return tuple(arg for arg in self.args if arg.direction == "out")


class Signal(BaseModel):
    """A signal with its ordered body arguments."""

    model_config = ConfigDict(frozen=True)

    name: str
    args: tuple[Arg, ...] = ()
    annotations: dict[str, str] = _Field(default_factory=dict)


class Property(BaseModel):
    """A property with a single signature."""

    model_config = ConfigDict(frozen=True)

    name: str
    signature: str
    access: Literal["read", "write", "readwrite"] = "readwrite"
    annotations: dict[str, str] = _Field(default_factory=dict)


Member = Method | Signal | Property


class Interface(BaseModel):
    """A named interface with its methods, signals and properties in declaration order."""

    model_config = ConfigDict(frozen=True)

    name: str
    methods: tuple[Method, ...] = ()
    signals: tuple[Signal, ...] = ()
    properties: tuple[Property, ...] = ()
    annotations: dict[str, str] = _Field(default_factory=dict)

    def members(self, kind: MemberKind) -> tuple[Member, ...]:
        """Return the members of the given kind."""
        if kind is MemberKind.METHOD:
            return self.methods
        if kind is MemberKind.SIGNAL:
            return self.signals
        return self.properties


class InterfaceDocument(BaseModel):
    """One parsed introspection document.

    Attributes:
        source: Identity of the document, usually the path it was read from.
        name: The ``name`` attribute of the root ``<node>``, if any.
        interfaces: The interfaces declared directly under the root node.
    """

    model_config = ConfigDict(frozen=True)

    source: str
    name: str | None = None
    interfaces: tuple[Interface, ...] = ()

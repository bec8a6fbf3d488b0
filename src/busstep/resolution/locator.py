# Copyright 2026 busstep Contributors
# SPDX-License-Identifier: Apache-2.0

"""Lookup of interface members across a set of introspection documents.

A member name is not unique across interfaces: ``org.example.A`` and
``org.example.B`` may both declare a signal ``Ping``. Without an interface
filter such a lookup is ambiguous, and the locator reports every matching
interface instead of choosing one.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from enum import Enum

from busstep.model.entities import (
    Interface,
    InterfaceDocument,
    Member,
    MemberKind,
    Method,
    Property,
    Signal,
)

logger = logging.getLogger(__name__)

# ###############
# Public Interface
# ###############


@dataclass(frozen=True)
class MemberQuery:
    """What to look for: a member name of a given kind, optionally on one interface."""

    name: str
    kind: MemberKind
    interface: str | None = None

    def describe(self) -> str:
        """Return a human-readable description used in error messages."""
        text = f"{self.kind.value} '{self.name}'"
        if self.interface is not None:
            text += f" on interface '{self.interface}'"
        return text


@dataclass(frozen=True)
class Resolution:
    """A successfully located member together with where it was found."""

    document: InterfaceDocument
    interface: Interface
    member: Member

    def method_args_signature(self) -> str:
        """Concatenated signatures of the method's input arguments."""
        return "".join(arg.signature for arg in self._method().in_args)

    def method_return_signature(self) -> str:
        """Signature of the method's single output argument.

        Raises:
            UnsupportedMemberError: If the method has no output argument or more than one.
        """
        method = self._method()
        out_args = method.out_args
        if len(out_args) != 1:
            raise UnsupportedMemberError(
                f"Method '{method.name}' on interface '{self.interface.name}' declares "
                f"{len(out_args)} output arguments; exactly one is supported for a return signature"
            )
        return out_args[0].signature

    def signal_body_signature(self) -> str:
        """Concatenated signatures of the signal's arguments."""
        if not isinstance(self.member, Signal):
            raise UnsupportedMemberError(f"'{self.member.name}' is not a signal")
        return "".join(arg.signature for arg in self.member.args)

    def property_signature(self) -> str:
        """The property's declared signature."""
        if not isinstance(self.member, Property):
            raise UnsupportedMemberError(f"'{self.member.name}' is not a property")
        return self.member.signature

    def _method(self) -> Method:
        if not isinstance(self.member, Method):
            raise UnsupportedMemberError(f"'{self.member.name}' is not a method")
        return self.member


class ResolutionError(LookupError):
    """Base class for member lookup failures."""


class MemberNotFoundError(ResolutionError):
    """Raised when no document declares the requested member."""

    def __init__(self, query: MemberQuery) -> None:
        super().__init__(f"No interface declares {query.describe()}")
        self.query = query


class AmbiguousMemberError(ResolutionError):
    """Raised when several interfaces declare the requested member and no interface was given.

    Attributes:
        query: The lookup that failed.
        candidates: Distinct names of the matching interfaces, in discovery order.
        sources: The documents each match was found in, in discovery order.
    """

    def __init__(self, query: MemberQuery, candidates: list[str], sources: list[str]) -> None:
        super().__init__(
            f"Multiple interfaces offer the same {query.kind.value} member '{query.name}': "
            f"{', '.join(candidates)}. Please specify the interface name."
        )
        self.query = query
        self.candidates = candidates
        self.sources = sources


class UnsupportedMemberError(ResolutionError):
    """Raised when a located member has no signature of the requested form."""


class SignatureRole(Enum):
    """Which signature of a member a declared type stands for."""

    METHOD_ARGS = "method-args"
    METHOD_RETURN = "method-return"
    SIGNAL_BODY = "signal"
    PROPERTY = "property"

    @property
    def kind(self) -> MemberKind:
        """The member kind that carries this signature."""
        if self in (SignatureRole.METHOD_ARGS, SignatureRole.METHOD_RETURN):
            return MemberKind.METHOD
        if self is SignatureRole.SIGNAL_BODY:
            return MemberKind.SIGNAL
        return MemberKind.PROPERTY

    def signature(self, resolution: Resolution) -> str:
        """Compose this role's signature from a located member."""
        return _COMPOSERS[self](resolution)


def locate(documents: Sequence[InterfaceDocument], query: MemberQuery) -> Resolution:
    """Find the single member matching *query* across *documents*.

    Documents are searched in the given order and interfaces in declaration
    order. When ``query.interface`` is set, other interfaces are skipped.

    Args:
        documents: The parsed introspection documents.
        query: The member to look for.

    Returns:
        The located member.

    Raises:
        MemberNotFoundError: If nothing matches.
        AmbiguousMemberError: If more than one interface (or the same
            interface in more than one document) matches.
    """
    matches: list[Resolution] = []
    for document in documents:
        for interface in document.interfaces:
            if query.interface is not None and interface.name != query.interface:
                continue
            for member in interface.members(query.kind):
                if member.name == query.name:
                    logger.debug("Found %s in '%s' (%s)", query.describe(), interface.name, document.source)
                    matches.append(Resolution(document=document, interface=interface, member=member))

    if not matches:
        raise MemberNotFoundError(query)
    if len(matches) > 1:
        candidates = list(dict.fromkeys(match.interface.name for match in matches))
        raise AmbiguousMemberError(query, candidates, [match.document.source for match in matches])
    return matches[0]


def resolve_signature(
    documents: Sequence[InterfaceDocument],
    role: SignatureRole,
    member: str,
    interface: str | None = None,
) -> str:
    """Locate *member* and return its signature for *role*."""
    resolution = locate(documents, MemberQuery(name=member, kind=role.kind, interface=interface))
    return role.signature(resolution)


def method_args_signature(
    documents: Sequence[InterfaceDocument], member: str, interface: str | None = None
) -> str:
    """Return the concatenated input-argument signature of method *member*."""
    return resolve_signature(documents, SignatureRole.METHOD_ARGS, member, interface)


def method_return_signature(
    documents: Sequence[InterfaceDocument], member: str, interface: str | None = None
) -> str:
    """Return the output-argument signature of method *member*."""
    return resolve_signature(documents, SignatureRole.METHOD_RETURN, member, interface)


def signal_body_signature(
    documents: Sequence[InterfaceDocument], member: str, interface: str | None = None
) -> str:
    """Return the body signature of signal *member*."""
    return resolve_signature(documents, SignatureRole.SIGNAL_BODY, member, interface)


def property_signature(
    documents: Sequence[InterfaceDocument], member: str, interface: str | None = None
) -> str:
    """Return the signature of property *member*."""
    return resolve_signature(documents, SignatureRole.PROPERTY, member, interface)


# ################
# Implementation
# ################

_COMPOSERS: dict[SignatureRole, Callable[[Resolution], str]] = {
    SignatureRole.METHOD_ARGS: Resolution.method_args_signature,
    SignatureRole.METHOD_RETURN: Resolution.method_return_signature,
    SignatureRole.SIGNAL_BODY: Resolution.signal_body_signature,
    SignatureRole.PROPERTY: Resolution.property_signature,
}

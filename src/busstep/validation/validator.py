# Copyright 2026 busstep Contributors
# SPDX-License-Identifier: Apache-2.0

"""Validation of Python types against the signatures declared in introspection XML.

A :class:`Validator` derives the wire signature of a type, looks up the
signature the XML declares for the corresponding member, and checks that the
two are at most one marshalling step apart::

    validator = Validator(load_config())

    @validator.validate_type()
    @dataclass
    class AddNodeEvent:
        name: str
        path: ObjectPath

The type's own name is the default member name. For signal bodies a trailing
``Event`` is dropped when the full name is not declared, so ``AddNodeEvent``
is checked against the ``AddNode`` signal.
"""

from __future__ import annotations

import logging
import typing
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, TypeVar

from busstep.introspection.loader import load_documents
from busstep.model.entities import InterfaceDocument
from busstep.resolution.locator import (
    AmbiguousMemberError,
    MemberNotFoundError,
    MemberQuery,
    Resolution,
    ResolutionError,
    SignatureRole,
    UnsupportedMemberError,
    locate,
)
from busstep.signature.equivalence import SignatureMismatchError, signatures_are_eq
from busstep.signature.reflect import signature_of
from busstep.workspace.config import BusstepConfig, load_config

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=type)

# ###############
# Public Interface
# ###############


class SignatureValidationError(SignatureMismatchError):
    """Raised when a type's signature does not match the declared member signature."""

    def __init__(self, type_name: str, query: MemberQuery, role: SignatureRole, derived: str, declared: str) -> None:
        super().__init__(
            f"Signature of '{type_name}' does not match {role.value} signature of {query.describe()} "
            f"(derived: {derived}, declared: {declared})",
            derived,
            declared,
        )
        self.type_name = type_name
        self.query = query
        self.role = role


class ShapeNotFoundError(ResolutionError):
    """Raised when the member a type is validated against is not declared anywhere."""

    def __init__(self, type_name: str, query: MemberQuery) -> None:
        super().__init__(f"Cannot validate '{type_name}': no interface declares {query.describe()}")
        self.type_name = type_name
        self.query = query


class ShapeAmbiguousError(ResolutionError):
    """Raised when the member a type is validated against is declared by several interfaces."""

    def __init__(self, type_name: str, query: MemberQuery, candidates: list[str]) -> None:
        super().__init__(
            f"Cannot validate '{type_name}': multiple interfaces offer the same {query.kind.value} "
            f"member '{query.name}': {', '.join(candidates)}. Please specify the interface name."
        )
        self.type_name = type_name
        self.query = query
        self.candidates = candidates


class ShapeUnsupportedError(ResolutionError):
    """Raised when the located member has no signature for the requested role."""

    def __init__(self, type_name: str, query: MemberQuery, role: SignatureRole, reason: str) -> None:
        super().__init__(f"Cannot validate '{type_name}' as {role.value} of {query.describe()}: {reason}")
        self.type_name = type_name
        self.query = query
        self.role = role


@dataclass(frozen=True)
class ValidationReport:
    """Outcome of a successful validation.

    Attributes:
        type_name: Name of the validated type.
        interface: Interface that declares the member.
        member: Name of the member the type was checked against.
        role: Which signature of the member was compared.
        derived: Signature derived from the type.
        declared: Signature declared in the XML.
        source: Document the member was found in.
    """

    type_name: str
    interface: str
    member: str
    role: SignatureRole
    derived: str
    declared: str
    source: str


class Validator:
    """Checks Python types against a fixed set of introspection documents."""

    def __init__(
        self,
        config: BusstepConfig,
        reflector: Callable[[Any], str] = signature_of,
        documents: list[InterfaceDocument] | None = None,
    ) -> None:
        self._config = config
        self._reflector = reflector
        self._documents = documents

    @property
    def config(self) -> BusstepConfig:
        return self._config

    @property
    def documents(self) -> list[InterfaceDocument]:
        """The introspection documents, loaded on first access."""
        if self._documents is None:
            self._documents = load_documents(self._config.xml_path, self._config.file_pattern)
        return self._documents

    def validate(
        self,
        shape: Any,
        *,
        role: SignatureRole = SignatureRole.SIGNAL_BODY,
        member: str | None = None,
        interface: str | None = None,
    ) -> ValidationReport:
        """Validate the type *shape* against its declared member signature.

        Args:
            shape: The type to validate; its ``__name__`` is the default member name.
            role: Which member signature the type stands for.
            member: Explicit member name.
            interface: Interface that declares the member, required when
                several interfaces declare a member of the same name.

        Returns:
            A report describing the successful match.

        Raises:
            SignatureReflectionError: If no signature can be derived from *shape*.
            SignatureValidationError: If the signatures are not equivalent.
            ShapeNotFoundError: If the member is not declared.
            ShapeAmbiguousError: If the member is declared by several interfaces.
            ShapeUnsupportedError: If the member has no signature for *role*.
            ValueError: If *shape* is a type alias such as ``UInt32`` and no
                *member* is given, since an alias has no name of its own.
        """
        if typing.get_origin(shape) is not None:
            if member is None:
                raise ValueError(f"Cannot derive a member name from {shape!r}; pass member= explicitly")
            type_name = repr(shape)
        else:
            type_name = getattr(shape, "__name__", repr(shape))
        return self.validate_signature(
            type_name,
            self._reflector(shape),
            role=role,
            member=member,
            interface=interface,
        )

    def validate_signature(
        self,
        type_name: str,
        signature: str,
        *,
        role: SignatureRole = SignatureRole.SIGNAL_BODY,
        member: str | None = None,
        interface: str | None = None,
    ) -> ValidationReport:
        """Validate an already derived *signature* of the type named *type_name*.

        See :meth:`validate` for arguments and errors.
        """
        names = [member] if member is not None else _default_member_names(type_name, role)
        query, resolution = self._locate(type_name, names, role, interface)

        try:
            declared = role.signature(resolution)
        except UnsupportedMemberError as exc:
            raise ShapeUnsupportedError(type_name, query, role, str(exc)) from exc
        if not signatures_are_eq(signature, declared):
            raise SignatureValidationError(type_name, query, role, signature, declared)

        logger.debug("'%s' matches %s (%s)", type_name, query.describe(), signature)
        return ValidationReport(
            type_name=type_name,
            interface=resolution.interface.name,
            member=query.name,
            role=role,
            derived=signature,
            declared=declared,
            source=resolution.document.source,
        )

    def validate_type(
        self,
        *,
        role: SignatureRole = SignatureRole.SIGNAL_BODY,
        member: str | None = None,
        interface: str | None = None,
    ) -> Callable[[T], T]:
        """Return a class decorator that validates the class when it is defined."""

        def decorator(cls: T) -> T:
            self.validate(cls, role=role, member=member, interface=interface)
            return cls

        return decorator

    def _locate(
        self, type_name: str, names: list[str], role: SignatureRole, interface: str | None
    ) -> tuple[MemberQuery, Resolution]:
        """Try each candidate member name in turn; only a missing member falls through."""
        queries = [MemberQuery(name=name, kind=role.kind, interface=interface) for name in names]
        not_found: MemberNotFoundError | None = None
        for query in queries:
            try:
                return query, locate(self.documents, query)
            except MemberNotFoundError as exc:
                logger.debug("No %s for '%s'", query.describe(), type_name)
                not_found = not_found or exc
            except AmbiguousMemberError as exc:
                raise ShapeAmbiguousError(type_name, query, exc.candidates) from exc
        raise ShapeNotFoundError(type_name, queries[0]) from not_found


def validate(
    *,
    role: SignatureRole = SignatureRole.SIGNAL_BODY,
    member: str | None = None,
    interface: str | None = None,
) -> Callable[[T], T]:
    """Class decorator validating against the XML found by :func:`load_config`.

    The configuration is resolved and the documents are loaded when the first
    decorated class is defined, then reused.
    """

    def decorator(cls: T) -> T:
        return _default_validator().validate_type(role=role, member=member, interface=interface)(cls)

    return decorator


# ################
# Implementation
# ################

_EVENT_SUFFIX = "Event"

_default: Validator | None = None


def _default_member_names(type_name: str, role: SignatureRole) -> list[str]:
    names = [type_name]
    if role is SignatureRole.SIGNAL_BODY and type_name.endswith(_EVENT_SUFFIX) and type_name != _EVENT_SUFFIX:
        names.append(type_name[: -len(_EVENT_SUFFIX)])
    return names


def _default_validator() -> Validator:
    global _default
    if _default is None:
        _default = Validator(load_config())
    return _default

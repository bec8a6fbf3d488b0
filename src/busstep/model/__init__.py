# Copyright 2026 busstep Contributors
# SPDX-License-Identifier: Apache-2.0

"""In-memory model of D-Bus introspection documents (interfaces and their members)."""

from busstep.model.entities import (
    Arg,
    Interface,
    InterfaceDocument,
    Member,
    MemberKind,
    Method,
    Property,
    Signal,
)

__all__ = [
    "Arg",
    "Interface",
    "InterfaceDocument",
    "Member",
    "MemberKind",
    "Method",
    "Property",
    "Signal",
]

# Copyright 2026 busstep Contributors
# SPDX-License-Identifier: Apache-2.0

"""High-level tests demonstrating how to construct the interface model."""

import pytest
from pydantic import ValidationError

from busstep.model import (
    Arg,
    Interface,
    InterfaceDocument,
    MemberKind,
    Method,
    Property,
    Signal,
)


def _request_name() -> Method:
    return Method(
        name="RequestName",
        args=(
            Arg(signature="s", direction="in"),
            Arg(signature="u"),
            Arg(signature="u", direction="out"),
        ),
    )


def test_method_splits_arguments_by_direction() -> None:
    """Arguments without a direction count as inputs."""
    method = _request_name()
    assert [arg.signature for arg in method.in_args] == ["s", "u"]
    assert [arg.signature for arg in method.out_args] == ["u"]


def test_interface_members_by_kind() -> None:
    """An interface returns its members of the requested kind in declaration order."""
    iface = Interface(
        name="org.example.Cache",
        methods=(_request_name(),),
        signals=(Signal(name="AddNode"), Signal(name="RemoveNode")),
        properties=(Property(name="Capacity", signature="u"),),
    )
    assert [m.name for m in iface.members(MemberKind.METHOD)] == ["RequestName"]
    assert [m.name for m in iface.members(MemberKind.SIGNAL)] == ["AddNode", "RemoveNode"]
    assert [m.name for m in iface.members(MemberKind.PROPERTY)] == ["Capacity"]


def test_property_defaults_to_readwrite() -> None:
    assert Property(name="Capacity", signature="u").access == "readwrite"


def test_document_is_immutable() -> None:
    """Documents are read-only once constructed."""
    document = InterfaceDocument(source="a.xml", interfaces=(Interface(name="org.example.A"),))
    with pytest.raises(ValidationError):
        document.source = "b.xml"  # type: ignore[misc]


def test_invalid_direction_is_rejected() -> None:
    with pytest.raises(ValidationError):
        Arg(signature="s", direction="inout")  # type: ignore[arg-type]

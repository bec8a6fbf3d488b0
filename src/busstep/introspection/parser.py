# Copyright 2026 busstep Contributors
# SPDX-License-Identifier: Apache-2.0

"""Parser for D-Bus introspection XML.

Converts the ``<node>`` element tree into an :class:`InterfaceDocument`. Only
interfaces declared directly under the root node are read; child ``<node>``
elements describe other objects and are skipped.
"""

from __future__ import annotations

import xml.etree.ElementTree as ET

from busstep.model.entities import Arg, Interface, InterfaceDocument, Method, Property, Signal

# ###############
# Public Interface
# ###############


class IntrospectionError(Exception):
    """Raised when an introspection document cannot be read or is malformed."""


def parse(text: str, source: str = "<string>") -> InterfaceDocument:
    """Parse introspection XML text into an :class:`InterfaceDocument`.

    Args:
        text: The XML document.
        source: Identity recorded on the document and used in error messages.

    Returns:
        The parsed document.

    Raises:
        IntrospectionError: If the XML is malformed, the root element is not
            ``<node>``, or a member or argument lacks a required attribute.
    """
    try:
        root = ET.fromstring(text)
    except ET.ParseError as exc:
        raise IntrospectionError(f"Invalid XML in {source}: {exc}") from exc

    if root.tag != "node":
        raise IntrospectionError(f"{source}: root element must be <node>, found <{root.tag}>")

    interfaces = tuple(_parse_interface(element, source) for element in root.findall("interface"))
    return InterfaceDocument(source=source, name=root.get("name"), interfaces=interfaces)


# ################
# Implementation
# ################

_ACCESS_VALUES = ("read", "write", "readwrite")


def _require(element: ET.Element, attribute: str, location: str) -> str:
    """Return a required attribute of *element*, raising IntrospectionError if missing."""
    value = element.get(attribute)
    if value is None:
        raise IntrospectionError(f"{location}: <{element.tag}> is missing required attribute '{attribute}'")
    return value


def _annotations(element: ET.Element, location: str) -> dict[str, str]:
    return {
        _require(child, "name", location): _require(child, "value", location)
        for child in element.findall("annotation")
    }


def _parse_interface(element: ET.Element, source: str) -> Interface:
    name = _require(element, "name", source)
    location = f"{source}: interface '{name}'"
    return Interface(
        name=name,
        methods=tuple(_parse_method(child, location) for child in element.findall("method")),
        signals=tuple(_parse_signal(child, location) for child in element.findall("signal")),
        properties=tuple(_parse_property(child, location) for child in element.findall("property")),
        annotations=_annotations(element, location),
    )


def _parse_args(element: ET.Element, location: str, default_direction: str | None) -> tuple[Arg, ...]:
    args: list[Arg] = []
    for index, child in enumerate(element.findall("arg")):
        arg_location = f"{location} arg[{index}]"
        direction = child.get("direction", default_direction)
        if direction not in ("in", "out", None):
            raise IntrospectionError(f"{arg_location}: invalid direction '{direction}'")
        args.append(
            Arg(
                name=child.get("name"),
                signature=_require(child, "type", arg_location),
                direction=direction,
                annotations=_annotations(child, arg_location),
            )
        )
    return tuple(args)


def _parse_method(element: ET.Element, location: str) -> Method:
    name = _require(element, "name", location)
    member_location = f"{location} method '{name}'"
    return Method(
        name=name,
        args=_parse_args(element, member_location, default_direction="in"),
        annotations=_annotations(element, member_location),
    )


def _parse_signal(element: ET.Element, location: str) -> Signal:
    name = _require(element, "name", location)
    member_location = f"{location} signal '{name}'"
    return Signal(
        name=name,
        args=_parse_args(element, member_location, default_direction=None),
        annotations=_annotations(element, member_location),
    )


def _parse_property(element: ET.Element, location: str) -> Property:
    name = _require(element, "name", location)
    member_location = f"{location} property '{name}'"
    access = element.get("access", "readwrite")
    if access not in _ACCESS_VALUES:
        raise IntrospectionError(f"{member_location}: invalid access '{access}'")
    return Property(
        name=name,
        signature=_require(element, "type", member_location),
        access=access,
        annotations=_annotations(element, member_location),
    )

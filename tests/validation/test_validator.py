# Copyright 2026 busstep Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for validating Python types against introspection XML."""

from dataclasses import dataclass
from pathlib import Path
from typing import Any

import pytest

from busstep.introspection import parse
from busstep.resolution import AmbiguousMemberError, MemberNotFoundError, SignatureRole, UnsupportedMemberError
from busstep.signature import ObjectPath, SignatureMismatchError, SignatureReflectionError, UInt32, Variant
from busstep.validation import (
    ShapeAmbiguousError,
    ShapeNotFoundError,
    ShapeUnsupportedError,
    SignatureValidationError,
    ValidationReport,
    Validator,
    validate,
)
from busstep.validation import validator as validator_module
from busstep.workspace import XML_PATH_ENV_VAR, BusstepConfig

# ###############
# Test Helpers
# ###############

_XML_DIR = Path(__file__).parent.parent / "xml"


@dataclass
class AddNodeEvent:
    name: str
    path: ObjectPath


@dataclass
class RemoveNode:
    name: str
    path: ObjectPath


@dataclass
class RequestName:
    name: str
    flags: UInt32


@dataclass
class WrongLayout:
    name: str
    flags: str


@pytest.fixture
def validator() -> Validator:
    return Validator(BusstepConfig(xml_path=_XML_DIR))


# ###############
# Successful validation
# ###############


def test_event_suffix_is_dropped_for_signals(validator: Validator) -> None:
    """AddNodeEvent is checked against the AddNode signal; '(so)' matches the body 'so'."""
    report = validator.validate(AddNodeEvent)

    assert report == ValidationReport(
        type_name="AddNodeEvent",
        interface="org.example.Cache",
        member="AddNode",
        role=SignatureRole.SIGNAL_BODY,
        derived="(so)",
        declared="so",
        source=str(_XML_DIR / "org.example.Cache.xml"),
    )


def test_type_name_is_the_default_member(validator: Validator) -> None:
    report = validator.validate(RemoveNode)

    assert report.member == "RemoveNode"
    assert report.derived == "(so)"
    assert report.declared == "(so)"


def test_method_args(validator: Validator) -> None:
    report = validator.validate(RequestName, role=SignatureRole.METHOD_ARGS)
    assert report.declared == "su"
    assert report.derived == "(su)"


def test_method_return_with_explicit_member(validator: Validator) -> None:
    report = validator.validate(UInt32, role=SignatureRole.METHOD_RETURN, member="RequestName")
    assert report.declared == "u"


def test_property_with_interface(validator: Validator) -> None:
    report = validator.validate(
        list[str], role=SignatureRole.PROPERTY, member="Features", interface="org.freedesktop.DBus"
    )
    assert report.interface == "org.freedesktop.DBus"


def test_validate_signature_directly(validator: Validator) -> None:
    report = validator.validate_signature(
        "Credentials", "a{sv}", role=SignatureRole.METHOD_RETURN, member="GetConnectionCredentials"
    )
    assert report.declared == "a{sv}"


def test_validate_type_decorator_returns_class(validator: Validator) -> None:
    @validator.validate_type(member="AddNode")
    @dataclass
    class Added:
        name: str
        path: ObjectPath

    assert Added.__name__ == "Added"


def test_custom_reflector() -> None:
    """The signature derivation can be swapped out."""
    calls: list[Any] = []

    def reflector(shape: Any) -> str:
        calls.append(shape)
        return "(so)"

    validator = Validator(BusstepConfig(xml_path=_XML_DIR), reflector=reflector)
    validator.validate(object, member="AddNode")

    assert calls == [object]


def test_documents_are_loaded_once(validator: Validator) -> None:
    assert validator.documents is validator.documents


def test_preloaded_documents_skip_disk(tmp_path: Path) -> None:
    document = parse('<node><interface name="org.example.A"><property name="P" type="v"/></interface></node>')
    validator = Validator(BusstepConfig(xml_path=tmp_path / "unused"), documents=[document])

    assert validator.validate(Variant, role=SignatureRole.PROPERTY, member="P").interface == "org.example.A"


# ###############
# Failures
# ###############


def test_mismatch_names_type_member_and_signatures(validator: Validator) -> None:
    with pytest.raises(SignatureValidationError) as exc_info:
        validator.validate(WrongLayout, role=SignatureRole.METHOD_ARGS, member="RequestName")

    message = str(exc_info.value)
    assert "'WrongLayout'" in message
    assert "method 'RequestName'" in message
    assert "derived: (ss)" in message
    assert "declared: su" in message
    assert isinstance(exc_info.value, SignatureMismatchError)


def test_not_found_names_type(validator: Validator) -> None:
    @dataclass
    class Missing:
        name: str

    expected = "Cannot validate 'Missing': no interface declares signal 'Missing'"
    with pytest.raises(ShapeNotFoundError, match=expected) as exc_info:
        validator.validate(Missing)

    assert isinstance(exc_info.value.__cause__, MemberNotFoundError)


def test_ambiguity_lists_candidates() -> None:
    body = '<signal name="Ping"><arg type="s"/></signal>'
    documents = [
        parse(f'<node><interface name="org.example.X">{body}</interface></node>', source="x.xml"),
        parse(f'<node><interface name="org.example.Y">{body}</interface></node>', source="y.xml"),
    ]
    validator = Validator(BusstepConfig(xml_path=_XML_DIR), documents=documents)

    with pytest.raises(ShapeAmbiguousError) as exc_info:
        validator.validate(str, member="Ping")

    assert exc_info.value.candidates == ["org.example.X", "org.example.Y"]
    assert "org.example.X, org.example.Y" in str(exc_info.value)
    assert isinstance(exc_info.value.__cause__, AmbiguousMemberError)
    assert validator.validate(str, member="Ping", interface="org.example.Y").interface == "org.example.Y"


def test_unsupported_return_names_type(validator: Validator) -> None:
    with pytest.raises(ShapeUnsupportedError) as exc_info:
        validator.validate_signature("Stats", "a{sv}", role=SignatureRole.METHOD_RETURN, member="GetStats")

    message = str(exc_info.value)
    assert message.startswith("Cannot validate 'Stats' as method-return of method 'GetStats'")
    assert "declares 2 output arguments" in message
    assert exc_info.value.type_name == "Stats"
    assert isinstance(exc_info.value.__cause__, UnsupportedMemberError)


def test_alias_without_member_is_rejected(validator: Validator) -> None:
    with pytest.raises(ValueError, match="pass member= explicitly"):
        validator.validate(UInt32, role=SignatureRole.METHOD_RETURN)


def test_unreflectable_type_propagates(validator: Validator) -> None:
    with pytest.raises(SignatureReflectionError):
        validator.validate(object, member="AddNode")


def test_decorator_raises_at_definition(validator: Validator) -> None:
    with pytest.raises(SignatureValidationError):

        @validator.validate_type(member="AddNode")
        @dataclass
        class Wrong:
            name: str
            path: str


# ###############
# Module-level decorator
# ###############


def test_module_decorator_uses_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv(XML_PATH_ENV_VAR, str(_XML_DIR))
    monkeypatch.setattr(validator_module, "_default", None)

    @validate()
    @dataclass
    class AddNodeEvent:
        name: str
        path: ObjectPath

    assert validator_module._default is not None
    assert validator_module._default.config.xml_path == _XML_DIR.resolve()

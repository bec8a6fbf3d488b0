# Copyright 2026 busstep Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for tolerant signature equality."""

import pytest

from busstep.signature import (
    SignatureMismatchError,
    assert_eq_signatures,
    assert_ne_signatures,
    signatures_are_eq,
)

# ###############
# signatures_are_eq
# ###############


@pytest.mark.parametrize(
    ("lhs", "rhs"),
    [
        ("a{sv}", "a{sv}"),
        ("a{sv}", "(a{sv})"),
        ("(a{sv})", "a{sv}"),
        ("(ii)(ii)", "((ii)(ii))"),
        ("so", "(so)"),
        ("(so)", "(so)"),
        ("", ""),
        ("s", "s"),
        ("", "()"),
    ],
)
def test_equal_signatures(lhs: str, rhs: str) -> None:
    """Signatures at most one pair of outer parentheses apart are equal."""
    assert signatures_are_eq(lhs, rhs)


@pytest.mark.parametrize(
    ("lhs", "rhs"),
    [
        ("a{sv}", "((a{sv}))"),
        ("(ii(ii))", "((ii)(ii))"),
        ("(ii)(ii)", "ii)(ii"),
        ("(ii)", "(uu)"),
        ("so", "os"),
        ("s", ""),
        ("(", ")"),
    ],
)
def test_unequal_signatures(lhs: str, rhs: str) -> None:
    """Signatures differing in more than one outer layer or in any other byte are unequal."""
    assert not signatures_are_eq(lhs, rhs)


def test_deceptive_outer_parentheses_are_kept() -> None:
    """In '(i)(i)' the first and last bytes are not a wrapping pair."""
    assert not signatures_are_eq("(i)(i)", "i)(i")
    assert signatures_are_eq("((i)(i))", "(i)(i)")


def test_strip_happens_once_per_side() -> None:
    """Both sides may lose one layer, but never two."""
    assert signatures_are_eq("((so))", "((so))")
    assert not signatures_are_eq("((so))", "so")


def test_bytes_and_str_compare_alike() -> None:
    """Signatures may be given as bytes."""
    assert signatures_are_eq(b"a{sv}", "(a{sv})")
    assert not signatures_are_eq(b"a{sv}", b"((a{sv}))")


def test_equality_is_symmetric() -> None:
    pairs = [("a{sv}", "(a{sv})"), ("(ii(ii))", "((ii)(ii))"), ("(ii)(ii)", "ii)(ii")]
    for lhs, rhs in pairs:
        assert signatures_are_eq(lhs, rhs) == signatures_are_eq(rhs, lhs)


# ###############
# Assertions
# ###############


def test_assert_eq_signatures_passes() -> None:
    assert_eq_signatures("(ii)(ii)", "((ii)(ii))")
    assert_eq_signatures("a{sv}", "a{sv}")
    assert_eq_signatures("a{sv}", "(a{sv})")


def test_assert_eq_signatures_raises_with_both_signatures() -> None:
    with pytest.raises(SignatureMismatchError) as exc_info:
        assert_eq_signatures("(ii)(ii)", "ii)(ii")
    assert str(exc_info.value) == "Signatures are not equal (Lhs: (ii)(ii), Rhs: ii)(ii)"
    assert exc_info.value.lhs == "(ii)(ii)"
    assert exc_info.value.rhs == "ii)(ii"


def test_assert_ne_signatures_passes() -> None:
    assert_ne_signatures("(ii)", "(uu)")
    assert_ne_signatures("a{sv}", "((a{sv}))")
    assert_ne_signatures("(ii(ii))", "((ii)(ii))")


def test_assert_ne_signatures_raises() -> None:
    with pytest.raises(SignatureMismatchError, match=r"Signatures are equal \(Lhs: \(ii\)\(ii\)"):
        assert_ne_signatures("(ii)(ii)", "((ii)(ii))")


def test_mismatch_is_an_assertion_error() -> None:
    """Test runners report a mismatch as a failed assertion."""
    with pytest.raises(AssertionError):
        assert_eq_signatures("s", "i")

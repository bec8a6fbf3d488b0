# Copyright 2026 busstep Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tolerant equality for D-Bus type signatures.

D-Bus marshalling may omit the outer parentheses of a struct, and a reader
may add them when deserializing. ``a{sv}`` and ``(a{sv})`` therefore describe
the same message body. This module compares signatures while tolerating
exactly one such marshalling step.
"""

from __future__ import annotations

# ###############
# Public Interface
# ###############


class SignatureMismatchError(AssertionError):
    """Raised when two signatures do not have the expected equivalence.

    Attributes:
        lhs: The left-hand signature as given.
        rhs: The right-hand signature as given.
    """

    def __init__(self, message: str, lhs: str | bytes, rhs: str | bytes) -> None:
        super().__init__(message)
        self.lhs = lhs
        self.rhs = rhs


def signatures_are_eq(lhs: str | bytes, rhs: str | bytes) -> bool:
    """Return True if *lhs* and *rhs* are equal, ignoring one pair of outer parentheses.

    Each side independently loses its outer ``(`` ... ``)`` pair when that pair
    really encloses the whole signature. The stripped forms are then compared
    byte for byte. The strip happens at most once, so ``a{sv}`` equals
    ``(a{sv})`` but not ``((a{sv}))``.

    The signatures are assumed to be valid. Malformed input never raises but
    may compare unequal where a grammar-aware check would not.

    Examples:
        >>> signatures_are_eq("a{sv}", "(a{sv})")
        True
        >>> signatures_are_eq("(ii)(ii)", "((ii)(ii))")
        True
        >>> signatures_are_eq("a{sv}", "((a{sv}))")
        False
    """
    return _strip_outer_parens(_as_bytes(lhs)) == _strip_outer_parens(_as_bytes(rhs))


def assert_eq_signatures(lhs: str | bytes, rhs: str | bytes) -> None:
    """Assert that *lhs* and *rhs* are at most one marshalling step apart.

    Raises:
        SignatureMismatchError: If the signatures are not equivalent.
    """
    if not signatures_are_eq(lhs, rhs):
        raise SignatureMismatchError(
            f"Signatures are not equal (Lhs: {_render(lhs)}, Rhs: {_render(rhs)})",
            lhs,
            rhs,
        )


def assert_ne_signatures(lhs: str | bytes, rhs: str | bytes) -> None:
    """Assert that *lhs* and *rhs* differ by more than one pair of outer parentheses.

    The inverse of :func:`assert_eq_signatures`.

    Raises:
        SignatureMismatchError: If the signatures are equivalent.
    """
    if signatures_are_eq(lhs, rhs):
        raise SignatureMismatchError(
            f"Signatures are equal (Lhs: {_render(lhs)}, Rhs: {_render(rhs)})",
            lhs,
            rhs,
        )


# ################
# Implementation
# ################

_OPEN = ord("(")
_CLOSE = ord(")")


def _as_bytes(signature: str | bytes) -> bytes:
    if isinstance(signature, bytes):
        return signature
    return signature.encode("utf-8")


def _render(signature: str | bytes) -> str:
    if isinstance(signature, bytes):
        return signature.decode("utf-8", errors="replace")
    return signature


def _strip_outer_parens(data: bytes) -> bytes:
    """Return *data* without its outer parentheses if they enclose the whole signature.

    In ``(i)(i)`` the first and last bytes are parentheses, but the interior
    ``i)(i`` is not balanced, so these are not outer parentheses.
    """
    if len(data) < 2 or data[0] != _OPEN or data[-1] != _CLOSE:
        return data

    inner = data[1:-1]
    depth = 0
    for byte in inner:
        if byte == _OPEN:
            depth += 1
        elif byte == _CLOSE and depth != 0:
            depth -= 1

    return inner if depth == 0 else data

# Copyright 2026 busstep Contributors
# SPDX-License-Identifier: Apache-2.0

"""D-Bus type signatures: tolerant comparison and derivation from Python types."""

from busstep.signature.equivalence import (
    SignatureMismatchError,
    assert_eq_signatures,
    assert_ne_signatures,
    signatures_are_eq,
)
from busstep.signature.reflect import (
    Byte,
    Int16,
    Int32,
    Int64,
    ObjectPath,
    SignatureReflectionError,
    SignatureStr,
    UInt16,
    UInt32,
    UInt64,
    UnixFd,
    Variant,
    WireType,
    signature_of,
)

__all__ = [
    # Equivalence
    "SignatureMismatchError",
    "assert_eq_signatures",
    "assert_ne_signatures",
    "signatures_are_eq",
    # Reflection
    "SignatureReflectionError",
    "WireType",
    "ObjectPath",
    "SignatureStr",
    "Variant",
    "Byte",
    "Int16",
    "UInt16",
    "Int32",
    "UInt32",
    "Int64",
    "UInt64",
    "UnixFd",
    "signature_of",
]

# Copyright 2026 busstep Contributors
# SPDX-License-Identifier: Apache-2.0

"""Member lookup and signature composition over introspection documents."""

from busstep.resolution.locator import (
    AmbiguousMemberError,
    MemberNotFoundError,
    MemberQuery,
    Resolution,
    ResolutionError,
    SignatureRole,
    UnsupportedMemberError,
    locate,
    method_args_signature,
    method_return_signature,
    property_signature,
    resolve_signature,
    signal_body_signature,
)

__all__ = [
    "AmbiguousMemberError",
    "MemberNotFoundError",
    "MemberQuery",
    "Resolution",
    "ResolutionError",
    "SignatureRole",
    "UnsupportedMemberError",
    "locate",
    "method_args_signature",
    "method_return_signature",
    "property_signature",
    "resolve_signature",
    "signal_body_signature",
]

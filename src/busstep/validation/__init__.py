# Copyright 2026 busstep Contributors
# SPDX-License-Identifier: Apache-2.0

"""Validation of Python types against introspection XML signatures."""

from busstep.validation.validator import (
    ShapeAmbiguousError,
    ShapeNotFoundError,
    ShapeUnsupportedError,
    SignatureValidationError,
    ValidationReport,
    Validator,
    validate,
)

__all__ = [
    "ShapeAmbiguousError",
    "ShapeNotFoundError",
    "ShapeUnsupportedError",
    "SignatureValidationError",
    "ValidationReport",
    "Validator",
    "validate",
]

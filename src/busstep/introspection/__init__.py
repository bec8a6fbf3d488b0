# Copyright 2026 busstep Contributors
# SPDX-License-Identifier: Apache-2.0

"""Reading D-Bus introspection XML into the interface model."""

from busstep.introspection.loader import DEFAULT_FILE_PATTERN, load_document, load_documents
from busstep.introspection.parser import IntrospectionError, parse

__all__ = [
    "DEFAULT_FILE_PATTERN",
    "IntrospectionError",
    "load_document",
    "load_documents",
    "parse",
]

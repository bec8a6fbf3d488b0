# Copyright 2026 busstep Contributors
# SPDX-License-Identifier: Apache-2.0

"""Loading of introspection documents from disk."""

from __future__ import annotations

import logging
from pathlib import Path

from busstep.introspection.parser import IntrospectionError, parse
from busstep.model.entities import InterfaceDocument

logger = logging.getLogger(__name__)

# ###############
# Public Interface
# ###############

DEFAULT_FILE_PATTERN = "*.xml"


def load_document(path: Path) -> InterfaceDocument:
    """Read and parse a single introspection XML file.

    Raises:
        IntrospectionError: If the file cannot be read or parsed.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise IntrospectionError(f"Cannot read introspection file '{path}': {exc}") from exc
    return parse(text, source=str(path))


def load_documents(directory: Path, pattern: str = DEFAULT_FILE_PATTERN) -> list[InterfaceDocument]:
    """Load every introspection document in *directory* matching *pattern*.

    Sub-directories are not searched. Files are loaded in file-name order so
    that the document order, and therefore lookup results, are reproducible.

    Args:
        directory: Directory holding the XML files.
        pattern: Glob pattern selecting the files to load.

    Returns:
        The parsed documents.

    Raises:
        IntrospectionError: If *directory* is not a directory or a file fails to load.
    """
    if not directory.is_dir():
        raise IntrospectionError(f"Introspection directory not found: {directory}")

    paths = sorted((p for p in directory.glob(pattern) if p.is_file()), key=lambda p: p.name)
    documents = [load_document(path) for path in paths]
    logger.info("Loaded %d introspection document(s) from %s", len(documents), directory)
    return documents

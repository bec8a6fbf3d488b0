# Copyright 2026 busstep Contributors
# SPDX-License-Identifier: Apache-2.0

"""Configuration: where the introspection XML lives and which files to load.

The XML directory is resolved from, in increasing order of precedence:

1. the default ``xml/`` directory under the working directory,
2. the default ``XML/`` directory under the working directory,
3. an explicit path (argument or ``xml-path`` in ``.busstep.yaml``),
4. the ``BUSSTEP_XML_PATH`` environment variable.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from busstep.introspection.loader import DEFAULT_FILE_PATTERN

# ###############
# Public Interface
# ###############

CONFIG_FILE_NAME = ".busstep.yaml"
XML_PATH_ENV_VAR = "BUSSTEP_XML_PATH"


class ConfigError(Exception):
    """Raised when the configuration is invalid or the XML directory cannot be resolved."""


class ConfigFile(BaseModel):
    """Contents of a ``.busstep.yaml`` file."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    xml_path: str | None = Field(alias="xml-path", default=None)
    file_pattern: str = Field(alias="file-pattern", default=DEFAULT_FILE_PATTERN)


@dataclass(frozen=True)
class BusstepConfig:
    """Resolved configuration handed to the validator.

    Attributes:
        xml_path: Absolute path of the directory holding the introspection XML.
        file_pattern: Glob pattern selecting the XML files within *xml_path*.
    """

    xml_path: Path
    file_pattern: str = DEFAULT_FILE_PATTERN


def resolve_xml_path(
    xml: str | Path | None = None,
    *,
    cwd: Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> Path:
    """Resolve the introspection XML directory.

    Args:
        xml: Explicit directory, relative paths taken against *cwd*.
        cwd: Working directory for defaults; the process's by default.
        environ: Environment mapping; ``os.environ`` by default.

    Returns:
        The canonical absolute directory path.

    Raises:
        ConfigError: If no directory is given or found, or it does not exist.
    """
    cwd = cwd if cwd is not None else Path.cwd()
    environ = environ if environ is not None else os.environ

    candidate: Path | None = Path(xml) if xml is not None else None
    if candidate is None:
        for default in ("xml", "XML"):
            if (cwd / default).exists():
                candidate = cwd / default

    if XML_PATH_ENV_VAR in environ:
        candidate = Path(environ[XML_PATH_ENV_VAR])

    if candidate is None:
        raise ConfigError(
            f"No XML path provided and no default 'xml' or 'XML' directory found in '{cwd}'. "
            f"Set {XML_PATH_ENV_VAR} or pass a path."
        )

    if not candidate.is_absolute():
        candidate = cwd / candidate
    try:
        return candidate.resolve(strict=True)
    except OSError as exc:
        raise ConfigError(f"XML path '{candidate}' does not exist: {exc}") from exc


def load_config_file(path: Path) -> ConfigFile:
    """Load and validate a ``.busstep.yaml`` file.

    An empty file is treated as an empty configuration.

    Raises:
        ConfigError: If the file cannot be read, contains invalid YAML, or
            does not conform to the expected schema.
    """
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Cannot read config file '{path}': {exc}") from exc

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in config file '{path}': {exc}") from exc

    if data is None:
        return ConfigFile()
    if not isinstance(data, dict):
        raise ConfigError(f"{path}: config must be a YAML mapping")

    try:
        return ConfigFile.model_validate(data)
    except ValidationError as exc:
        raise ConfigError(f"Invalid config file '{path}': {exc}") from exc


def load_config(
    xml: str | Path | None = None,
    *,
    cwd: Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> BusstepConfig:
    """Build the configuration from an explicit path, ``.busstep.yaml`` and the environment.

    ``xml-path`` in the config file is relative to the file's directory and
    is only used when *xml* is not given.

    Raises:
        ConfigError: If the config file is invalid or the XML directory cannot be resolved.
    """
    cwd = cwd if cwd is not None else Path.cwd()

    config_path = cwd / CONFIG_FILE_NAME
    config_file = load_config_file(config_path) if config_path.exists() else ConfigFile()

    if xml is None and config_file.xml_path is not None:
        xml = cwd / config_file.xml_path

    return BusstepConfig(
        xml_path=resolve_xml_path(xml, cwd=cwd, environ=environ),
        file_pattern=config_file.file_pattern,
    )

# Copyright 2026 busstep Contributors
# SPDX-License-Identifier: Apache-2.0

"""Configuration for locating introspection documents."""

from busstep.workspace.config import (
    CONFIG_FILE_NAME,
    XML_PATH_ENV_VAR,
    BusstepConfig,
    ConfigError,
    ConfigFile,
    load_config,
    load_config_file,
    resolve_xml_path,
)

__all__ = [
    "CONFIG_FILE_NAME",
    "XML_PATH_ENV_VAR",
    "BusstepConfig",
    "ConfigError",
    "ConfigFile",
    "load_config",
    "load_config_file",
    "resolve_xml_path",
]

# Copyright 2026 busstep Contributors
# SPDX-License-Identifier: Apache-2.0

"""Sphinx configuration for busstep documentation."""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[2] / "src"))

project = "busstep"
author = "busstep Contributors"
release = "0.1.0"

extensions: list[str] = ["sphinx.ext.autodoc", "sphinx.ext.napoleon"]
root_doc = "index"

html_theme = "alabaster"

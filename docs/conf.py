"""Sphinx configuration for the Fulltime project documentation."""

from __future__ import annotations

import os
import sys
from datetime import datetime

# Ensure the project root is discoverable for autodoc/autosummary imports.
PROJECT_ROOT = os.path.abspath(os.path.join(__file__, "..", ".."))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

project = "Fulltime Match Rating Engine"
author = "WelshDragon"
copyright = f"{datetime.now():%Y}, {author}"

# The full version, including alpha/beta/rc tags.
version = "0.1.0"
release = version

extensions = [
    "sphinx.ext.autodoc",
    "sphinx.ext.autosummary",
    "sphinx.ext.napoleon",
    "sphinx.ext.viewcode",
]

autosummary_generate = True

templates_path = ["_templates"]
exclude_patterns: list[str] = ["_build", "Thumbs.db", ".DS_Store"]

# HTML output settings.
html_theme = "sphinx_rtd_theme"

# Numpydoc sections are rendered through napoleon; type hints go in the field list.
autodoc_typehints = "description"
napoleon_google_docstring = False
napoleon_numpy_docstring = True

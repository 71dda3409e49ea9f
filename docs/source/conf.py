"""Sphinx configuration for the Mood Journal API reference."""

from __future__ import annotations

import sys
from datetime import datetime
from pathlib import Path

# -- Path setup --------------------------------------------------------------

PROJECT_ROOT = Path(__file__).resolve().parents[2]
SRC_DIR = PROJECT_ROOT / "src"

sys.path.insert(0, str(SRC_DIR))

# -- Project information -----------------------------------------------------

project = "Mood Journal"
copyright = f"{datetime.now():%Y}, Mood Journal"
author = "Mood Journal Team"
release = "0.1.0"

# -- General configuration ---------------------------------------------------

extensions = [
    "sphinx.ext.autodoc",
    "sphinx.ext.autosummary",
    "sphinx.ext.napoleon",
]

autosummary_generate = True
napoleon_google_docstring = True
napoleon_numpy_docstring = False

exclude_patterns: list[str] = ["_build"]

language = "en"

# -- Options for HTML output -------------------------------------------------

html_theme = "alabaster"

# -- Autodoc configuration ---------------------------------------------------

autodoc_default_options = {
    "members": True,
    "show-inheritance": True,
}

autodoc_typehints = "description"
autodoc_mock_imports = ["textblob", "psycopg"]

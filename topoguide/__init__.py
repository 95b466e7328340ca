"""Contributor conventions for a Sheet-based simulator.

Platform-independent file access through :func:`resolve_path` and
:func:`normalize_path`, and a checker for the coding conventions (naming,
blank lines, docstrings, vocabulary, Parameters, file extensions and file
access) expected of simulator and model code.
"""

from topoguide.checker import Checker
from topoguide.checker import Report
from topoguide.config import Config
from topoguide.config import load_config
from topoguide.exceptions import ConfigurationError
from topoguide.exceptions import PathNotFoundError
from topoguide.exceptions import SourceError
from topoguide.exceptions import TopoGuideError
from topoguide.paths import normalize_path
from topoguide.paths import resolve_path
from topoguide.paths import search_paths

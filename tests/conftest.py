"""Shared fixtures for the topoguide tests."""
import textwrap

import pytest

from topoguide import paths
from topoguide.checker import Checker
from topoguide.config import Config
from topoguide.paths import PathContext
from topoguide.source import SourceFile


@pytest.fixture(autouse=True)
def path_context(monkeypatch):
    """Give each test a fresh root PathContext, independent of the environment."""
    monkeypatch.delenv('TOPOGUIDE_CONFIG', raising=False)
    context = PathContext()
    monkeypatch.setattr(paths, '_context', [context])
    return context


@pytest.fixture
def run_check():
    """Get a function that checks dedented source text and returns the violations."""
    def run(text, path='topo/base/sheet.py', **config_fields):
        source = SourceFile.from_text(textwrap.dedent(text), path=path)
        return Checker(Config(**config_fields)).check_source(source)
    return run

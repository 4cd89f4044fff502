"""
Pytest configuration and fixtures for Wizard tests.
"""

import io
import tempfile
import textwrap
from pathlib import Path

import pytest
from rich.console import Console

from wizard import settings


@pytest.fixture
def temp_dir():
    """Provide a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as temp_dir:
        yield Path(temp_dir)


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch):
    """Isolate tests from WIZARD_* variables and the cached settings."""
    for name in ("WIZARD_DEBUG", "WIZARD_PLAYBOOK", "WIZARD_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    settings._settings = None
    yield
    settings._settings = None


@pytest.fixture
def console():
    """Provide a non-terminal console whose output can be read back."""
    return Console(file=io.StringIO(), width=200, color_system=None)


@pytest.fixture
def write_playbook(temp_dir):
    """Write a playbook file into the temp dir and return its path."""

    def _write(source: str, name: str = "playbook.py") -> Path:
        path = temp_dir / name
        path.write_text(textwrap.dedent(source))
        return path

    return _write

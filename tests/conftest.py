"""Shared test fixtures for Sprout tests."""
import shutil
import tempfile
from pathlib import Path

import pytest

from sprout.core.config import set_config
from sprout.scaffold import Workspace
from sprout.services.shell import LocalShell


@pytest.fixture
def mock_shell():
    """Create LocalShell in mock mode (no external processes)."""
    return LocalShell(mock=True)


@pytest.fixture
def temp_dir():
    """Create temporary directory for test files."""
    temp = Path(tempfile.mkdtemp())
    yield temp
    shutil.rmtree(temp, ignore_errors=True)


@pytest.fixture
def workspace(temp_dir, mock_shell):
    """Workspace rooted at an existing temp directory."""
    return Workspace(temp_dir, shell=mock_shell)


@pytest.fixture(autouse=True)
def reset_global_config():
    """Drop any cached global config between tests."""
    set_config(None)
    yield
    set_config(None)

"""Unit tests configuration file."""

import os
import shutil

import pytest

FIXTURE_DIR = os.path.join(os.path.dirname(os.path.realpath(__file__)), "generator")


def pytest_configure(config):
    """Disable verbose output when running tests."""
    terminal = config.pluginmanager.getplugin("terminal")
    if terminal:
        terminal.TerminalReporter.showfspath = False


@pytest.fixture
def messages(tmp_path):
    """A writable copy of the sample schema-compiler output."""
    path = tmp_path / "messages.py"
    shutil.copy(os.path.join(FIXTURE_DIR, "messages.gen"), path)
    return path

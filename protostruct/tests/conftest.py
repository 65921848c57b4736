"""Shared test configuration and fixtures."""

from pathlib import Path

import pytest

TESTS_DIR = Path(__file__).parent


def pytest_configure(config):
    """Disable verbose output when running tests."""
    terminal = config.pluginmanager.getplugin("terminal")
    if terminal:
        terminal.TerminalReporter.showfspath = False


@pytest.fixture
def person_schema() -> Path:
    """Path to the sample schema with the Person and Reading messages."""
    return TESTS_DIR / "generator" / "person.proto"

"""Unit tests configuration file."""

import pytest
import structlog


def pytest_configure(config):
    """Disable verbose output when running tests."""
    terminal = config.pluginmanager.getplugin("terminal")
    if terminal:
        terminal.TerminalReporter.showfspath = False


@pytest.fixture(autouse=True)
def reset_logging():
    """Undo logging configuration done by the code under test."""
    yield
    structlog.reset_defaults()

"""Fixtures for CLI tests."""

import logging

import pytest


@pytest.fixture(autouse=True)
def reset_cli_logging(monkeypatch: pytest.MonkeyPatch):
    """Let every invocation configure logging, and undo it afterwards."""
    monkeypatch.setattr("rawport.cli._logging_configured", False)
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    yield
    root.handlers[:] = original_handlers
    root.setLevel(original_level)

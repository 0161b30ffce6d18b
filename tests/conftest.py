"""Shared fixtures."""

import pytest

from consolelog.core.console import reset_defaults


@pytest.fixture(autouse=True)
def fresh_defaults():
    """Each test starts with no shared console and an empty default session."""
    reset_defaults()
    yield
    reset_defaults()

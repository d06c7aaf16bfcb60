"""Pytest configuration and shared fixtures."""

from __future__ import annotations

import logging
from collections.abc import Iterator

import pytest

# The chronoprobe testing plugin is registered via a ``pytest11`` entry
# point (pyproject.toml) for external consumers.  In our own test suite
# we disable it (``-p no:chronoprobe``) and load it here instead, so the
# chronoprobe import chain happens after ``pytest-cov`` starts tracing.
pytest_plugins = ["chronoprobe.testing._plugin"]


def pytest_configure(config: pytest.Config) -> None:
    """Configure pytest markers."""
    config.addinivalue_line(
        "markers", "unit: Unit tests (fast, no external dependencies)"
    )
    config.addinivalue_line(
        "markers", "integration: Integration tests (calibrate real host clocks)"
    )


@pytest.fixture
def _restore_root_logger() -> Iterator[None]:
    """Save and restore root logger handlers and level.

    Keeps tests that call ``configure_logging()`` from leaking
    handlers into later tests.
    """
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    yield
    for h in root.handlers:
        if h not in original_handlers:
            h.close()
    root.handlers = original_handlers
    root.setLevel(original_level)

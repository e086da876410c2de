"""
Pytest configuration and shared fixtures for stampkit tests.

Provides:
- Stamp fixtures and reference vectors (``tests.fixtures.stamps``)
- Debug logging for the ``stampkit`` logger tree
- Automatic ``unit`` marker by test location
"""

import logging

import pytest


pytest_plugins = ["tests.fixtures.stamps"]


# ============================================================================
# Logging Configuration
# ============================================================================


@pytest.fixture(scope="session", autouse=True)
def setup_logging() -> None:
    """Run every codec path with DEBUG enabled so log calls are exercised."""
    logging.getLogger("stampkit").setLevel(logging.DEBUG)


# ============================================================================
# Pytest Configuration
# ============================================================================


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    """Auto-mark tests based on location."""
    for item in items:
        if "unit" in str(item.fspath):
            item.add_marker(pytest.mark.unit)

"""Shared hooks for unit tests."""

import pytest


# ---------------------------------------------------------------------------
# Auto-mark all tests in this directory as "unit"
# ---------------------------------------------------------------------------


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    """Auto-apply ``@pytest.mark.unit`` to every test collected here."""
    unit_marker = pytest.mark.unit
    for item in items:
        if "unit" in str(item.fspath):
            item.add_marker(unit_marker)

# tests/conftest.py
import pytest


def pytest_collection_modifyitems(items):
    """Mark tests with the name of the directory they live in."""
    for item in items:
        path = str(item.fspath)
        if "/integration/" in path:
            item.add_marker(pytest.mark.integration)
        elif "/unit/" in path:
            item.add_marker(pytest.mark.unit)

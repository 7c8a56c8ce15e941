"""Shared test configuration and pytest markers."""

import pytest

from services import fine_analyzer


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "evaluation: classifier accuracy over the labelled corpus"
    )


@pytest.fixture(autouse=True)
def _clear_analysis_cache():
    """Cached analyses must not leak between tests."""
    fine_analyzer.clear_cache()
    yield
    fine_analyzer.clear_cache()

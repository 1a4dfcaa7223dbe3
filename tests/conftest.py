"""Shared pytest fixtures."""

import pytest

from inner_markup.engine.errors import clear_errors, use_internal_errors


@pytest.fixture(autouse=True)
def reset_error_capture():
    """Start every test with capture mode off and an empty capture buffer."""
    previous = use_internal_errors(False)
    clear_errors()
    yield
    clear_errors()
    use_internal_errors(previous)

"""Pytest configuration and shared fixtures."""

import pytest

from recur.config import reset_recur_config


@pytest.fixture(autouse=True)
def reset_config_for_all_tests():
    """Reset the module-level config before and after each test for isolation."""
    reset_recur_config()
    yield
    reset_recur_config()

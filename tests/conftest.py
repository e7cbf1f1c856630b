"""Root conftest — shared test configuration."""

import os

import pytest

# Ensure tests never pick up a developer's .env overrides
os.environ.setdefault("AUTOCOMPLETE_HISTORY_SIZE", "500")
os.environ.setdefault("ENFORCE_INVARIANTS", "true")
os.environ.setdefault("LOG_FORMAT", "text")

from site_collection.config import get_settings  # noqa: E402
from site_builders import FIXED_NOW  # noqa: E402


@pytest.fixture(autouse=True)
def _fresh_settings():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def clock():
    return lambda: FIXED_NOW

"""Root conftest — shared test configuration."""

import os

import pytest

from apibind.config import get_settings
from apibind.core.context import Context

# Tests never read a developer's .env overrides for these
os.environ.setdefault("APIBIND_LOG_FORMAT", "text")
os.environ.setdefault("APIBIND_LOG_LEVEL", "DEBUG")


@pytest.fixture(autouse=True)
def _clear_settings_cache():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def ctx() -> Context:
    return Context.background()

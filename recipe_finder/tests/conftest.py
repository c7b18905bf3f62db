from __future__ import annotations

import pytest

from recipe_finder.analytics.store import clear_events
from recipe_finder.matching.cache import SuggestionCache
from recipe_finder.matching.config import CacheConfig


@pytest.fixture
def cache() -> SuggestionCache:
    return SuggestionCache(CacheConfig(ttl_seconds=None, max_entries=None))


@pytest.fixture(autouse=True)
def _fresh_events():
    clear_events()
    yield

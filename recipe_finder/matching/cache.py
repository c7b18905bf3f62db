"""
Memoization of ranked results keyed by a request fingerprint.

Writes are atomic per key and the first completed evaluation of a
fingerprint stays authoritative: a racing second writer gets the stored
result back instead of replacing it.

With the default :class:`CacheConfig` entries never expire and the cache is
unbounded; set ``RECIPE_CACHE_TTL_SECONDS`` / ``RECIPE_CACHE_MAX_ENTRIES`` to
bound it.
"""
from __future__ import annotations

import json
import logging
import threading
import time
from collections import OrderedDict
from typing import Iterable, Sequence

from .config import DEFAULT_CACHE_CONFIG, CacheConfig
from .models import RecipeMatch
from .normalize import normalize

logger = logging.getLogger(__name__)

def _list_key(values: Iterable[str]) -> list[str]:
    # Sorted but not deduplicated.
    return sorted(normalize(v) for v in values)


def make_fingerprint(
    user_ingredients: Iterable[str],
    banned_ingredients: Iterable[str],
    max_time: int | None,
    max_calories: int | None,
) -> str:
    """JSON-encoded key; unset bounds serialize as ``null``."""
    return json.dumps(
        [_list_key(user_ingredients), _list_key(banned_ingredients), max_time, max_calories]
    )


class SuggestionCache:
    def __init__(self, config: CacheConfig = DEFAULT_CACHE_CONFIG) -> None:
        self._config = config
        self._lock = threading.Lock()
        self._entries: OrderedDict[str, tuple[float, tuple[RecipeMatch, ...]]] = OrderedDict()
        self._hits = 0
        self._misses = 0

    def _expired(self, created_at: float) -> bool:
        ttl = self._config.ttl_seconds
        return ttl is not None and time.monotonic() - created_at >= ttl

    def get(self, fingerprint: str) -> tuple[RecipeMatch, ...] | None:
        with self._lock:
            entry = self._entries.get(fingerprint)
            if entry is not None and not self._expired(entry[0]):
                self._entries.move_to_end(fingerprint)
                self._hits += 1
                return entry[1]
            if entry is not None:
                del self._entries[fingerprint]
            self._misses += 1
            return None

    def put(self, fingerprint: str, matches: Sequence[RecipeMatch]) -> tuple[RecipeMatch, ...]:
        """Store ``matches`` unless a fresh entry exists; return the stored list."""
        value = tuple(matches)
        with self._lock:
            existing = self._entries.get(fingerprint)
            if existing is not None and not self._expired(existing[0]):
                logger.debug("Cache entry for %r already written, keeping it", fingerprint)
                return existing[1]
            self._entries[fingerprint] = (time.monotonic(), value)
            self._entries.move_to_end(fingerprint)
            limit = self._config.max_entries
            while limit is not None and len(self._entries) > limit:
                evicted, _ = self._entries.popitem(last=False)
                logger.debug("Evicted cache entry %r", evicted)
            return value

    def stats(self) -> dict:
        with self._lock:
            total = self._hits + self._misses
            return {
                "size": len(self._entries),
                "hits": self._hits,
                "misses": self._misses,
                "hit_rate": round(self._hits / total * 100, 1) if total > 0 else 0.0,
            }

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
            self._hits = 0
            self._misses = 0

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)


_default_cache = SuggestionCache()


def get_default_cache() -> SuggestionCache:
    return _default_cache


def get_cache_stats() -> dict:
    return _default_cache.stats()


def clear_cache() -> None:
    _default_cache.clear()

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Mapping

from dotenv import load_dotenv

# Load .env from project root
load_dotenv(Path(__file__).resolve().parent.parent.parent / ".env")


@dataclass(frozen=True)
class SynonymClass:
    """A canonical ingredient token and the alternates treated as equivalent."""

    canonical: str
    alternates: frozenset[str] = frozenset()

    def contains(self, token: str) -> bool:
        return token == self.canonical or token in self.alternates

    def tokens(self) -> tuple[str, ...]:
        return (self.canonical, *sorted(self.alternates))


_DEFAULT_WEIGHTS: dict[str, float] = {
    "chicken": 2.0,
    "beef": 2.0,
    "pork": 2.0,
    "salt": 0.5,
    "sugar": 0.5,
    "bacon": 2.0,
}

_DEFAULT_SYNONYMS: tuple[SynonymClass, ...] = (
    SynonymClass("basil", frozenset({"fresh basil", "dried basil"})),
    SynonymClass("garlic", frozenset({"garlic powder", "minced garlic"})),
    SynonymClass("chicken", frozenset({"roasted chicken", "grilled chicken", "chicken thighs"})),
    SynonymClass("lettuce", frozenset({"romaine lettuce"})),
    SynonymClass("sesame oil", frozenset({"toasted sesame oil"})),
    SynonymClass("pepper", frozenset({"black pepper"})),
    SynonymClass(
        "cheese",
        frozenset({"parmesan cheese", "cheddar", "fresh mozzarella", "blue cheese crumbles"}),
    ),
    SynonymClass("olive oil", frozenset({"extra virgin olive oil"})),
    SynonymClass("bacon", frozenset({"unsmoked back bacon", "unsmoked bacon"})),
    SynonymClass("feta", frozenset({"greek feta", "avocado feta"})),
    SynonymClass("beef", frozenset({"ground beef"})),
)

# Iteration order matters: the first key contained in a missing ingredient wins.
_DEFAULT_SUBSTITUTIONS: dict[str, str] = {
    "butter": "margarine",
    "sour cream": "plain yogurt",
    "egg": "flax egg (1 tbsp ground flaxseed + 3 tbsp water)",
}


@dataclass(frozen=True)
class MatchingConfig:
    weights: Mapping[str, float] = field(
        default_factory=lambda: MappingProxyType(dict(_DEFAULT_WEIGHTS))
    )
    synonyms: tuple[SynonymClass, ...] = _DEFAULT_SYNONYMS
    substitutions: Mapping[str, str] = field(
        default_factory=lambda: MappingProxyType(dict(_DEFAULT_SUBSTITUTIONS))
    )
    default_weight: float = 1.0
    fuzzy_threshold: int = 2
    penalty_factor: float = 0.5
    match_ratio_weight: float = 2.0
    time_weight: float = 0.1
    calorie_weight: float = 0.01
    min_match_ratio: float = 0.3

    def weight_for(self, token: str) -> float:
        return self.weights.get(token, self.default_weight)


def _env_int(name: str) -> int | None:
    raw = os.getenv(name, "").strip().lower()
    if raw in ("", "none", "0"):
        return None
    try:
        return int(raw)
    except ValueError:
        return None


@dataclass(frozen=True)
class CacheConfig:
    """Memoization policy. ``None`` disables expiry / the size bound."""

    ttl_seconds: int | None = _env_int("RECIPE_CACHE_TTL_SECONDS")
    max_entries: int | None = _env_int("RECIPE_CACHE_MAX_ENTRIES")


DEFAULT_MATCHING_CONFIG = MatchingConfig()
DEFAULT_CACHE_CONFIG = CacheConfig()

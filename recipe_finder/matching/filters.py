from __future__ import annotations

import logging
from collections import Counter
from enum import Enum
from typing import Iterable

from .models import RecipeCandidate
from .normalize import normalize

logger = logging.getLogger(__name__)


class DropReason(str, Enum):
    banned = "banned"
    too_slow = "too_slow"
    too_many_calories = "too_many_calories"
    no_ingredients = "no_ingredients"


def banned_tokens(banned_ingredients: Iterable[str]) -> list[str]:
    # Blank entries would be a substring of everything.
    return [t for t in (normalize(b) for b in banned_ingredients) if t]


def contains_banned(ingredients: Iterable[str], banned: list[str]) -> bool:
    """Substring check, so banning "nut" also drops "peanut butter"."""
    return any(b in ing.lower() for ing in ingredients for b in banned)


def rejection_reason(
    candidate: RecipeCandidate,
    banned: list[str],
    max_time: int | None,
    max_calories: int | None,
) -> DropReason | None:
    """First hard constraint ``candidate`` breaks, checked in a fixed order."""
    if banned and contains_banned(candidate.ingredients, banned):
        return DropReason.banned
    if max_time is not None and candidate.total_time > max_time:
        return DropReason.too_slow
    if max_calories is not None and candidate.calories > max_calories:
        return DropReason.too_many_calories
    if not candidate.ingredients:
        return DropReason.no_ingredients
    return None


def apply_filters(
    candidates: Iterable[RecipeCandidate],
    banned_ingredients: Iterable[str],
    max_time: int | None = None,
    max_calories: int | None = None,
) -> list[RecipeCandidate]:
    """Keep the candidates that pass every hard constraint, preserving order."""
    banned = banned_tokens(banned_ingredients)
    kept: list[RecipeCandidate] = []
    dropped: Counter[str] = Counter()
    for candidate in candidates:
        reason = rejection_reason(candidate, banned, max_time, max_calories)
        if reason is None:
            kept.append(candidate)
        else:
            dropped[reason.value] += 1
    if dropped:
        logger.debug("Filtered out %d candidates: %s", sum(dropped.values()), dict(dropped))
    return kept

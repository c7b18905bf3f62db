"""
Decides whether a recipe ingredient is covered by the user's pantry.

Three tiers are tried in order and the first success wins:

1. exact token equality,
2. Levenshtein distance within ``fuzzy_threshold``,
3. synonym classes: a recipe ingredient belonging to a class is covered by any
   user token in the same class, or close (fuzzily) to one of its tokens.

Both the scorer and the response annotation go through :func:`is_satisfied`
so "matched" means the same thing everywhere.
"""
from __future__ import annotations

from typing import Iterable

import numpy as np

from .config import DEFAULT_MATCHING_CONFIG, MatchingConfig, SynonymClass
from .normalize import normalize


def levenshtein(a: str, b: str) -> int:
    """Classic DP edit distance; insert, delete and substitute all cost 1."""
    if not a:
        return len(b)
    if not b:
        return len(a)
    columns = np.arange(len(b) + 1)
    b_chars = np.array(list(b))
    prev = columns.copy()
    for i, char in enumerate(a, start=1):
        row = np.empty_like(prev)
        row[0] = i
        # Deletion and substitution depend only on the previous row.
        row[1:] = np.minimum(prev[1:] + 1, prev[:-1] + (b_chars != char))
        # Insertion chains along the row: row[j] = min over k <= j of row[k] + (j - k).
        prev = np.minimum.accumulate(row - columns) + columns
    return int(prev[-1])


def is_fuzzy_match(a: str, b: str, threshold: int) -> bool:
    # Distance is at least the length difference, skip the DP when it can't pass.
    if abs(len(a) - len(b)) > threshold:
        return False
    return levenshtein(a, b) <= threshold


def _synonym_match(
    token: str,
    user_tokens: Iterable[str],
    synonyms: Iterable[SynonymClass],
    threshold: int,
) -> bool:
    for cls in synonyms:
        if not cls.contains(token):
            continue
        for user in user_tokens:
            if cls.contains(user):
                return True
            if any(is_fuzzy_match(user, t, threshold) for t in cls.tokens()):
                return True
    return False


def is_satisfied(
    recipe_ingredient: str,
    user_tokens: set[str],
    config: MatchingConfig = DEFAULT_MATCHING_CONFIG,
) -> bool:
    """Return True if ``recipe_ingredient`` is covered by the normalized ``user_tokens``."""
    token = normalize(recipe_ingredient)
    if token in user_tokens:
        return True
    threshold = config.fuzzy_threshold
    if any(is_fuzzy_match(token, user, threshold) for user in user_tokens):
        return True
    return _synonym_match(token, user_tokens, config.synonyms, threshold)


def satisfied_ingredients(
    recipe_ingredients: Iterable[str],
    user_tokens: set[str],
    config: MatchingConfig = DEFAULT_MATCHING_CONFIG,
) -> list[str]:
    """Recipe ingredients (as authored) that the user already has."""
    return [ing for ing in recipe_ingredients if is_satisfied(ing, user_tokens, config)]

from __future__ import annotations

from typing import Iterable

from .models import RecipeMatch


def rank(matches: Iterable[RecipeMatch]) -> list[RecipeMatch]:
    """Highest ``weighted_score`` first.

    ``sorted`` is stable, so equal scores keep the order the candidate store
    returned them in.
    """
    return sorted(matches, key=lambda m: m.weighted_score, reverse=True)

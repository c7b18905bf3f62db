from __future__ import annotations

from dataclasses import dataclass

from .config import DEFAULT_MATCHING_CONFIG, MatchingConfig
from .lexical import is_satisfied
from .models import MatchCategory, RecipeCandidate, RecipeMatch
from .normalize import normalize, normalize_all


@dataclass(frozen=True)
class _Tally:
    matched_count: int
    matched_weight: float
    missing_weight: float
    missing: tuple[str, ...]


def _tally(
    candidate: RecipeCandidate,
    user_tokens: set[str],
    config: MatchingConfig,
) -> _Tally:
    matched_count = 0
    matched_weight = 0.0
    missing_weight = 0.0
    missing: list[str] = []
    for ing in candidate.ingredients:
        weight = config.weight_for(normalize(ing))
        if is_satisfied(ing, user_tokens, config):
            matched_count += 1
            matched_weight += weight
        else:
            missing_weight += weight
            missing.append(ing)
    return _Tally(matched_count, matched_weight, missing_weight, tuple(missing))


def weighted_score(
    matched_weight: float,
    missing_weight: float,
    match_ratio: float,
    total_time: int,
    calories: int,
    max_time: int | None = None,
    max_calories: int | None = None,
    config: MatchingConfig = DEFAULT_MATCHING_CONFIG,
) -> float:
    """Weighted coverage, a ratio bonus, and bonuses for headroom under the limits."""
    score = matched_weight - config.penalty_factor * missing_weight
    score += match_ratio * config.match_ratio_weight
    if max_time is not None and max_time - total_time > 0:
        score += (max_time - total_time) * config.time_weight
    if max_calories is not None and max_calories - calories > 0:
        score += (max_calories - calories) * config.calorie_weight
    return score


def categorize(recipe_ingredients: tuple[str, ...], user_tokens: set[str]) -> MatchCategory:
    """Plain set containment over normalized tokens, no fuzzy or synonym matching.

    ``exact`` is checked first: the pantry covers the whole recipe.
    ``full_with_extras``: the recipe covers everything in the pantry.
    """
    recipe_tokens = normalize_all(recipe_ingredients)
    if user_tokens >= recipe_tokens:
        return MatchCategory.exact
    if recipe_tokens >= user_tokens:
        return MatchCategory.full_with_extras
    return MatchCategory.partial


def score_candidate(
    candidate: RecipeCandidate,
    user_tokens: set[str],
    max_time: int | None = None,
    max_calories: int | None = None,
    config: MatchingConfig = DEFAULT_MATCHING_CONFIG,
) -> RecipeMatch | None:
    """Score one filtered candidate; ``None`` when it covers too little of the recipe."""
    total = len(candidate.ingredients)
    if total == 0:
        return None
    tally = _tally(candidate, user_tokens, config)
    ratio = tally.matched_count / total
    if ratio < config.min_match_ratio:
        return None
    score = weighted_score(
        tally.matched_weight,
        tally.missing_weight,
        ratio,
        candidate.total_time,
        candidate.calories,
        max_time,
        max_calories,
        config,
    )
    return RecipeMatch(
        recipe=candidate,
        matched_count=tally.matched_count,
        total_ingredients=total,
        missing_ingredients=tally.missing,
        weighted_score=score,
        match_category=categorize(candidate.ingredients, user_tokens),
    )

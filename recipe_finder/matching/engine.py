from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Iterable, Protocol, Sequence

from ..analytics.store import record_event
from .cache import SuggestionCache, get_default_cache, make_fingerprint
from .config import DEFAULT_MATCHING_CONFIG, MatchingConfig
from .filters import apply_filters, banned_tokens
from .lexical import satisfied_ingredients
from .models import (
    RecipeCandidate,
    RecipeMatch,
    RecipeSuggestion,
    SuggestionRequest,
    SuggestionResponse,
)
from .normalize import normalize, normalize_all
from .ranking import rank
from .scoring import score_candidate
from .substitutions import suggest_substitutes

logger = logging.getLogger(__name__)

NO_RESULTS_MESSAGE = "No recipes found matching your criteria."


class CandidateSource(Protocol):
    def find_by_ingredients(self, tokens: Iterable[str]) -> list[RecipeCandidate]:
        ...


@dataclass(frozen=True)
class MatchResult:
    matches: tuple[RecipeMatch, ...]
    cache_hit: bool = False
    candidates_fetched: int = 0


def _query_tokens(user_ingredients: Sequence[str]) -> list[str]:
    # Raw tokens plus their normalized forms, so casing can't change recall.
    tokens = [*user_ingredients, *(normalize(i) for i in user_ingredients)]
    return [t for t in dict.fromkeys(tokens) if t]


class RecipeMatchEngine:
    """Filter, score and rank store candidates against a user's pantry."""

    def __init__(
        self,
        store: CandidateSource,
        config: MatchingConfig = DEFAULT_MATCHING_CONFIG,
        cache: SuggestionCache | None = None,
    ) -> None:
        self.store = store
        self.config = config
        self.cache = cache if cache is not None else get_default_cache()

    def evaluate(
        self,
        candidates: Iterable[RecipeCandidate],
        user_tokens: set[str],
        banned_ingredients: Sequence[str] = (),
        max_time: int | None = None,
        max_calories: int | None = None,
    ) -> list[RecipeMatch]:
        """The uncached pipeline: hard filters, scoring, ranking."""
        survivors = apply_filters(candidates, banned_ingredients, max_time, max_calories)
        matches = []
        for candidate in survivors:
            match = score_candidate(candidate, user_tokens, max_time, max_calories, self.config)
            if match is not None:
                matches.append(match)
        return rank(matches)

    def find_matches(
        self,
        user_ingredients: Sequence[str],
        banned_ingredients: Sequence[str] = (),
        max_time: int | None = None,
        max_calories: int | None = None,
    ) -> MatchResult:
        if not user_ingredients:
            return MatchResult(matches=())

        fingerprint = make_fingerprint(user_ingredients, banned_ingredients, max_time, max_calories)
        cached = self.cache.get(fingerprint)
        if cached is not None:
            logger.debug("Cache hit for %r", fingerprint)
            return MatchResult(matches=cached, cache_hit=True)

        candidates = self.store.find_by_ingredients(_query_tokens(user_ingredients))
        user_tokens = normalize_all(user_ingredients)
        ranked = self.evaluate(candidates, user_tokens, banned_ingredients, max_time, max_calories)
        logger.info(
            "Ranked %d of %d candidates for %d ingredients",
            len(ranked), len(candidates), len(user_ingredients),
        )
        stored = self.cache.put(fingerprint, ranked)
        return MatchResult(matches=stored, candidates_fetched=len(candidates))

    def to_suggestion(self, match: RecipeMatch, user_tokens: set[str]) -> RecipeSuggestion:
        recipe = match.recipe
        return RecipeSuggestion(
            title=recipe.title,
            instructions=recipe.instructions,
            image_url=recipe.image_url,
            matched_count=match.matched_count,
            total_ingredients=match.total_ingredients,
            missing_ingredients=list(match.missing_ingredients),
            weighted_score=match.weighted_score,
            match_category=match.match_category,
            current_ingredients=satisfied_ingredients(recipe.ingredients, user_tokens, self.config),
            missing_suggestions=suggest_substitutes(
                match.missing_ingredients, self.config.substitutions
            ),
            preparation_time=recipe.preparation_time,
            cooking_time=recipe.cooking_time,
            calories=recipe.calories,
        )

    def suggest(self, request: SuggestionRequest) -> SuggestionResponse:
        start_time = time.time()

        result = self.find_matches(
            request.ingredients,
            request.banned_ingredients,
            request.max_time,
            request.max_calories,
        )
        user_tokens = normalize_all(request.ingredients)
        recipes = [self.to_suggestion(m, user_tokens) for m in result.matches]

        elapsed_ms = round((time.time() - start_time) * 1000, 1)
        record_event("search", {
            "ingredients": sorted(user_tokens),
            "banned_ingredients": sorted(set(banned_tokens(request.banned_ingredients))),
            "max_time": request.max_time,
            "max_calories": request.max_calories,
            "total_candidates": result.candidates_fetched,
            "results_returned": len(recipes),
            "response_time_ms": elapsed_ms,
            "cache_hit": result.cache_hit,
        })

        if not recipes:
            return SuggestionResponse(success=True, recipes=[], message=NO_RESULTS_MESSAGE)
        return SuggestionResponse(success=True, recipes=recipes)

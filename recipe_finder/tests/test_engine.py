from __future__ import annotations

import pytest

from recipe_finder.analytics.store import get_events
from recipe_finder.matching.config import MatchingConfig
from recipe_finder.matching.engine import NO_RESULTS_MESSAGE, RecipeMatchEngine
from recipe_finder.matching.models import MatchCategory, SuggestionRequest
from recipe_finder.store.data_store import StoreUnavailableError

from .factories import ListStore, make_recipe

RECIPES = [
    make_recipe("chicken", ["chicken", "salt", "pepper"], preparation_time=10, cooking_time=20),
    make_recipe("eggs", ["egg", "butter", "salt"], calories=250),
    make_recipe("stew", ["ground beef", "onion", "carrot", "potato", "salt"], cooking_time=120),
    make_recipe("pb", ["noodles", "Peanut Butter", "soy sauce", "sesame oil", "garlic"]),
]


@pytest.fixture
def engine(cache):
    return RecipeMatchEngine(ListStore(list(RECIPES)), cache=cache)


def test_empty_pantry_gives_empty_result(engine):
    result = engine.find_matches([])
    assert result.matches == ()
    assert engine.store.calls == 0


def test_ranked_by_score_descending(engine):
    result = engine.find_matches(["chicken", "salt"])
    ids = [m.recipe.id for m in result.matches]
    assert ids == ["chicken", "eggs"]
    scores = [m.weighted_score for m in result.matches]
    assert scores == sorted(scores, reverse=True)


def test_invariants_hold_for_every_match(engine):
    for pantry in (["chicken", "salt"], ["egg", "butter", "salt"], ["garlic", "noodles", "soy sauce"]):
        for m in engine.find_matches(pantry).matches:
            assert m.total_ingredients > 0
            assert m.matched_count + len(m.missing_ingredients) == m.total_ingredients
            assert m.match_ratio >= 0.3


def test_low_ratio_recipe_excluded(engine):
    # salt covers 1 of 5 stew ingredients
    ids = [m.recipe.id for m in engine.find_matches(["salt"]).matches]
    assert "stew" not in ids


def test_banned_substring_excludes_recipe(engine):
    pantry = ["noodles", "peanut butter", "soy sauce"]
    assert "pb" in [m.recipe.id for m in engine.find_matches(pantry).matches]
    banned = [m.recipe.id for m in engine.find_matches(pantry, ["NUT"]).matches]
    assert "pb" not in banned


def test_max_time_excludes_slow_recipe(engine):
    pantry = ["ground beef", "onion", "carrot", "potato", "salt"]
    assert "stew" in [m.recipe.id for m in engine.find_matches(pantry).matches]
    assert "stew" not in [m.recipe.id for m in engine.find_matches(pantry, max_time=60).matches]


def test_exact_category_when_pantry_equals_recipe(engine):
    match = engine.find_matches(["Egg", "Butter", " salt"]).matches[0]
    assert match.recipe.id == "eggs"
    assert match.match_category is MatchCategory.exact
    assert match.matched_count == match.total_ingredients
    assert match.missing_ingredients == ()


def test_full_with_extras_when_recipe_covers_pantry(engine):
    match = engine.find_matches(["chicken", "salt"]).matches[0]
    assert match.recipe.id == "chicken"
    assert match.match_category is MatchCategory.full_with_extras


def test_reordered_request_hits_cache(engine):
    first = engine.find_matches(["Egg", "Butter"])
    second = engine.find_matches(["butter", "egg"])
    assert not first.cache_hit
    assert second.cache_hit
    assert second.matches == first.matches
    assert engine.store.calls == 1


def test_case_does_not_change_recall(cache):
    store = ListStore([make_recipe("eggs", ["egg", "butter"])])
    engine = RecipeMatchEngine(store, cache=cache)
    assert [m.recipe.id for m in engine.find_matches(["EGG"]).matches] == ["eggs"]


def test_ties_keep_store_order(cache):
    store = ListStore([
        make_recipe("first", ["egg", "milk"]),
        make_recipe("second", ["egg", "milk"]),
        make_recipe("third", ["egg", "milk"]),
    ])
    engine = RecipeMatchEngine(store, cache=cache)
    ids = [m.recipe.id for m in engine.find_matches(["egg", "milk"]).matches]
    assert ids == ["first", "second", "third"]


def test_injected_weight_table(cache):
    store = ListStore([make_recipe("a", ["truffle", "egg"]), make_recipe("b", ["egg", "ham"])])
    config = MatchingConfig(weights={"truffle": 10.0})
    engine = RecipeMatchEngine(store, config=config, cache=cache)
    ids = [m.recipe.id for m in engine.find_matches(["egg", "truffle", "ham"]).matches]
    assert ids == ["a", "b"]


def test_store_failure_propagates(cache):
    class BrokenStore:
        def find_by_ingredients(self, tokens):
            raise StoreUnavailableError("down")

    engine = RecipeMatchEngine(BrokenStore(), cache=cache)
    with pytest.raises(StoreUnavailableError):
        engine.find_matches(["egg"])
    assert len(cache) == 0


def test_suggest_annotates_results(engine):
    response = engine.suggest(SuggestionRequest(ingredients=["chicken", "salt"]))
    assert response.success
    chicken, eggs = response.recipes
    assert chicken.current_ingredients == ["chicken", "salt"]
    assert chicken.missing_ingredients == ["pepper"]
    assert chicken.missing_suggestions == []
    assert eggs.current_ingredients == ["salt"]
    assert eggs.missing_suggestions == [
        'For "egg", consider using "flax egg (1 tbsp ground flaxseed + 3 tbsp water)".',
        'For "butter", consider using "margarine".',
    ]


def test_suggest_empty_result_is_success(engine):
    response = engine.suggest(SuggestionRequest(ingredients=["saffron"]))
    assert response.success
    assert response.recipes == []
    assert response.message == NO_RESULTS_MESSAGE


def test_suggest_records_search_event(engine):
    engine.suggest(SuggestionRequest(ingredients=["Chicken", "salt"], bannedIngredients=["Nut"]))
    engine.suggest(SuggestionRequest(ingredients=["salt", "chicken"], bannedIngredients=["nut"]))
    events = get_events()
    assert [e["cache_hit"] for e in events] == [False, True]
    assert events[0]["ingredients"] == ["chicken", "salt"]
    assert events[0]["banned_ingredients"] == ["nut"]
    assert events[0]["results_returned"] == 2


def test_blank_pantry_entries_are_ignored(engine):
    match = engine.find_matches(["chicken", "salt", "  "]).matches[0]
    assert match.recipe.id == "chicken"
    assert match.match_category is MatchCategory.full_with_extras


def test_blank_pantry_entry_does_not_fuzzy_match_short_ingredients(cache):
    store = ListStore([make_recipe("short", ["egg", "ab", "cd"])])
    engine = RecipeMatchEngine(store, cache=cache)
    match = engine.find_matches(["egg", ""]).matches[0]
    assert match.matched_count == 1
    assert match.missing_ingredients == ("ab", "cd")

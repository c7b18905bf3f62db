from __future__ import annotations

from recipe_finder.matching.models import RecipeCandidate


class ListStore:
    """In-memory candidate source with the store's "any token" semantics."""

    def __init__(self, candidates: list[RecipeCandidate]) -> None:
        self.candidates = candidates
        self.calls = 0

    def find_by_ingredients(self, tokens):
        self.calls += 1
        token_set = set(tokens)
        return [c for c in self.candidates if any(i in token_set for i in c.ingredients)]


def make_recipe(rid: str, ingredients: list[str], **kwargs) -> RecipeCandidate:
    return RecipeCandidate(
        id=rid,
        title=kwargs.pop("title", f"Recipe {rid}"),
        instructions=kwargs.pop("instructions", "Cook."),
        ingredients=tuple(ingredients),
        **kwargs,
    )

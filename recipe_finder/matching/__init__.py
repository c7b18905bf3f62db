"""
Ingredient-to-recipe matching engine.

Responsibilities:
- Normalize ingredient strings and decide when a recipe ingredient is covered
  by the user's pantry (exact, fuzzy and synonym matching).
- Drop candidates that break banned-ingredient, time or calorie limits.
- Score, categorize and rank the surviving recipes.
- Memoize ranked results per request fingerprint.
- Suggest substitutes for missing ingredients.
"""

from __future__ import annotations

import math
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel


def parse_bound(value: Any) -> int | None:
    """Leniently read an optional time/calorie limit.

    Numbers and numeric strings become ints; anything else (garbage strings,
    booleans, negatives, NaN) means "no limit".
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, float) and not math.isfinite(value):
        return None
    if isinstance(value, (int, float)):
        parsed = int(value)
    elif isinstance(value, str):
        try:
            parsed = int(value.strip())
        except ValueError:
            return None
    else:
        return None
    return parsed if parsed >= 0 else None


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class MatchCategory(str, Enum):
    # "exact": the pantry covers every recipe ingredient.
    # "full_with_extras": the recipe uses everything the user listed.
    exact = "Exact"
    full_with_extras = "FullWithExtras"
    partial = "Partial"


class RecipeCandidate(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    title: str = ""
    instructions: str = ""
    ingredients: tuple[str, ...] = ()
    preparation_time: int = Field(default=0, ge=0)
    cooking_time: int = Field(default=0, ge=0)
    calories: int = Field(default=0, ge=0)
    image_url: str | None = None

    @property
    def total_time(self) -> int:
        return self.preparation_time + self.cooking_time


class RecipeMatch(BaseModel):
    model_config = ConfigDict(frozen=True)

    recipe: RecipeCandidate
    matched_count: int = Field(ge=0)
    total_ingredients: int = Field(gt=0)
    missing_ingredients: tuple[str, ...] = ()
    weighted_score: float
    match_category: MatchCategory

    @model_validator(mode="after")
    def _check_counts(self) -> "RecipeMatch":
        if self.matched_count + len(self.missing_ingredients) != self.total_ingredients:
            raise ValueError("matched_count + missing ingredients must equal total_ingredients")
        return self

    @property
    def match_ratio(self) -> float:
        return self.matched_count / self.total_ingredients


class SuggestionConstraints(_CamelModel):
    banned_ingredients: list[str] = Field(default_factory=list)
    max_time: int | None = Field(default=None, description="Max prep + cook minutes")
    max_calories: int | None = None

    @field_validator("banned_ingredients", mode="before")
    @classmethod
    def _none_as_empty(cls, value: Any) -> Any:
        return [] if value is None else value

    @field_validator("max_time", "max_calories", mode="before")
    @classmethod
    def _lenient_bound(cls, value: Any) -> int | None:
        return parse_bound(value)


class SuggestionRequest(SuggestionConstraints):
    ingredients: list[str] = Field(
        default_factory=list, description="Ingredients the user has on hand"
    )

    @field_validator("ingredients", mode="before")
    @classmethod
    def _none_ingredients_as_empty(cls, value: Any) -> Any:
        return [] if value is None else value


class RecipeSuggestion(_CamelModel):
    title: str
    instructions: str
    image_url: str | None
    matched_count: int
    total_ingredients: int
    missing_ingredients: list[str]
    weighted_score: float
    match_category: MatchCategory
    current_ingredients: list[str]
    missing_suggestions: list[str]
    preparation_time: int
    cooking_time: int
    calories: int


class SuggestionResponse(_CamelModel):
    success: bool = True
    recipes: list[RecipeSuggestion] = Field(default_factory=list)
    message: str | None = None


class ProductOut(_CamelModel):
    barcode: str
    name: str
    ingredients: list[str]

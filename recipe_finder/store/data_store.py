from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Iterable

import pandas as pd

from ..matching.models import ProductOut, RecipeCandidate
from .config import DEFAULT_STORE_CONFIG, StoreConfig

logger = logging.getLogger(__name__)

RECIPE_TEXT_COLUMNS = ["id", "title", "instructions", "imageUrl"]
RECIPE_NUMERIC_COLUMNS = ["preparationTime", "cookingTime", "calories"]


class StoreUnavailableError(RuntimeError):
    """The candidate or product store could not be read."""


def _as_list(value: Any) -> list[str]:
    if isinstance(value, (list, tuple)):
        return [str(v) for v in value if v is not None]
    return []


def _read_records(path: Path) -> pd.DataFrame:
    try:
        return pd.read_json(path, orient="records", dtype=False, convert_dates=False)
    except (OSError, ValueError) as exc:
        logger.warning("Could not read store file %s", path, exc_info=True)
        raise StoreUnavailableError(f"Could not read {path}") from exc


def prepare_recipes(df: pd.DataFrame) -> pd.DataFrame:
    """Fill missing columns and coerce types so every row maps to a candidate."""
    df = df.copy()
    if "id" not in df.columns:
        df["id"] = df.index.astype(str)
    for col in RECIPE_TEXT_COLUMNS[1:]:
        if col not in df.columns:
            df[col] = None
    for col in RECIPE_NUMERIC_COLUMNS:
        if col not in df.columns:
            df[col] = 0
        # Unreadable numbers count as 0.
        df[col] = pd.to_numeric(df[col], errors="coerce").fillna(0).clip(lower=0).astype(int)
    if "ingredients" not in df.columns:
        df["ingredients"] = None
    df["ingredients"] = df["ingredients"].apply(_as_list)
    df["id"] = df["id"].astype(str)
    df["title"] = df["title"].fillna("").astype(str)
    df["instructions"] = df["instructions"].fillna("").astype(str)
    return df.reset_index(drop=True)


def _to_candidate(row: pd.Series) -> RecipeCandidate:
    image_url = row["imageUrl"]
    return RecipeCandidate(
        id=row["id"],
        title=row["title"],
        instructions=row["instructions"],
        ingredients=tuple(row["ingredients"]),
        preparation_time=int(row["preparationTime"]),
        cooking_time=int(row["cookingTime"]),
        calories=int(row["calories"]),
        image_url=str(image_url) if pd.notna(image_url) else None,
    )


class RecipeStore:
    def __init__(self, df: pd.DataFrame) -> None:
        self._df = prepare_recipes(df)

    @classmethod
    def from_records(cls, records: list[dict[str, Any]]) -> "RecipeStore":
        return cls(pd.DataFrame.from_records(records))

    @classmethod
    def from_path(cls, path: Path) -> "RecipeStore":
        if not path.is_file():
            raise StoreUnavailableError(f"Recipe file not found: {path}")
        return cls(_read_records(path))

    def __len__(self) -> int:
        return len(self._df)

    def find_by_ingredients(self, tokens: Iterable[str]) -> list[RecipeCandidate]:
        """Recipes listing at least one of ``tokens`` verbatim, in file order.

        Case-sensitive, no fuzziness: a cheap pre-filter, the engine re-checks.
        """
        token_set = set(tokens)
        if not token_set or self._df.empty:
            return []
        mask = self._df["ingredients"].apply(lambda ings: any(i in token_set for i in ings))
        return [_to_candidate(row) for _, row in self._df.loc[mask].iterrows()]

    def known_ingredients(self) -> list[str]:
        seen: set[str] = set()
        for ings in self._df["ingredients"]:
            seen.update(ings)
        return sorted(seen)


class ProductStore:
    def __init__(self, df: pd.DataFrame) -> None:
        df = df.copy()
        for col in ("barcode", "name"):
            if col not in df.columns:
                df[col] = ""
        if "ingredients" not in df.columns:
            df["ingredients"] = None
        df["barcode"] = df["barcode"].astype(str)
        df["name"] = df["name"].fillna("").astype(str)
        df["ingredients"] = df["ingredients"].apply(_as_list)
        self._by_barcode = df.drop_duplicates("barcode", keep="first").set_index("barcode")

    @classmethod
    def from_records(cls, records: list[dict[str, Any]]) -> "ProductStore":
        return cls(pd.DataFrame.from_records(records))

    @classmethod
    def from_path(cls, path: Path) -> "ProductStore":
        if not path.is_file():
            raise StoreUnavailableError(f"Product file not found: {path}")
        return cls(_read_records(path))

    def get_product(self, barcode: str) -> ProductOut | None:
        if barcode not in self._by_barcode.index:
            return None
        row = self._by_barcode.loc[barcode]
        return ProductOut(barcode=barcode, name=row["name"], ingredients=list(row["ingredients"]))


_recipe_store: RecipeStore | None = None
_product_store: ProductStore | None = None


def get_recipe_store(config: StoreConfig = DEFAULT_STORE_CONFIG) -> RecipeStore:
    """Return the in-memory recipe store, loading it on first call."""
    global _recipe_store
    if _recipe_store is None:
        _recipe_store = RecipeStore.from_path(config.recipes_path)
        logger.info("Loaded %d recipes from %s", len(_recipe_store), config.recipes_path)
    return _recipe_store


def get_product_store(config: StoreConfig = DEFAULT_STORE_CONFIG) -> ProductStore:
    """Return the in-memory product store, loading it on first call."""
    global _product_store
    if _product_store is None:
        _product_store = ProductStore.from_path(config.products_path)
    return _product_store


def reset_stores() -> None:
    global _recipe_store, _product_store
    _recipe_store = None
    _product_store = None

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, List

import pandas as pd

from .config import DEFAULT_INGESTION_CONFIG, IngestionConfig

logger = logging.getLogger(__name__)

RECIPE_COLUMNS: List[str] = [
    "id",
    "title",
    "instructions",
    "ingredients",
    "preparationTime",
    "cookingTime",
    "calories",
    "imageUrl",
]

PRODUCT_COLUMNS: List[str] = ["barcode", "name", "ingredients"]


def _split_ingredients(value: Any) -> list[str]:
    """Accept a list or a comma-separated string; drop blanks."""
    if isinstance(value, (list, tuple)):
        items = [str(v) for v in value if v is not None]
    elif isinstance(value, str):
        items = value.split(",")
    else:
        return []
    return [i.strip() for i in items if i and i.strip()]


def _to_minutes(series: pd.Series) -> pd.Series:
    # Unparsable or negative values become 0.
    return pd.to_numeric(series, errors="coerce").fillna(0).clip(lower=0).astype(int)


def _first_present(df: pd.DataFrame, columns: List[str]) -> str | None:
    for col in columns:
        if col in df.columns:
            return col
    return None


def _read_raw(path: Path) -> pd.DataFrame:
    return pd.read_json(path, orient="records", dtype=False, convert_dates=False)


def canonicalize_recipes(df: pd.DataFrame) -> pd.DataFrame:
    col_id = _first_present(df, ["id", "recipe_id", "_id"])
    col_title = _first_present(df, ["title", "name", "recipe_name"])
    col_instructions = _first_present(df, ["instructions", "directions", "steps"])
    col_ingredients = _first_present(df, ["ingredients", "ingredient_list"])
    col_prep = _first_present(df, ["preparationTime", "prep_time", "prepTime"])
    col_cook = _first_present(df, ["cookingTime", "cook_time", "cookTime"])
    col_calories = _first_present(df, ["calories", "kcal", "energy_kcal"])
    col_image = _first_present(df, ["imageUrl", "image_url", "image"])

    canonical = pd.DataFrame(index=df.index)
    canonical["id"] = df[col_id].astype(str) if col_id else df.index.astype(str)
    canonical["title"] = df[col_title].fillna("").astype(str).str.strip() if col_title else ""

    if col_instructions:
        canonical["instructions"] = df[col_instructions].apply(
            lambda v: "\n".join(map(str, v)) if isinstance(v, list) else ("" if pd.isna(v) else str(v))
        )
    else:
        canonical["instructions"] = ""

    if col_ingredients:
        canonical["ingredients"] = df[col_ingredients].apply(_split_ingredients)
    else:
        canonical["ingredients"] = None
        canonical["ingredients"] = canonical["ingredients"].apply(_split_ingredients)

    for target, source in (
        ("preparationTime", col_prep),
        ("cookingTime", col_cook),
        ("calories", col_calories),
    ):
        canonical[target] = _to_minutes(df[source]) if source else 0

    canonical["imageUrl"] = df[col_image].where(df[col_image].notna(), None) if col_image else None

    # Recipes without a title cannot be shown
    canonical = canonical[canonical["title"] != ""]
    return canonical[RECIPE_COLUMNS].reset_index(drop=True)


def canonicalize_products(df: pd.DataFrame) -> pd.DataFrame:
    col_barcode = _first_present(df, ["barcode", "code", "ean"])
    col_name = _first_present(df, ["name", "product_name", "title"])
    col_ingredients = _first_present(df, ["ingredients", "ingredients_list"])

    if not col_barcode:
        return pd.DataFrame(columns=PRODUCT_COLUMNS)

    canonical = pd.DataFrame(index=df.index)
    canonical["barcode"] = df[col_barcode].astype(str).str.strip()
    canonical["name"] = df[col_name].fillna("").astype(str) if col_name else ""
    if col_ingredients:
        canonical["ingredients"] = df[col_ingredients].apply(_split_ingredients)
    else:
        canonical["ingredients"] = None
        canonical["ingredients"] = canonical["ingredients"].apply(_split_ingredients)

    canonical = canonical[canonical["barcode"] != ""]
    return canonical.drop_duplicates("barcode", keep="first")[PRODUCT_COLUMNS].reset_index(drop=True)


def run_ingestion(config: IngestionConfig = DEFAULT_INGESTION_CONFIG) -> tuple[Path, Path]:
    """
    Turn the raw dumps into the processed files the store reads.

    Steps:
    - Read raw recipes (required) and products (optional).
    - Map raw fields into the canonical recipe / product shape.
    - Persist both as JSON records.
    """
    config.processed_data_dir.mkdir(parents=True, exist_ok=True)

    recipes = canonicalize_recipes(_read_raw(config.raw_recipes_path))

    if config.raw_products_path.is_file():
        products = canonicalize_products(_read_raw(config.raw_products_path))
    else:
        logger.info("No raw product file at %s, writing an empty product list", config.raw_products_path)
        products = pd.DataFrame(columns=PRODUCT_COLUMNS)

    recipes.to_json(config.processed_recipes_path, orient="records", indent=2)
    products.to_json(config.processed_products_path, orient="records", indent=2)
    return config.processed_recipes_path, config.processed_products_path


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    recipes_path, products_path = run_ingestion()
    print(f"Ingestion complete. Processed data saved to: {recipes_path}, {products_path}")

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
load_dotenv(Path(__file__).resolve().parent.parent.parent / ".env")

_DEFAULT_DATA_DIR = Path(__file__).resolve().parent.parent / "data" / "processed"


@dataclass(frozen=True)
class StoreConfig:
    data_dir: Path = Path(os.getenv("RECIPE_DATA_DIR") or _DEFAULT_DATA_DIR)
    recipes_filename: str = "recipes.json"
    products_filename: str = "products.json"

    @property
    def recipes_path(self) -> Path:
        return self.data_dir / self.recipes_filename

    @property
    def products_path(self) -> Path:
        return self.data_dir / self.products_filename


DEFAULT_STORE_CONFIG = StoreConfig()

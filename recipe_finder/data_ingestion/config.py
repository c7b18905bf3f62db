from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class IngestionConfig:
    """
    Configuration for the recipe/product ingestion step.
    """

    raw_data_dir: Path = Path("recipe_finder/data/raw")
    processed_data_dir: Path = Path("recipe_finder/data/processed")
    raw_recipes_filename: str = "recipes.json"
    raw_products_filename: str = "products.json"
    processed_recipes_filename: str = "recipes.json"
    processed_products_filename: str = "products.json"

    @property
    def raw_recipes_path(self) -> Path:
        return self.raw_data_dir / self.raw_recipes_filename

    @property
    def raw_products_path(self) -> Path:
        return self.raw_data_dir / self.raw_products_filename

    @property
    def processed_recipes_path(self) -> Path:
        return self.processed_data_dir / self.processed_recipes_filename

    @property
    def processed_products_path(self) -> Path:
        return self.processed_data_dir / self.processed_products_filename


DEFAULT_INGESTION_CONFIG = IngestionConfig()

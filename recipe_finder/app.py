from __future__ import annotations

import logging

from fastapi import FastAPI, HTTPException

from .analytics.aggregator import compute_analytics
from .analytics.store import get_events
from .matching.cache import get_cache_stats
from .matching.engine import NO_RESULTS_MESSAGE, RecipeMatchEngine
from .matching.models import (
    ProductOut,
    SuggestionConstraints,
    SuggestionRequest,
    SuggestionResponse,
)
from .store.data_store import (
    StoreUnavailableError,
    get_product_store,
    get_recipe_store,
)

logger = logging.getLogger(__name__)

app = FastAPI(title="Recipe Suggestion API", version="1.0.0")


def _suggest(request: SuggestionRequest) -> SuggestionResponse:
    if not request.ingredients:
        return SuggestionResponse(success=True, recipes=[], message=NO_RESULTS_MESSAGE)
    try:
        return RecipeMatchEngine(get_recipe_store()).suggest(request)
    except StoreUnavailableError as exc:
        logger.warning("Recipe suggestion failed: %s", exc)
        raise HTTPException(status_code=503, detail="Recipe store unavailable") from exc


# ── Public endpoints ─────────────────────────────────────────────────────


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/metadata")
def metadata() -> dict:
    try:
        store = get_recipe_store()
    except StoreUnavailableError as exc:
        raise HTTPException(status_code=503, detail="Recipe store unavailable") from exc
    return {"recipes": len(store), "ingredients": store.known_ingredients()}


# ── Suggestions ──────────────────────────────────────────────────────────


@app.post("/suggestRecipes", response_model=SuggestionResponse)
def suggest_recipes(body: SuggestionRequest) -> SuggestionResponse:
    return _suggest(body)


@app.get("/products/{barcode}", response_model=ProductOut)
def get_product(barcode: str) -> ProductOut:
    try:
        product = get_product_store().get_product(barcode)
    except StoreUnavailableError as exc:
        raise HTTPException(status_code=503, detail="Product store unavailable") from exc
    if product is None:
        raise HTTPException(status_code=404, detail=f"Product not found for barcode: {barcode}")
    return product


@app.post("/products/{barcode}/suggestions", response_model=SuggestionResponse)
def product_suggestions(
    barcode: str,
    body: SuggestionConstraints | None = None,
) -> SuggestionResponse:
    body = body or SuggestionConstraints()
    product = get_product(barcode)
    if not product.ingredients:
        raise HTTPException(
            status_code=404, detail=f"No ingredients found for product: {product.name}"
        )
    request = SuggestionRequest(
        ingredients=product.ingredients,
        banned_ingredients=body.banned_ingredients,
        max_time=body.max_time,
        max_calories=body.max_calories,
    )
    return _suggest(request)


# ── Operational endpoints ────────────────────────────────────────────────


@app.get("/cache/stats")
def cache_stats() -> dict:
    return get_cache_stats()


@app.get("/analytics")
def analytics() -> dict:
    return compute_analytics(get_events())

from __future__ import annotations

from collections import Counter
from typing import Any


def compute_analytics(events: list[dict[str, Any]]) -> dict[str, Any]:
    searches = [e for e in events if e["type"] == "search"]
    total = len(searches)

    # Average response time
    times = [s["response_time_ms"] for s in searches if "response_time_ms" in s]
    avg_time = round(sum(times) / len(times), 1) if times else 0.0

    # Top pantry ingredients
    ingredient_counter: Counter[str] = Counter()
    for s in searches:
        for ing in s.get("ingredients", []) or []:
            ingredient_counter[ing] += 1
    top_ingredients = [{"name": n, "count": c} for n, c in ingredient_counter.most_common(10)]

    # Top banned ingredients
    banned_counter: Counter[str] = Counter()
    for s in searches:
        for ing in s.get("banned_ingredients", []) or []:
            banned_counter[ing] += 1
    top_banned = [{"name": n, "count": c} for n, c in banned_counter.most_common(10)]

    # Constraint usage rates
    constraint_counts = {"banned": 0, "max_time": 0, "max_calories": 0}
    for s in searches:
        if s.get("banned_ingredients"):
            constraint_counts["banned"] += 1
        if s.get("max_time") is not None:
            constraint_counts["max_time"] += 1
        if s.get("max_calories") is not None:
            constraint_counts["max_calories"] += 1
    constraint_usage = {
        k: round(v / total * 100, 1) if total else 0.0
        for k, v in constraint_counts.items()
    }

    empty_results = sum(1 for s in searches if s.get("results_returned", 0) == 0)

    # Cache stats
    cache_hits = sum(1 for s in searches if s.get("cache_hit"))
    cache_misses = total - cache_hits

    return {
        "total_searches": total,
        "avg_response_time_ms": avg_time,
        "top_ingredients": top_ingredients,
        "top_banned_ingredients": top_banned,
        "constraint_usage": constraint_usage,
        "empty_result_searches": empty_results,
        "cache_stats": {
            "hits": cache_hits,
            "misses": cache_misses,
            "hit_rate": round(cache_hits / total * 100, 1) if total else 0.0,
        },
    }

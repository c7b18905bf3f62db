from __future__ import annotations

from recipe_finder.analytics.aggregator import compute_analytics
from recipe_finder.analytics.store import MAX_EVENTS, clear_events, get_events, record_event


def test_compute_analytics_empty():
    body = compute_analytics([])
    assert body["total_searches"] == 0
    assert body["avg_response_time_ms"] == 0.0
    assert body["cache_stats"]["hit_rate"] == 0.0


def test_compute_analytics_summarizes_searches():
    events = [
        {"type": "search", "ingredients": ["egg", "salt"], "banned_ingredients": ["nut"],
         "max_time": 20, "max_calories": None, "results_returned": 2,
         "response_time_ms": 4.0, "cache_hit": False},
        {"type": "search", "ingredients": ["egg"], "banned_ingredients": [],
         "max_time": None, "max_calories": 500, "results_returned": 0,
         "response_time_ms": 2.0, "cache_hit": True},
        {"type": "other"},
    ]
    body = compute_analytics(events)
    assert body["total_searches"] == 2
    assert body["avg_response_time_ms"] == 3.0
    assert body["top_ingredients"][0] == {"name": "egg", "count": 2}
    assert body["top_banned_ingredients"] == [{"name": "nut", "count": 1}]
    assert body["constraint_usage"] == {"banned": 50.0, "max_time": 50.0, "max_calories": 50.0}
    assert body["empty_result_searches"] == 1
    assert body["cache_stats"] == {"hits": 1, "misses": 1, "hit_rate": 50.0}


def test_event_store_round_trip():
    clear_events()
    record_event("search", {"ingredients": ["egg"]})
    events = get_events()
    assert len(events) == 1
    assert events[0]["type"] == "search"
    assert "timestamp" in events[0]


def test_event_store_keeps_only_recent_events():
    clear_events()
    for i in range(MAX_EVENTS + 5):
        record_event("search", {"seq": i})
    events = get_events()
    assert len(events) == MAX_EVENTS
    assert events[0]["seq"] == 5
    assert events[-1]["seq"] == MAX_EVENTS + 4

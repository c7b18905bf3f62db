"""
Search analytics.

Responsibilities:
- Record one event per suggestion request (inputs, counts, timing, cache hit).
- Aggregate the event log into a summary for the analytics endpoint.
"""

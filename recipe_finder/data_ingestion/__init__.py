"""
Offline data ingestion for the recipe store.

Responsibilities:
- Read raw recipe and product dumps (JSON records).
- Normalize them into the canonical shape the store expects.
- Persist the processed files locally for the API to load.
"""

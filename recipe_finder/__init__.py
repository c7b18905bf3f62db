"""
Pantry-driven recipe suggestion service.

Given the ingredients a user has on hand, the service fetches candidate
recipes, filters and scores them against the user's constraints and returns
a ranked, annotated list.
"""

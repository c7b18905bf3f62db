from __future__ import annotations

from typing import Iterable, Mapping

from .config import DEFAULT_MATCHING_CONFIG


def suggest_substitute(missing: str, table: Mapping[str, str]) -> str | None:
    lowered = missing.lower()
    for key, substitute in table.items():
        if key.lower().strip() in lowered:
            return f'For "{missing}", consider using "{substitute}".'
    return None


def suggest_substitutes(
    missing_ingredients: Iterable[str],
    table: Mapping[str, str] = DEFAULT_MATCHING_CONFIG.substitutions,
) -> list[str]:
    """One suggestion per missing ingredient that contains a table key.

    The table is scanned in insertion order and the first contained key wins.
    """
    suggestions: list[str] = []
    for missing in missing_ingredients:
        suggestion = suggest_substitute(missing, table)
        if suggestion is not None:
            suggestions.append(suggestion)
    return suggestions

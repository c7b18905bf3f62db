from __future__ import annotations

from typing import Iterable


def normalize(value: str | None) -> str:
    """Canonical comparison token: trimmed and lowercased."""
    if not value:
        return ""
    return value.strip().lower()


def normalize_all(values: Iterable[str]) -> set[str]:
    # Blank entries carry no ingredient and are dropped.
    return {token for token in map(normalize, values) if token}

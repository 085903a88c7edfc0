# Normalization only: no stemming, no fuzzy matching

from collections.abc import Mapping
from typing import Any, FrozenSet

# Polish prepositions dropped when they stand alone as a word
PREPOSITIONS: FrozenSet[str] = frozenset({"z", "w", "na", "ze", "do"})


def normalize_text(text: Any, prepositions: FrozenSet[str] = PREPOSITIONS) -> str:
    """Canonicalize free text for comparison.

    Lower-cases, collapses whitespace and removes isolated prepositions, so
    "Kurczak  Z ryżem" and "kurczak ryżem" compare equal. Never raises.
    """
    if text is None:
        return ""
    if not isinstance(text, str):
        text = str(text)
    words = text.lower().split()
    return " ".join(w for w in words if w not in prepositions)


def _entry_field(entry: Any, name: str) -> Any:
    if isinstance(entry, Mapping):
        return entry.get(name)
    return getattr(entry, name, None)


def ingredient_display(entry: Any) -> str:
    """Render one ingredient entry (plain text or {name, amount}) as a string."""
    if entry is None:
        return ""
    if isinstance(entry, str):
        return entry
    name = _entry_field(entry, "name")
    if name is None:
        return str(entry)
    amount = _entry_field(entry, "amount")
    if amount:
        return f"{name} ({amount})"
    return str(name)

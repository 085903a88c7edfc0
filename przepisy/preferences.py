from typing import List, Sequence

from .normalize import normalize_text


class PreferenceError(ValueError):
    pass


class InvalidPreferenceError(PreferenceError):
    pass


class DuplicatePreferenceError(PreferenceError):
    pass


def add_preference(preferences: Sequence[str], ingredient: str) -> List[str]:
    """Return a new list with `ingredient` appended, trimmed and lower-cased.

    Raises InvalidPreferenceError for input that normalizes to nothing (blank,
    or only prepositions such as "z") and DuplicatePreferenceError
    when the ingredient is already listed (ignoring case).
    """
    value = (ingredient or "").strip().lower()
    # an empty normalized preference would match every recipe
    if not normalize_text(value):
        raise InvalidPreferenceError("Ingredient name must not be empty")
    if any(p.lower() == value for p in preferences):
        raise DuplicatePreferenceError(f"{value!r} is already excluded")
    return [*preferences, value]


def remove_preference(preferences: Sequence[str], ingredient: str) -> List[str]:
    value = (ingredient or "").strip().lower()
    return [p for p in preferences if p.lower() != value]

from dataclasses import dataclass
from typing import FrozenSet, Iterable, Optional, Tuple

from .normalize import PREPOSITIONS, normalize_text


@dataclass(frozen=True)
class SynonymRule:
    """Domain knowledge the word-level strategies cannot see.

    Fires when the preference contains one of `preference_terms` (equals one,
    when `exact`) and the ingredient contains one of `ingredient_terms`.
    """

    name: str
    preference_terms: Tuple[str, ...]
    ingredient_terms: Tuple[str, ...]
    exact: bool = False

    def applies(self, ingredient: str, preference: str) -> bool:
        if self.exact:
            hit = preference in self.preference_terms
        else:
            hit = any(term in preference for term in self.preference_terms)
        return hit and any(term in ingredient for term in self.ingredient_terms)


DEFAULT_SYNONYMS: Tuple[SynonymRule, ...] = (
    SynonymRule(
        name="poultry",
        preference_terms=("kurczak", "kur"),
        ingredient_terms=("kurcz", "kurz", "drób", "drob"),
    ),
    SynonymRule(
        name="onion",
        preference_terms=("cebul",),
        ingredient_terms=("cebul",),
    ),
    SynonymRule(
        name="onion-adjective",
        preference_terms=("cebula",),
        ingredient_terms=("cebulow",),
        exact=True,
    ),
)


@dataclass(frozen=True)
class MatchRules:
    synonyms: Tuple[SynonymRule, ...] = DEFAULT_SYNONYMS
    # two-letter words like "do" or "ja" would prefix-match far too much
    min_prefix_length: int = 3
    prepositions: FrozenSet[str] = PREPOSITIONS

    def normalize(self, text) -> str:
        return normalize_text(text, self.prepositions)


DEFAULT_RULES = MatchRules()


def _prefix_overlap(ingredient: str, preference: str, min_length: int) -> bool:
    if len(preference) < min_length:
        return False
    for word in ingredient.split(" "):
        if len(word) < min_length:
            continue
        if word.startswith(preference) or preference.startswith(word):
            return True
    return False


def _matches(ingredient: str, preference: str, rules: MatchRules) -> bool:
    """Apply the four strategies to already-normalized, non-empty strings."""
    if preference in ingredient:
        return True
    if ingredient == preference:
        return True
    if _prefix_overlap(ingredient, preference, rules.min_prefix_length):
        return True
    return any(rule.applies(ingredient, preference) for rule in rules.synonyms)


def find_match(
    ingredient_text,
    excluded_preferences: Iterable[str],
    rules: MatchRules = DEFAULT_RULES,
) -> Optional[str]:
    """Return the first preference (as given) that the ingredient matches, or None."""
    ingredient = rules.normalize(ingredient_text)
    if not ingredient:
        return None
    for raw in excluded_preferences or ():
        preference = rules.normalize(raw)
        if _matches(ingredient, preference, rules):
            return raw
    return None


def matches_any(
    ingredient_text,
    excluded_preferences: Iterable[str],
    rules: MatchRules = DEFAULT_RULES,
) -> bool:
    return find_match(ingredient_text, excluded_preferences, rules) is not None

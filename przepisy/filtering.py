from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, List, NamedTuple, Optional, Sequence

from .logging_utils import get_logger
from .matching import DEFAULT_RULES, MatchRules, find_match
from .normalize import ingredient_display

if TYPE_CHECKING:
    from .stores import PreferencesStore

logger = get_logger(__name__)


class Conflict(NamedTuple):
    source: str  # "title" or "ingredient"
    text: str
    preference: str


def recipe_field(recipe: Any, name: str) -> Any:
    """Read a field from a raw mapping or a model object alike."""
    if isinstance(recipe, Mapping):
        return recipe.get(name)
    return getattr(recipe, name, None)


def find_conflict(
    recipe: Any,
    preferences: Sequence[str],
    rules: MatchRules = DEFAULT_RULES,
) -> Optional[Conflict]:
    """Return why `recipe` clashes with `preferences`, or None if it does not.

    The title is checked by plain substring only. Ingredients go through the
    full match engine. An `ingredients` value that is not a list cannot prove
    a conflict, so the recipe is let through.
    """
    title = recipe_field(recipe, "title")
    norm_title = rules.normalize(title)
    if norm_title:
        for raw in preferences:
            preference = rules.normalize(raw)
            if preference in norm_title:
                return Conflict("title", str(title), raw)

    ingredients = recipe_field(recipe, "ingredients")
    if not isinstance(ingredients, (list, tuple)):
        return None
    for entry in ingredients:
        text = ingredient_display(entry)
        hit = find_match(text, preferences, rules)
        if hit is not None:
            return Conflict("ingredient", text, hit)
    return None


def filter_by_dietary_preferences(
    recipes: Sequence[Any],
    preferences: Sequence[str],
    rules: MatchRules = DEFAULT_RULES,
) -> List[Any]:
    """Drop every recipe whose title or ingredients match an excluded preference.

    With no preferences the input is returned as is. Otherwise the result keeps
    the surviving recipes in their original order without copying them.
    """
    if not preferences:
        return recipes
    kept = []
    for recipe in recipes:
        conflict = find_conflict(recipe, preferences, rules)
        if conflict is None:
            kept.append(recipe)
            continue
        logger.debug(
            "Excluding recipe %r: %s %r matches %r",
            recipe_field(recipe, "id"),
            conflict.source,
            conflict.text,
            conflict.preference,
        )
    return kept


def filter_for_user(
    recipes: Sequence[Any],
    store: "PreferencesStore",
    user_id: str,
    rules: MatchRules = DEFAULT_RULES,
) -> List[Any]:
    """Filter against whatever preference snapshot the store returns for `user_id`."""
    return filter_by_dietary_preferences(recipes, store.fetch_preferences(user_id), rules)

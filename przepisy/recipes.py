import json
from pathlib import Path
from typing import Any, List, Sequence, Tuple

from .filtering import recipe_field


def load_recipes(path):
    """Load recipes from a JSON file and return a list of dicts.

    Args:
        path (str or Path): Path to the JSON file.

    Returns:
        list: list of recipe dictionaries, empty when the file is missing.
    """
    p = Path(path)
    if not p.exists():
        return []
    with p.open("r", encoding="utf-8") as f:
        return json.load(f)


def sort_by_rating(recipes: Sequence[Any]) -> List[Any]:
    # unrated recipes sort as 0, so they end up last
    return sorted(recipes, key=lambda r: recipe_field(r, "avg_rating") or 0, reverse=True)


def with_tag(recipes: Sequence[Any], tag: str) -> List[Any]:
    wanted = tag.lower()
    out = []
    for r in recipes:
        tags = recipe_field(r, "tags")
        if not isinstance(tags, list):
            continue
        if any(isinstance(t, str) and t.lower() == wanted for t in tags):
            out.append(r)
    return out


def in_category(recipes: Sequence[Any], category: str) -> List[Any]:
    wanted = category.lower()
    return [
        r for r in recipes
        if isinstance(recipe_field(r, "category"), str)
        and recipe_field(r, "category").lower() == wanted
    ]


def search_title(recipes: Sequence[Any], term: str) -> List[Any]:
    needle = term.lower()
    return [r for r in recipes if needle in str(recipe_field(r, "title") or "").lower()]


def tag_summary(tags, shown: int = 2) -> Tuple[List[str], int]:
    """Split tags into the ones displayed on a card and the count of the rest."""
    tags = list(tags or [])
    return tags[:shown], max(len(tags) - shown, 0)

"""
Descriptive tags for recipes that have none.

Tags come from the recipe category and from keywords in the title. When neither
yields anything, random tags from a fixed vocabulary are used instead; the
random choice is injectable so callers (and tests) can pin it. Category names
never survive as tags, since categories are shown separately.
"""
import random
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Callable, Dict, Iterable, List, Mapping, Sequence, Tuple

from .filtering import recipe_field
from .logging_utils import get_logger

if TYPE_CHECKING:
    from .stores import RecipeStore

logger = get_logger(__name__)

# choose(population, k) -> k distinct items
Chooser = Callable[[Sequence[str], int], List[str]]

CATEGORIES: Tuple[str, ...] = (
    "Śniadanie",
    "Danie główne",
    "Zupa",
    "Sałatka",
    "Kolacja",
    "Deser",
)

CATEGORY_TAGS: Mapping[str, Tuple[str, ...]] = MappingProxyType({
    "śniadanie": ("na szybko", "poranne"),
    "danie główne": ("obiad",),
    "zupa": ("rozgrzewające",),
    "sałatka": ("lekkie", "wegetariańskie"),
    "kolacja": ("wieczorne", "lekkie"),
    "deser": ("słodkie",),
})

# order matters only for which tags survive truncation
KEYWORD_TAGS: Mapping[str, Tuple[str, ...]] = MappingProxyType({
    "pizza": ("kuchnia włoska", "fastfood"),
    "spaghetti": ("kuchnia włoska", "makaron"),
    "lasagne": ("kuchnia włoska", "zapiekanka"),
    "risotto": ("kuchnia włoska", "ryż"),
    "tiramisu": ("kuchnia włoska", "słodkie"),
    "makaron": ("makaron",),
    "sushi": ("kuchnia japońska", "ryba"),
    "ramen": ("kuchnia japońska", "makaron"),
    "pierogi": ("kuchnia polska", "tradycyjne"),
    "bigos": ("kuchnia polska", "tradycyjne"),
    "gołąbki": ("kuchnia polska", "tradycyjne"),
    "schabowy": ("kuchnia polska", "mięsne"),
    "żurek": ("kuchnia polska", "rozgrzewające"),
    "barszcz": ("kuchnia polska", "wegetariańskie"),
    "burger": ("fastfood", "mięsne"),
    "kebab": ("fastfood", "mięsne"),
    "tacos": ("kuchnia meksykańska", "ostre"),
    "burrito": ("kuchnia meksykańska", "ostre"),
    "curry": ("kuchnia indyjska", "ostre"),
    "kurczak": ("drób", "mięsne"),
    "łosoś": ("ryba", "zdrowe"),
    "sernik": ("słodkie", "wypieki"),
    "ciasto": ("słodkie", "wypieki"),
    "naleśniki": ("słodkie", "na szybko"),
    "omlet": ("jajka", "na szybko"),
    "grill": ("grillowane", "mięsne"),
})

VOCABULARY: Tuple[str, ...] = (
    "na szybko",
    "łatwe",
    "domowe",
    "zdrowe",
    "lekkie",
    "sycące",
    "tanie",
    "rodzinne",
    "tradycyjne",
    "wegetariańskie",
    "wegańskie",
    "bezglutenowe",
    "ostre",
    "słodkie",
    "rozgrzewające",
    "sezonowe",
    "na imprezę",
    "dla dzieci",
    "fit",
    "kuchnia polska",
    "kuchnia włoska",
    "kuchnia azjatycka",
    "mięsne",
    "jednogarnkowe",
)


def _random_sample(population: Sequence[str], k: int) -> List[str]:
    return random.sample(list(population), min(k, len(population)))


@dataclass(frozen=True)
class TagRules:
    category_tags: Mapping[str, Tuple[str, ...]] = field(default_factory=lambda: CATEGORY_TAGS)
    keyword_tags: Mapping[str, Tuple[str, ...]] = field(default_factory=lambda: KEYWORD_TAGS)
    vocabulary: Tuple[str, ...] = VOCABULARY
    categories: Tuple[str, ...] = CATEGORIES
    max_tags: int = 3
    fallback_count: int = 2


DEFAULT_TAG_RULES = TagRules()


def needs_tags(recipe: Any) -> bool:
    return not recipe_field(recipe, "tags")


def strip_category_tags(tags: Iterable[str], categories: Iterable[str]) -> List[str]:
    """Remove tags equal to, or containing, a category name (case-insensitive)."""
    names = [c.lower() for c in categories if c]
    return [t for t in tags if not any(name in t.lower() for name in names)]


def _dedupe(tags: Iterable[str]) -> List[str]:
    seen = set()
    out = []
    for tag in tags:
        key = tag.lower()
        if key in seen:
            continue
        seen.add(key)
        out.append(tag)
    return out


def infer_tags(
    recipe: Any,
    rules: TagRules = DEFAULT_TAG_RULES,
    choose: Chooser = _random_sample,
) -> List[str]:
    """Compute up to `rules.max_tags` tags for a recipe; always at least one."""
    candidates: List[str] = []

    category = recipe_field(recipe, "category")
    if isinstance(category, str) and category.strip():
        candidates.extend(rules.category_tags.get(category.strip().lower(), ()))

    title = recipe_field(recipe, "title")
    lowered = title.lower() if isinstance(title, str) else ""
    for keyword, keyword_tags in rules.keyword_tags.items():
        if keyword in lowered:
            candidates.extend(keyword_tags)

    if not candidates:
        candidates.extend(choose(rules.vocabulary, rules.fallback_count))

    tags = _dedupe(strip_category_tags(candidates, rules.categories))[: rules.max_tags]
    if not tags:
        tags = list(choose(rules.vocabulary, 1))
    return tags


@dataclass
class BackfillReport:
    updated: Dict[Any, List[str]] = field(default_factory=dict)
    failed: List[Any] = field(default_factory=list)


def backfill_tags(
    recipes: Iterable[Any],
    store: "RecipeStore",
    rules: TagRules = DEFAULT_TAG_RULES,
    choose: Chooser = _random_sample,
) -> BackfillReport:
    """Infer and persist tags for every recipe that has none.

    Runs sequentially. A failed write is logged and skipped, never retried.
    Concurrent backfills of the same recipe must be prevented by the caller.
    """
    report = BackfillReport()
    for recipe in recipes:
        if not needs_tags(recipe):
            continue
        recipe_id = recipe_field(recipe, "id")
        tags = infer_tags(recipe, rules, choose)
        if store.update_tags(recipe_id, tags):
            report.updated[recipe_id] = tags
            logger.info("Backfilled tags for recipe %r: %s", recipe_id, tags)
        else:
            report.failed.append(recipe_id)
            logger.warning(
                "Could not persist tags for recipe %r",
                recipe_id,
                extra={"next_step": "continue with the remaining recipes"},
            )
    return report

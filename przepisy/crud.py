import json
from collections.abc import Mapping
from typing import Any, Dict, List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from . import models, schemas
from .logging_utils import get_logger
from .normalize import ingredient_display

logger = get_logger(__name__)


def _load_list(raw: Optional[str]) -> List[Any]:
    if not raw:
        return []
    try:
        value = json.loads(raw)
    except ValueError:
        logger.warning("Stored JSON list is not valid JSON: %r", raw)
        return []
    return value if isinstance(value, list) else []


def _dump_ingredients(ingredients) -> str:
    return json.dumps(
        [i.model_dump() if isinstance(i, schemas.IngredientEntry) else i for i in ingredients or []],
        ensure_ascii=False,
    )


def _coerce_ingredient(entry: Any):
    # rows written by imports may hold numeric amounts or bare numbers
    if isinstance(entry, str):
        return entry
    if isinstance(entry, Mapping) and entry.get("name") is not None:
        amount = entry.get("amount")
        return {
            "name": str(entry["name"]),
            "amount": None if amount is None or amount == "" else str(amount),
        }
    return ingredient_display(entry)


def to_dict(db_recipe: models.Recipe) -> Dict[str, Any]:
    """Decode a stored recipe into the plain shape the filter and tagger read.

    Entries of unexpected shape are coerced to strings or {name, amount}
    pairs rather than rejected, so one odd row never breaks a listing.
    """
    return {
        "id": db_recipe.id,
        "title": db_recipe.title,
        "ingredients": [_coerce_ingredient(i) for i in _load_list(db_recipe.ingredients)],
        "tags": [t if isinstance(t, str) else str(t) for t in _load_list(db_recipe.tags) if t is not None],
        "category": db_recipe.category,
        "avg_rating": db_recipe.avg_rating or 0.0,
        "rating_count": db_recipe.rating_count or 0,
    }


def get_recipe(db: Session, recipe_id: int):
    return db.query(models.Recipe).filter(models.Recipe.id == recipe_id).first()


def get_recipe_by_title(db: Session, title: str):
    return db.query(models.Recipe).filter(models.Recipe.title == title).first()


def get_recipes(db: Session, skip: int = 0, limit: Optional[int] = None):
    # highest rated first, unrated (0) recipes last
    query = db.query(models.Recipe).order_by(
        models.Recipe.avg_rating.desc(), models.Recipe.id
    ).offset(skip)
    if limit is not None:
        query = query.limit(limit)
    return query.all()


def create_recipe(db: Session, recipe: schemas.RecipeCreate):
    db_recipe = models.Recipe(
        title=recipe.title,
        ingredients=_dump_ingredients(recipe.ingredients),
        tags=json.dumps(recipe.tags or [], ensure_ascii=False),
        category=recipe.category,
        avg_rating=0.0,
        rating_count=0,
    )
    db.add(db_recipe)
    db.commit()
    db.refresh(db_recipe)
    return db_recipe


def update_recipe(db: Session, recipe_id: int, recipe: schemas.RecipeCreate):
    db_recipe = get_recipe(db, recipe_id)
    if not db_recipe:
        return None
    db_recipe.title = recipe.title
    db_recipe.ingredients = _dump_ingredients(recipe.ingredients)
    db_recipe.tags = json.dumps(recipe.tags or [], ensure_ascii=False)
    db_recipe.category = recipe.category
    db.add(db_recipe)
    db.commit()
    db.refresh(db_recipe)
    return db_recipe


def update_recipe_tags(db: Session, recipe_id: int, tags: List[Any]) -> bool:
    """Replace only the tags of a recipe.

    Non-string and blank entries are dropped. Returns False, without writing,
    when nothing valid is left, when the recipe does not exist, or when the
    database rejects the write.
    """
    valid = [t.strip() for t in tags or [] if isinstance(t, str) and t.strip()]
    if not valid:
        logger.warning("No valid tags to store for recipe %s", recipe_id)
        return False
    db_recipe = get_recipe(db, recipe_id)
    if not db_recipe:
        logger.warning("Recipe %s does not exist, tags not stored", recipe_id)
        return False
    try:
        db_recipe.tags = json.dumps(valid, ensure_ascii=False)
        db.add(db_recipe)
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception(
            "Failed to store tags for recipe %s",
            recipe_id,
            extra={"next_step": "report failure to caller"},
        )
        return False
    logger.info("Tags updated for recipe %s: %s", recipe_id, valid)
    return True


def delete_recipe(db: Session, recipe_id: int):
    db_recipe = get_recipe(db, recipe_id)
    if not db_recipe:
        return False
    db.delete(db_recipe)
    db.commit()
    return True


def get_preferences(db: Session, user_id: str) -> List[str]:
    row = db.get(models.UserPreferences, user_id)
    if row is None:
        return []
    return [p for p in _load_list(row.excluded_ingredients) if isinstance(p, str)]


def set_preferences(db: Session, user_id: str, preferences: List[str]) -> List[str]:
    row = db.get(models.UserPreferences, user_id)
    if row is None:
        row = models.UserPreferences(user_id=user_id)
    row.excluded_ingredients = json.dumps(list(preferences), ensure_ascii=False)
    db.add(row)
    db.commit()
    return list(preferences)

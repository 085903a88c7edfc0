"""
Store interfaces the filter and tagger consume, plus SQLAlchemy-backed
implementations of them.

The stores hand out plain dict snapshots; nothing here retries or checks for
staleness.
"""
from typing import Any, Dict, List, Optional, Protocol

from sqlalchemy.orm import Session

from . import crud


class RecipeStore(Protocol):
    def fetch_all(self) -> List[Dict[str, Any]]:
        ...

    def fetch_by_id(self, recipe_id: Any) -> Optional[Dict[str, Any]]:
        ...

    def update_tags(self, recipe_id: Any, tags: List[str]) -> bool:
        ...


class PreferencesStore(Protocol):
    def fetch_preferences(self, user_id: str) -> List[str]:
        ...


class SqlRecipeStore:
    def __init__(self, db: Session):
        self.db = db

    def fetch_all(self) -> List[Dict[str, Any]]:
        return [crud.to_dict(r) for r in crud.get_recipes(self.db)]

    def fetch_by_id(self, recipe_id: Any) -> Optional[Dict[str, Any]]:
        db_recipe = crud.get_recipe(self.db, recipe_id)
        return crud.to_dict(db_recipe) if db_recipe else None

    def update_tags(self, recipe_id: Any, tags: List[str]) -> bool:
        return crud.update_recipe_tags(self.db, recipe_id, tags)


class SqlPreferencesStore:
    def __init__(self, db: Session):
        self.db = db

    def fetch_preferences(self, user_id: str) -> List[str]:
        return crud.get_preferences(self.db, user_id)

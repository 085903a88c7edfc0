from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class IngredientEntry(BaseModel):
    name: str = Field(..., json_schema_extra={"example": "mąka"})
    amount: Optional[str] = Field(None, json_schema_extra={"example": "200 g"})


class RecipeBase(BaseModel):
    title: str = Field(
        ..., json_schema_extra={"example": "Pierogi ruskie"}
    )
    ingredients: List[Union[str, IngredientEntry]] = Field(
        default_factory=list,
        json_schema_extra={
            "example": ["500 g mąki", {"name": "ziemniaki", "amount": "1 kg"}]
        },
    )
    tags: List[str] = Field(
        default_factory=list,
        json_schema_extra={"example": ["kuchnia polska", "tradycyjne"]},
    )
    category: Optional[str] = Field(
        None, json_schema_extra={"example": "Danie główne"}
    )


class RecipeCreate(RecipeBase):
    pass


class Recipe(RecipeBase):
    id: int
    avg_rating: float = 0.0
    rating_count: int = 0

    model_config = ConfigDict(from_attributes=True)


class RecipePage(BaseModel):
    items: List[Recipe]
    total: int
    page: int
    page_size: int


class TagsUpdate(BaseModel):
    tags: List[Any]


class FilterRequest(BaseModel):
    # raw recipes: malformed shapes must reach the filter untouched
    recipes: List[Dict[str, Any]]
    preferences: List[str] = Field(default_factory=list)


class FilterResponse(BaseModel):
    recipes: List[Dict[str, Any]]
    excluded: int


class MatchRequest(BaseModel):
    ingredient: str = Field(..., json_schema_extra={"example": "2 cebulki"})
    preferences: List[str] = Field(
        default_factory=list, json_schema_extra={"example": ["cebula"]}
    )


class MatchResponse(BaseModel):
    match: bool
    preference: Optional[str] = None


class Preferences(BaseModel):
    user_id: str
    preferences: List[str]


class PreferencesUpdate(BaseModel):
    preferences: List[str]


class PreferenceAdd(BaseModel):
    ingredient: str = Field(..., json_schema_extra={"example": "Cebula"})


class BackfillResult(BaseModel):
    updated: Dict[int, List[str]]
    failed: List[int]

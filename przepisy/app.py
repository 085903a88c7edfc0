from contextlib import asynccontextmanager
from typing import Optional

from fastapi import Depends, FastAPI, HTTPException, Query, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.orm import Session

from . import crud, schemas
from .db import SessionLocal, init_db
from .filtering import filter_by_dietary_preferences, filter_for_user
from .logging_utils import get_logger
from .matching import find_match
from .preferences import PreferenceError, add_preference, remove_preference
from .recipes import in_category, search_title, with_tag
from .stores import SqlPreferencesStore, SqlRecipeStore
from .tagging import backfill_tags

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Initialize DB once at startup
    init_db()
    yield


app = FastAPI(title="przepisy", lifespan=lifespan)

# Allow CORS for API clients (adjust origins for production)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def _link_header(request: Request, page: int, page_size: int, total: int) -> str:
    links = []
    if page > 1:
        prev_url = request.url.include_query_params(page=page - 1, page_size=page_size)
        links.append(f'<{prev_url}>; rel="prev"')
    if page * page_size < total:
        next_url = request.url.include_query_params(page=page + 1, page_size=page_size)
        links.append(f'<{next_url}>; rel="next"')
    return ", ".join(links)


def _get_or_404(db: Session, recipe_id: int):
    r = crud.get_recipe(db, recipe_id)
    if not r:
        raise HTTPException(status_code=404, detail="Recipe not found")
    return r


@app.get("/health")
def health():
    return {"status": "ok"}


@app.get("/api/recipes", response_model=schemas.RecipePage)
def list_recipes(
    request: Request,
    response: Response,
    q: Optional[str] = None,
    category: Optional[str] = None,
    tag: Optional[str] = None,
    user_id: Optional[str] = None,
    page: int = Query(1, ge=1),
    page_size: int = Query(20, ge=1, le=100),
    db: Session = Depends(get_db),
):
    recipes = SqlRecipeStore(db).fetch_all()
    if q:
        recipes = search_title(recipes, q)
    if category:
        recipes = in_category(recipes, category)
    if tag:
        recipes = with_tag(recipes, tag)
    if user_id:
        recipes = filter_for_user(recipes, SqlPreferencesStore(db), user_id)

    total = len(recipes)
    start = (page - 1) * page_size
    items = recipes[start:start + page_size]
    link = _link_header(request, page, page_size, total)
    if link:
        response.headers["Link"] = link
    return {"items": items, "total": total, "page": page, "page_size": page_size}


@app.post("/api/recipes", response_model=schemas.Recipe)
def create_recipe(recipe: schemas.RecipeCreate, db: Session = Depends(get_db)):
    if crud.get_recipe_by_title(db, recipe.title):
        raise HTTPException(status_code=400, detail="Recipe with this title already exists")
    return crud.to_dict(crud.create_recipe(db, recipe))


@app.get("/api/recipes/{recipe_id}", response_model=schemas.Recipe)
def get_recipe(recipe_id: int, db: Session = Depends(get_db)):
    recipe = SqlRecipeStore(db).fetch_by_id(recipe_id)
    if recipe is None:
        raise HTTPException(status_code=404, detail="Recipe not found")
    return recipe


@app.put("/api/recipes/{recipe_id}", response_model=schemas.Recipe)
def update_recipe(recipe_id: int, recipe: schemas.RecipeCreate, db: Session = Depends(get_db)):
    existing = crud.get_recipe_by_title(db, recipe.title)
    if existing and existing.id != recipe_id:
        raise HTTPException(status_code=400, detail="Recipe with this title already exists")
    r = crud.update_recipe(db, recipe_id, recipe)
    if not r:
        raise HTTPException(status_code=404, detail="Recipe not found")
    return crud.to_dict(r)


@app.delete("/api/recipes/{recipe_id}")
def delete_recipe(recipe_id: int, db: Session = Depends(get_db)):
    if not crud.delete_recipe(db, recipe_id):
        raise HTTPException(status_code=404, detail="Recipe not found")
    return {"deleted": True}


@app.put("/api/recipes/{recipe_id}/tags", response_model=schemas.Recipe)
def update_tags(recipe_id: int, body: schemas.TagsUpdate, db: Session = Depends(get_db)):
    _get_or_404(db, recipe_id)
    if not crud.update_recipe_tags(db, recipe_id, body.tags):
        raise HTTPException(status_code=400, detail="No valid tags given")
    return crud.to_dict(crud.get_recipe(db, recipe_id))


@app.post("/api/filter", response_model=schemas.FilterResponse)
def filter_recipes(body: schemas.FilterRequest):
    kept = filter_by_dietary_preferences(body.recipes, body.preferences)
    return {"recipes": kept, "excluded": len(body.recipes) - len(kept)}


@app.post("/api/match", response_model=schemas.MatchResponse)
def match_ingredient(body: schemas.MatchRequest):
    hit = find_match(body.ingredient, body.preferences)
    return {"match": hit is not None, "preference": hit}


@app.get("/api/users/{user_id}/preferences", response_model=schemas.Preferences)
def get_preferences(user_id: str, db: Session = Depends(get_db)):
    return {"user_id": user_id, "preferences": crud.get_preferences(db, user_id)}


@app.put("/api/users/{user_id}/preferences", response_model=schemas.Preferences)
def replace_preferences(user_id: str, body: schemas.PreferencesUpdate, db: Session = Depends(get_db)):
    prefs = []
    try:
        for p in body.preferences:
            prefs = add_preference(prefs, p)
    except PreferenceError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    return {"user_id": user_id, "preferences": crud.set_preferences(db, user_id, prefs)}


@app.post("/api/users/{user_id}/preferences", response_model=schemas.Preferences)
def add_user_preference(user_id: str, body: schemas.PreferenceAdd, db: Session = Depends(get_db)):
    try:
        prefs = add_preference(crud.get_preferences(db, user_id), body.ingredient)
    except PreferenceError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    return {"user_id": user_id, "preferences": crud.set_preferences(db, user_id, prefs)}


@app.delete("/api/users/{user_id}/preferences/{ingredient}", response_model=schemas.Preferences)
def delete_user_preference(user_id: str, ingredient: str, db: Session = Depends(get_db)):
    prefs = remove_preference(crud.get_preferences(db, user_id), ingredient)
    return {"user_id": user_id, "preferences": crud.set_preferences(db, user_id, prefs)}


@app.post("/api/tags/backfill", response_model=schemas.BackfillResult)
def backfill(db: Session = Depends(get_db)):
    store = SqlRecipeStore(db)
    report = backfill_tags(store.fetch_all(), store)
    logger.info(
        "Tag backfill finished: %d updated, %d failed",
        len(report.updated),
        len(report.failed),
    )
    return {"updated": report.updated, "failed": report.failed}

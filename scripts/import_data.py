import json
from pathlib import Path

from przepisy import models
from przepisy.db import SessionLocal, init_db
from przepisy.logging_utils import get_logger

logger = get_logger("przepisy.import_data")


def main():
    init_db()
    p = Path(__file__).resolve().parents[1] / 'data' / 'recipes.json'
    if not p.exists():
        logger.error('data/recipes.json not found')
        return
    data = json.loads(p.read_text(encoding='utf-8'))
    db = SessionLocal()
    added = 0
    try:
        for r in data:
            title = r.get('title')
            if not title:
                continue
            exists = (
                db.query(models.Recipe)
                .filter(models.Recipe.title == title)
                .first()
            )
            if exists:
                continue
            recipe = models.Recipe(
                title=title,
                ingredients=json.dumps(r.get('ingredients', []), ensure_ascii=False),
                tags=json.dumps(r.get('tags', []), ensure_ascii=False),
                category=r.get('category'),
                avg_rating=r.get('avg_rating', 0.0),
                rating_count=r.get('rating_count', 0),
            )
            db.add(recipe)
            added += 1
        db.commit()
    finally:
        db.close()
    logger.info('Imported %d recipes', added)


if __name__ == '__main__':
    main()

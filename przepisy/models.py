from sqlalchemy import Column, Float, Integer, String, Text

from .db import Base


class Recipe(Base):
    __tablename__ = "recipes"
    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(200), unique=True, index=True, nullable=False)
    ingredients = Column(Text, nullable=True)  # JSON-encoded list
    tags = Column(Text, nullable=True)  # JSON-encoded list
    category = Column(String(100), nullable=True, index=True)
    avg_rating = Column(Float, nullable=False, default=0.0)
    rating_count = Column(Integer, nullable=False, default=0)


class UserPreferences(Base):
    __tablename__ = "user_preferences"
    user_id = Column(String(128), primary_key=True)
    excluded_ingredients = Column(Text, nullable=True)  # JSON-encoded list

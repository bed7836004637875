from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from recipe_catalog.core.deps import get_store
from recipe_catalog.db.memory import MemoryRecipeStore
from recipe_catalog.main import app


def recipe(title, rating=None, calories=None, **extra):
    doc = {"title": title, "rating": rating, "nutrients": {}}
    if calories is not None:
        doc["nutrients"]["calories"] = calories
    doc.update(extra)
    return doc


SAMPLE = [
    recipe("Sweet Potato Pie", 4.8, "389 kcal", cuisine="Southern Recipes", total_time=115, prep_time=15, cook_time=100, serves="8 servings"),
    recipe("Chicken Pot Pie", 4.8, "512 kcal", cuisine="Chicken Pie Recipes", total_time=80, prep_time=20, cook_time=60, serves="6"),
    recipe("Garden Salad", 4.2, "150 kcal", cuisine="Salad Recipes", total_time=10, prep_time=10, cook_time=0, serves="4 to 6"),
    recipe("Mystery Stew", None, "kcal", cuisine="Stew Recipes", total_time=None, serves=None),
]


@pytest.fixture
def store():
    return MemoryRecipeStore(SAMPLE)


@pytest.fixture
def client(store):
    app.dependency_overrides[get_store] = lambda: store
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()

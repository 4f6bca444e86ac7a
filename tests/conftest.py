import os
import sys
from datetime import date

import pytest

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from app import create_app
from models import db, Recipe, RecipeIngredient, MealPlan, PantryStaple
from utils.auth import hash_password

HOUSEHOLD_PASSWORD = 'weeknight-dinners'
WEEK = date(2025, 2, 17)


@pytest.fixture
def app():
    app = create_app('testing', HOUSEHOLD_PASSWORD_HASH=hash_password(HOUSEHOLD_PASSWORD))
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def auth_client(client):
    response = client.post('/api/auth/login', json={'password': HOUSEHOLD_PASSWORD})
    assert response.status_code == 200
    return client


@pytest.fixture
def make_recipe(app):
    """Create a recipe from (name, quantity, unit[, is_gluten_flag]) tuples."""
    def _make(name, ingredients, servings=2, **fields):
        recipe = Recipe(name=name, servings=servings, **fields)
        recipe.ingredients = [
            RecipeIngredient(
                name=ing[0], quantity=ing[1], unit=ing[2],
                is_gluten_flag=ing[3] if len(ing) > 3 else False,
                sort_order=position,
            )
            for position, ing in enumerate(ingredients)
        ]
        db.session.add(recipe)
        db.session.commit()
        return recipe
    return _make


@pytest.fixture
def plan_day(app):
    def _plan(recipe, day_of_week, week_start=WEEK, status='PLANNED'):
        day = MealPlan(
            week_start=week_start, day_of_week=day_of_week, status=status,
            recipe_id=recipe.id if recipe is not None else None,
        )
        db.session.add(day)
        db.session.commit()
        return day
    return _plan


@pytest.fixture
def pantry(app):
    def _add(*names):
        db.session.add_all([PantryStaple(name=name) for name in names])
        db.session.commit()
    return _add

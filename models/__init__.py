"""
Models Package

Exports all database models and the db instance for use throughout the application.
"""

from .base import db

from .recipe import Recipe, RecipeIngredient, RecipeTag
from .mealplan import MealPlan
from .grocery import GroceryList, GroceryItem, PantryStaple
from .settings import HouseholdSettings, HOUSEHOLD_NAME_KEY, DEFAULT_HOUSEHOLD_NAME

__all__ = [
    'db',
    'Recipe',
    'RecipeIngredient',
    'RecipeTag',
    'MealPlan',
    'GroceryList',
    'GroceryItem',
    'PantryStaple',
    'HouseholdSettings',
    'HOUSEHOLD_NAME_KEY',
    'DEFAULT_HOUSEHOLD_NAME',
]

"""
Validation Constants

Contains whitelist values for validating user input to prevent
injection attacks and ensure data integrity.
"""

from .categories import CATEGORY_ORDER

# Valid grocery item categories
VALID_ITEM_CATEGORIES = frozenset(CATEGORY_ORDER)

# Valid meal plan day statuses
VALID_DAY_STATUSES = {'PLANNED', 'EATING_OUT', 'LEFTOVERS', 'SKIP'}

# Valid recipe gluten-free review states
VALID_GF_STATUSES = {'CONFIRMED_GF', 'CONTAINS_GLUTEN', 'NEEDS_REVIEW'}

# Valid recipe tag types
VALID_TAG_TYPES = {'PROTEIN', 'VEGGIE', 'CARB', 'CUISINE'}

# Recipe import sources
VALID_IMPORT_TYPES = {'url', 'text', 'image'}

# Image media types accepted by the recipe parser
ALLOWED_IMAGE_MEDIA_TYPES = {'image/jpeg', 'image/png', 'image/webp', 'image/gif'}

GF_STATUS_LABELS = {
    'CONFIRMED_GF': 'Confirmed GF',
    'CONTAINS_GLUTEN': 'Contains Gluten',
    'NEEDS_REVIEW': 'Needs Review',
}

# Maximum field lengths
MAX_LENGTHS = {
    'recipe_name': 200,
    'ingredient_name': 200,
    'ingredient_quantity': 50,
    'unit': 50,
    'notes': 2000,
    'instructions': 50000,
    'source_url': 500,
    'tag_value': 100,
    'pantry_name': 100,
    'grocery_name': 200,
    'household_name': 100,
    'import_text': 50000,
}

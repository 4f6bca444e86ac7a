"""
Services Package

Business logic modules for the meal planner.
"""

from .quantity import (
    parse_quantity,
    format_quantity,
    scale_quantity,
    parse_instructions,
)

from .categories import (
    CategoryClassifier,
    detect_category,
)

from .pantry import (
    PantryMatcher,
    build_pantry_set,
    matches_pantry,
)

from .consolidation import (
    RawIngredient,
    ConsolidatedIngredient,
    consolidate_ingredients,
)

from .grocery import (
    generate_grocery_list,
    sort_items_for_display,
)

__all__ = [
    # Quantity
    'parse_quantity',
    'format_quantity',
    'scale_quantity',
    'parse_instructions',
    # Categories
    'CategoryClassifier',
    'detect_category',
    # Pantry
    'PantryMatcher',
    'build_pantry_set',
    'matches_pantry',
    # Consolidation
    'RawIngredient',
    'ConsolidatedIngredient',
    'consolidate_ingredients',
    # Grocery
    'generate_grocery_list',
    'sort_items_for_display',
]

"""
Consolidation Service

Merges the ingredient lists of several recipes into one deduplicated set of
grocery lines.
"""

from dataclasses import dataclass
from typing import Optional

from .quantity import parse_quantity, format_quantity


@dataclass(frozen=True)
class RawIngredient:
    """An ingredient as copied out of a recipe at generation time."""

    name: str
    quantity: str
    unit: Optional[str] = None
    is_gluten_flag: bool = False

    @classmethod
    def snapshot(cls, recipe_ingredient):
        """Copy the grocery-relevant fields of a stored recipe ingredient.

        Notes and gluten-free substitutes stay with the recipe.
        """
        return cls(
            name=recipe_ingredient.name,
            quantity=recipe_ingredient.quantity or '',
            unit=recipe_ingredient.unit,
            is_gluten_flag=bool(recipe_ingredient.is_gluten_flag),
        )


@dataclass(frozen=True)
class ConsolidatedIngredient:
    """One grocery line produced by consolidation."""

    name: str
    quantity: Optional[str]
    unit: Optional[str]
    is_gluten_flag: bool


def consolidation_key(ingredient):
    """Group key: normalized name and normalized unit."""
    return (ingredient.name.lower().strip(), (ingredient.unit or '').lower().strip())


def consolidate_ingredients(ingredients):
    """
    Merge a flat list of recipe ingredients into a deduplicated grocery list.

    - Groups by (normalized name, normalized unit)
    - Sums quantities when every member of a group parses as a number
    - Otherwise joins the non-empty quantity strings with " + "
    - Keeps the name casing and unit of the first occurrence
    - Flags gluten if any member is flagged

    Output follows the order in which each group was first seen.
    """
    groups = {}
    for ing in ingredients:
        groups.setdefault(consolidation_key(ing), []).append(ing)

    return [_merge_group(group) for group in groups.values()]


def _merge_group(group):
    first = group[0]
    if len(group) == 1:
        return ConsolidatedIngredient(
            name=first.name,
            quantity=_clean_quantity(first.quantity),
            unit=first.unit,
            is_gluten_flag=first.is_gluten_flag,
        )

    is_gluten_flag = any(ing.is_gluten_flag for ing in group)
    nums = [parse_quantity(ing.quantity) for ing in group]
    if all(n is not None for n in nums):
        quantity = format_quantity(sum(nums))
    else:
        # Empty quantities drop out of the joined text
        quantity = ' + '.join(ing.quantity for ing in group if _clean_quantity(ing.quantity)) or None

    return ConsolidatedIngredient(
        name=first.name,
        quantity=quantity,
        unit=first.unit,
        is_gluten_flag=is_gluten_flag,
    )


def _clean_quantity(quantity):
    if quantity is None or not quantity.strip():
        return None
    return quantity

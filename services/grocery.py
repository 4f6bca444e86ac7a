"""
Grocery List Service

Builds and regenerates a week's grocery list from its planned meals.
Manual items are never touched by generation.
"""

import logging
from datetime import date, datetime

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import joinedload

from constants import CATEGORY_ORDER
from models import db, GroceryItem, GroceryList, MealPlan, PantryStaple, Recipe
from .categories import default_classifier
from .consolidation import RawIngredient, consolidate_ingredients
from .notifications import notify_grocery_change
from .pantry import PantryMatcher
from .week import InvalidWeekStart

logger = logging.getLogger(__name__)

_CATEGORY_RANK = {category: rank for rank, category in enumerate(CATEGORY_ORDER)}


def sort_items_for_display(items):
    """Pantry-check items first, then category display order, then sort order."""
    return sorted(
        items,
        key=lambda item: (
            not item.is_pantry_check,
            _CATEGORY_RANK.get(item.category, len(CATEGORY_ORDER)),
            item.sort_order,
            item.id or 0,
        ),
    )


def serialize_grocery_list(grocery_list):
    """JSON shape of a list with its items in display order."""
    return grocery_list.to_dict(items=sort_items_for_display(grocery_list.items))


def collect_planned_ingredients(week_start):
    """Snapshot the ingredients of every PLANNED day with a recipe."""
    planned_days = (
        MealPlan.query
        .options(joinedload(MealPlan.recipe).joinedload(Recipe.ingredients))
        .filter(
            MealPlan.week_start == week_start,
            MealPlan.status == 'PLANNED',
            MealPlan.recipe_id.isnot(None),
        )
        .order_by(MealPlan.day_of_week)
        .all()
    )
    return [
        RawIngredient.snapshot(ri)
        for day in planned_days if day.recipe is not None
        for ri in day.recipe.ingredients
    ]


def load_pantry_matcher():
    return PantryMatcher(name for (name,) in db.session.query(PantryStaple.name))


def build_auto_items(consolidated, pantry_matcher, classifier=None):
    """Turn consolidated ingredients into unsaved auto-generated grocery items."""
    classifier = classifier or default_classifier
    return [
        GroceryItem(
            name=ing.name,
            quantity=ing.quantity,
            unit=ing.unit,
            category=classifier.detect(ing.name),
            is_pantry_check=pantry_matcher.matches(ing.name),
            is_manual=False,
            is_quick_trip=False,
            is_checked=False,
            sort_order=position,
        )
        for position, ing in enumerate(consolidated)
    ]


def next_sort_order(list_id):
    """Sort order that places a new item after every existing one."""
    last = (
        db.session.query(GroceryItem.sort_order)
        .filter(GroceryItem.list_id == list_id)
        .order_by(GroceryItem.sort_order.desc())
        .first()
    )
    return (last[0] if last else -1) + 1


def _delete_auto_items(grocery_list):
    return (
        GroceryItem.query
        .filter(GroceryItem.list_id == grocery_list.id, GroceryItem.is_manual.is_(False))
        .delete(synchronize_session='fetch')
    )


def _insert_items(grocery_list, items):
    for item in items:
        item.list_id = grocery_list.id
    db.session.add_all(items)
    db.session.flush()


def locked_list_query(week_start):
    """Query for the week's list that row-locks it until commit (no-op on SQLite)."""
    return GroceryList.query.filter_by(week_start=week_start).with_for_update()


def _replace_auto_items(week_start, items):
    """
    Create the list or swap its auto items, in a single transaction.

    Regenerations of an existing list are serialized by its row lock.
    """
    grocery_list = locked_list_query(week_start).first()
    if grocery_list is None:
        grocery_list = GroceryList(week_start=week_start)
        db.session.add(grocery_list)
        db.session.flush()
        removed = 0
    else:
        removed = _delete_auto_items(grocery_list)
    _insert_items(grocery_list, items)
    db.session.commit()
    return grocery_list, removed


def generate_grocery_list(week_start, classifier=None):
    """
    Generate (or regenerate) the grocery list for a week.

    1. Snapshot the ingredients of every planned day with a recipe
    2. Consolidate duplicates across recipes
    3. Classify each line and flag pantry staples
    4. Replace the list's auto-generated items (manual items are kept),
       creating the list if this is the first generation for the week

    Step 4 commits as one transaction; on failure the session is rolled back
    and the error re-raised, leaving the previous items in place.

    Returns the GroceryList.
    """
    if week_start is None:
        raise InvalidWeekStart('weekStart is required')
    if not isinstance(week_start, date) or isinstance(week_start, datetime):
        raise InvalidWeekStart(f'weekStart must be a date, got {week_start!r}')

    consolidated = consolidate_ingredients(collect_planned_ingredients(week_start))
    pantry_matcher = load_pantry_matcher()
    auto_items = build_auto_items(consolidated, pantry_matcher, classifier)

    try:
        grocery_list, removed = _replace_auto_items(week_start, auto_items)
    except IntegrityError:
        # Another request created the list first; regenerate into it
        db.session.rollback()
        logger.info("Grocery list for %s created concurrently, retrying", week_start)
        auto_items = build_auto_items(consolidated, pantry_matcher, classifier)
        try:
            grocery_list, removed = _replace_auto_items(week_start, auto_items)
        except Exception:
            db.session.rollback()
            raise
    except Exception:
        db.session.rollback()
        raise

    logger.info(
        "Generated grocery list for %s: %d items (%d pantry checks), replaced %d",
        week_start, len(auto_items), sum(1 for item in auto_items if item.is_pantry_check), removed,
    )
    notify_grocery_change(week_start, 'generated', list_id=grocery_list.id)
    return grocery_list

"""Tests for generating a week's grocery list from its meal plan."""

from datetime import date, datetime

import pytest
from sqlalchemy.dialects import postgresql
from sqlalchemy.exc import IntegrityError

import services.grocery as grocery_service
from models import db, GroceryItem, GroceryList
from services.categories import CategoryClassifier
from services.grocery import generate_grocery_list, locked_list_query, sort_items_for_display
from services.notifications import grocery_list_changed
from services.week import InvalidWeekStart

from conftest import WEEK

pytestmark = pytest.mark.usefixtures('app')


def item_names(grocery_list):
    return sorted(item.name for item in grocery_list.items)


def test_generate_creates_list(make_recipe, plan_day, pantry):
    tacos = make_recipe('Chicken Tacos', [
        ('chicken thighs', '1', 'lb'),
        ('tortillas', '8', None),
        ('olive oil', '1', 'tbsp'),
    ])
    plan_day(tacos, 0)
    pantry('olive oil')

    grocery_list = generate_grocery_list(WEEK)

    assert grocery_list.week_start == WEEK
    items = {item.name: item for item in grocery_list.items}
    assert set(items) == {'chicken thighs', 'tortillas', 'olive oil'}
    assert items['chicken thighs'].category == 'PROTEIN'
    assert items['tortillas'].category == 'DRY_GOODS'
    assert items['olive oil'].is_pantry_check is True
    assert items['chicken thighs'].is_pantry_check is False
    assert all(not item.is_manual and not item.is_checked and not item.is_quick_trip for item in items.values())
    assert [items[n].sort_order for n in ('chicken thighs', 'tortillas', 'olive oil')] == [0, 1, 2]


def test_generate_consolidates_across_recipes(make_recipe, plan_day):
    soup = make_recipe('Tomato Soup', [('Tomato', '2', None), ('garlic', '2', 'cloves')])
    salad = make_recipe('Caprese', [('tomato', '3', None), ('mozzarella', '8', 'oz')])
    plan_day(soup, 0)
    plan_day(salad, 2)

    grocery_list = generate_grocery_list(WEEK)

    tomato = [item for item in grocery_list.items if item.name.lower() == 'tomato']
    assert len(tomato) == 1
    assert tomato[0].name == 'Tomato'
    assert tomato[0].quantity == '5'


def test_only_planned_days_with_recipes_count(make_recipe, plan_day):
    pasta = make_recipe('Pasta', [('spaghetti', '1', 'lb')])
    curry = make_recipe('Curry', [('coconut milk', '1', 'can')])
    plan_day(pasta, 0)
    plan_day(curry, 1, status='EATING_OUT')
    plan_day(None, 2)
    plan_day(curry, 0, week_start=date(2025, 2, 24))

    grocery_list = generate_grocery_list(WEEK)

    assert item_names(grocery_list) == ['spaghetti']


def test_empty_plan_gives_empty_list():
    grocery_list = generate_grocery_list(WEEK)
    assert grocery_list.id is not None
    assert grocery_list.items == []


def test_regeneration_preserves_manual_items(make_recipe, plan_day):
    first = make_recipe('Stir Fry', [('broccoli', '1', 'head'), ('rice', '2', 'cups')])
    plan_day(first, 0)
    grocery_list = generate_grocery_list(WEEK)

    manual = GroceryItem(
        list_id=grocery_list.id, name='paper towels', quantity='1', category='OTHER',
        is_manual=True, is_checked=True, sort_order=10,
    )
    db.session.add(manual)
    db.session.commit()
    manual_id = manual.id

    second = make_recipe('Salmon Bowls', [('salmon', '1', 'lb')])
    plan_day(second, 3)
    regenerated = generate_grocery_list(WEEK)

    assert regenerated.id == grocery_list.id
    assert item_names(regenerated) == ['broccoli', 'paper towels', 'rice', 'salmon']
    kept = db.session.get(GroceryItem, manual_id)
    assert kept.is_manual is True
    assert kept.is_checked is True
    assert kept.quantity == '1'
    assert kept.sort_order == 10


def test_regeneration_resets_check_state(make_recipe, plan_day):
    recipe = make_recipe('Omelette', [('eggs', '3', None)])
    plan_day(recipe, 0)
    grocery_list = generate_grocery_list(WEEK)
    grocery_list.items[0].is_checked = True
    db.session.commit()

    regenerated = generate_grocery_list(WEEK)

    assert [item.is_checked for item in regenerated.items] == [False]


def test_regeneration_is_idempotent(make_recipe, plan_day):
    recipe = make_recipe('Chili', [('ground beef', '1', 'lb'), ('kidney beans', '1', 'can')])
    plan_day(recipe, 4)

    generate_grocery_list(WEEK)
    generate_grocery_list(WEEK)

    assert GroceryList.query.count() == 1
    assert GroceryItem.query.count() == 2


def test_manual_and_auto_items_are_not_deduplicated(make_recipe, plan_day):
    recipe = make_recipe('Garlic Bread', [('garlic', '3', 'cloves')])
    plan_day(recipe, 0)
    grocery_list = generate_grocery_list(WEEK)
    db.session.add(GroceryItem(list_id=grocery_list.id, name='garlic', is_manual=True, sort_order=5))
    db.session.commit()

    regenerated = generate_grocery_list(WEEK)

    assert [item.name for item in regenerated.items].count('garlic') == 2


def test_failed_regeneration_leaves_items_unchanged(make_recipe, plan_day, monkeypatch):
    recipe = make_recipe('Pancakes', [('flour', '2', 'cups'), ('milk', '1', 'cup')])
    plan_day(recipe, 5)
    grocery_list = generate_grocery_list(WEEK)
    db.session.add(GroceryItem(list_id=grocery_list.id, name='coffee', is_manual=True, sort_order=9))
    db.session.commit()
    before = sorted((item.name, item.quantity, item.is_manual) for item in GroceryItem.query.all())

    other = make_recipe('Waffles', [('butter', '4', 'tbsp')])
    plan_day(other, 6)

    def failing_insert(grocery_list, items):
        db.session.flush()
        raise RuntimeError('insert failed')

    monkeypatch.setattr(grocery_service, '_insert_items', failing_insert)

    with pytest.raises(RuntimeError):
        generate_grocery_list(WEEK)

    after = sorted((item.name, item.quantity, item.is_manual) for item in GroceryItem.query.all())
    assert after == before


def test_failed_first_generation_creates_no_list(make_recipe, plan_day, monkeypatch):
    recipe = make_recipe('Soup', [('carrot', '2', None)])
    plan_day(recipe, 0)

    def failing_insert(grocery_list, items):
        raise RuntimeError('insert failed')

    monkeypatch.setattr(grocery_service, '_insert_items', failing_insert)

    with pytest.raises(RuntimeError):
        generate_grocery_list(WEEK)

    assert GroceryList.query.count() == 0


def test_concurrent_first_generation_retries_into_existing_list(make_recipe, plan_day, monkeypatch):
    recipe = make_recipe('Fried Rice', [('rice', '2', 'cups')])
    plan_day(recipe, 2)
    replace = grocery_service._replace_auto_items
    calls = []

    def lose_create_race(week_start, items):
        calls.append(week_start)
        if len(calls) == 1:
            # Another request commits the week's list with a manual item first
            rival = GroceryList(week_start=week_start)
            rival.items = [GroceryItem(name='coffee', is_manual=True, sort_order=0)]
            db.session.add(rival)
            db.session.commit()
            raise IntegrityError('INSERT INTO grocery_list', {}, Exception('UNIQUE constraint failed'))
        return replace(week_start, items)

    monkeypatch.setattr(grocery_service, '_replace_auto_items', lose_create_race)

    grocery_list = generate_grocery_list(WEEK)

    assert len(calls) == 2
    assert GroceryList.query.count() == 1
    assert grocery_list.id == GroceryList.query.one().id
    assert sorted((item.name, item.is_manual) for item in grocery_list.items) == [
        ('coffee', True), ('rice', False),
    ]


def test_regeneration_locks_the_list_row():
    statement = locked_list_query(WEEK).statement.compile(dialect=postgresql.dialect())
    assert 'FOR UPDATE' in str(statement)


@pytest.mark.parametrize('bad', [None, '2025-02-17', datetime(2025, 2, 17, 9, 0)])
def test_invalid_week_start_rejected(bad):
    with pytest.raises(InvalidWeekStart):
        generate_grocery_list(bad)
    assert GroceryList.query.count() == 0


def test_custom_classifier(make_recipe, plan_day):
    recipe = make_recipe('Snack Plate', [('pretzels', '1', 'bag'), ('hummus', '1', 'tub')])
    plan_day(recipe, 0)
    classifier = CategoryClassifier(keywords={'DRY_GOODS': ['pretzel']}, order=['DRY_GOODS'])

    grocery_list = generate_grocery_list(WEEK, classifier=classifier)

    categories = {item.name: item.category for item in grocery_list.items}
    assert categories == {'pretzels': 'DRY_GOODS', 'hummus': 'OTHER'}


def test_generation_sends_notification(make_recipe, plan_day):
    received = []

    def on_change(sender, **kwargs):
        received.append((sender, kwargs['action']))

    with grocery_list_changed.connected_to(on_change):
        generate_grocery_list(WEEK)

    assert received == [('grocery-list:2025-02-17', 'generated')]


def test_sort_items_for_display():
    items = [
        GroceryItem(id=1, name='rice', category='DRY_GOODS', is_pantry_check=False, sort_order=0),
        GroceryItem(id=2, name='salt', category='DRY_GOODS', is_pantry_check=True, sort_order=1),
        GroceryItem(id=3, name='spinach', category='PRODUCE', is_pantry_check=False, sort_order=2),
        GroceryItem(id=4, name='chicken', category='PROTEIN', is_pantry_check=False, sort_order=3),
        GroceryItem(id=5, name='kale', category='PRODUCE', is_pantry_check=False, sort_order=1),
        GroceryItem(id=6, name='foil', category='OTHER', is_pantry_check=False, sort_order=0),
    ]
    assert [item.name for item in sort_items_for_display(items)] == [
        'salt', 'kale', 'spinach', 'chicken', 'rice', 'foil',
    ]

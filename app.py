"""
Mise Application

Application factory and JSON API for the household meal planner:
recipes, weekly meal plans, grocery lists, pantry staples and settings.
"""

import logging
import sqlite3

import requests
from flask import Blueprint, Flask, current_app, jsonify, request
from flask_migrate import Migrate
from sqlalchemy import event, or_
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import selectinload
from werkzeug.exceptions import HTTPException

from config import get_config
from constants import (
    DEFAULT_PANTRY_STAPLES, MAX_LENGTHS, VALID_DAY_STATUSES, VALID_GF_STATUSES,
    VALID_IMPORT_TYPES, VALID_ITEM_CATEGORIES, VALID_TAG_TYPES, ALLOWED_IMAGE_MEDIA_TYPES,
)
from models import (
    db, Recipe, RecipeIngredient, RecipeTag, MealPlan, GroceryList, GroceryItem,
    PantryStaple, HouseholdSettings, HOUSEHOLD_NAME_KEY, DEFAULT_HOUSEHOLD_NAME,
)
from services.categories import detect_category
from services.grocery import generate_grocery_list, next_sort_order, serialize_grocery_list
from services.notifications import notify_grocery_change
from services.pantry import normalize_staple_name
from services.quantity import scale_quantity
from services.recipe_import import RecipeParseError, get_recipe_parser
from services.week import InvalidWeekStart, add_weeks, describe_week, from_iso_date, get_week_start
from utils.auth import (
    check_household_password, is_authorized, login_household, login_required, logout_household,
)
from utils.image_handler import ImageValidationError
from utils.sanitizer import clean_name, clean_optional, clean_text, sanitize_url, to_int
from utils.url_validator import SSRFError

logger = logging.getLogger(__name__)

migrate = Migrate()
api = Blueprint('api', __name__, url_prefix='/api')


@event.listens_for(Engine, "connect")
def set_sqlite_pragma(dbapi_connection, connection_record):
    # Enable SQLite foreign key enforcement
    if isinstance(dbapi_connection, sqlite3.Connection):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def json_body():
    """The request's JSON object, or {} for a missing or non-object body."""
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def error_response(message, status=400):
    return jsonify({'error': message}), status


def parse_bool(value):
    if isinstance(value, bool):
        return value
    return str(value).lower() in ('true', '1', 'yes')


# ============================================
# ROUTES - AUTH
# ============================================

@api.route('/auth/login', methods=['POST'])
def auth_login():
    password = json_body().get('password')
    if not check_household_password(password):
        logger.warning("Failed household login from %s", request.remote_addr)
        return error_response('Incorrect password', 401)
    login_household()
    return jsonify({'authenticated': True})


@api.route('/auth/logout', methods=['POST'])
def auth_logout():
    logout_household()
    return jsonify({'authenticated': False})


@api.route('/auth/session')
def auth_session():
    return jsonify({'authenticated': is_authorized()})


# ============================================
# ROUTES - RECIPES
# ============================================

def _recipe_query():
    return Recipe.query.options(selectinload(Recipe.ingredients), selectinload(Recipe.tags))


def _build_ingredients(raw_ingredients):
    ingredients = []
    for position, raw in enumerate(raw_ingredients):
        if not isinstance(raw, dict):
            raise ValueError('Each ingredient must be an object')
        name = clean_name(raw.get('name'), MAX_LENGTHS['ingredient_name'])
        if not name:
            raise ValueError('Each ingredient needs a name')
        quantity = raw.get('quantity')
        ingredients.append(RecipeIngredient(
            name=name,
            quantity=clean_name('' if quantity is None else quantity, MAX_LENGTHS['ingredient_quantity']),
            unit=clean_optional(raw.get('unit'), MAX_LENGTHS['unit']),
            notes=clean_optional(raw.get('notes'), MAX_LENGTHS['notes']),
            is_gluten_flag=bool(raw.get('isGlutenFlag')),
            gf_substitute=clean_optional(raw.get('gfSubstitute'), MAX_LENGTHS['ingredient_name']),
            sort_order=position,
        ))
    return ingredients


def _build_tags(raw_tags):
    tags = []
    for raw in raw_tags:
        if not isinstance(raw, dict):
            raise ValueError('Each tag must be an object')
        tag_type = str(raw.get('type', '')).upper()
        if tag_type not in VALID_TAG_TYPES:
            raise ValueError(f"Invalid tag type: {raw.get('type')}")
        value = clean_name(raw.get('value'), MAX_LENGTHS['tag_value'])
        if value:
            tags.append(RecipeTag(type=tag_type, value=value))
    return tags


def apply_recipe_payload(recipe, data):
    """
    Copy a recipe payload onto a Recipe, replacing its ingredients and tags.

    Raises ValueError with a client-facing message for invalid input.
    """
    name = clean_name(data.get('name'), MAX_LENGTHS['recipe_name'])
    if not name:
        raise ValueError('Recipe name is required')

    gf_status = data.get('gfStatus') or 'NEEDS_REVIEW'
    if gf_status not in VALID_GF_STATUSES:
        raise ValueError(f'Invalid gfStatus: {gf_status}')

    raw_ingredients = data.get('ingredients') or []
    raw_tags = data.get('tags') or []
    if not isinstance(raw_ingredients, list) or not isinstance(raw_tags, list):
        raise ValueError('ingredients and tags must be lists')
    ingredients = _build_ingredients(raw_ingredients)
    tags = _build_tags(raw_tags)

    recipe.name = name
    recipe.source_url = sanitize_url(data.get('sourceUrl'), MAX_LENGTHS['source_url'])
    recipe.total_time = to_int(data.get('totalTime'), min_val=0)
    recipe.active_cook_time = to_int(data.get('activeCookTime'), min_val=0)
    recipe.pots_and_pans = to_int(data.get('potsAndPans'), min_val=0)
    recipe.servings = to_int(data.get('servings'), default=2, min_val=1, max_val=100)
    recipe.instructions = clean_text(data.get('instructions'), MAX_LENGTHS['instructions'])
    recipe.gf_status = gf_status
    recipe.gf_notes = clean_optional(data.get('gfNotes'), MAX_LENGTHS['notes'])
    recipe.notes = clean_optional(data.get('notes'), MAX_LENGTHS['notes'])
    recipe.favorite = bool(data.get('favorite'))
    recipe.ingredients = ingredients
    recipe.tags = tags
    return recipe


@api.route('/recipes')
@login_required
def recipes_list():
    search = request.args.get('search', '').strip()
    gf_only = parse_bool(request.args.get('gfOnly', 'false'))
    favorites_only = parse_bool(request.args.get('favoritesOnly', 'false'))
    max_time = to_int(request.args.get('maxTime'), min_val=0)
    protein = request.args.get('protein', '').strip()

    query = _recipe_query()
    if search:
        pattern = f'%{search}%'
        query = query.filter(or_(
            Recipe.name.ilike(pattern),
            Recipe.ingredients.any(RecipeIngredient.name.ilike(pattern)),
        ))
    if gf_only:
        query = query.filter(Recipe.gf_status == 'CONFIRMED_GF')
    if favorites_only:
        query = query.filter(Recipe.favorite.is_(True))
    if max_time:
        query = query.filter(Recipe.total_time <= max_time)
    if protein:
        query = query.filter(Recipe.tags.any(
            (RecipeTag.type == 'PROTEIN') & RecipeTag.value.ilike(f'%{protein}%')
        ))

    recipes = query.order_by(Recipe.favorite.desc(), Recipe.created_at.desc(), Recipe.id.desc()).all()
    return jsonify([recipe.to_dict() for recipe in recipes])


@api.route('/recipes', methods=['POST'])
@login_required
def recipe_create():
    try:
        recipe = apply_recipe_payload(Recipe(), json_body())
    except ValueError as e:
        return error_response(str(e))
    db.session.add(recipe)
    db.session.commit()
    logger.info("Created recipe %d (%s)", recipe.id, recipe.name)
    return jsonify(recipe.to_dict()), 201


@api.route('/recipes/<int:id>')
@login_required
def recipe_detail(id):
    recipe = _recipe_query().filter(Recipe.id == id).first_or_404()
    return jsonify(recipe.to_dict())


@api.route('/recipes/<int:id>', methods=['PUT'])
@login_required
def recipe_update(id):
    recipe = db.get_or_404(Recipe, id)
    try:
        apply_recipe_payload(recipe, json_body())
    except ValueError as e:
        db.session.rollback()
        return error_response(str(e))
    db.session.commit()
    return jsonify(recipe.to_dict())


@api.route('/recipes/<int:id>', methods=['DELETE'])
@login_required
def recipe_delete(id):
    recipe = db.get_or_404(Recipe, id)

    # Planned days keep their slot but lose the recipe link
    MealPlan.query.filter_by(recipe_id=id).update({'recipe_id': None})

    db.session.delete(recipe)
    db.session.commit()
    logger.info("Deleted recipe %d", id)
    return jsonify({'success': True})


@api.route('/recipes/<int:id>/favorite', methods=['POST'])
@login_required
def recipe_toggle_favorite(id):
    recipe = db.get_or_404(Recipe, id)
    recipe.favorite = not recipe.favorite
    db.session.commit()
    return jsonify({'id': recipe.id, 'favorite': recipe.favorite})


@api.route('/recipes/<int:id>/scaled')
@login_required
def recipe_scaled(id):
    recipe = _recipe_query().filter(Recipe.id == id).first_or_404()
    servings = to_int(request.args.get('servings'))
    if servings is None or servings < 1:
        return error_response('servings must be a whole number of at least 1')

    ingredients = []
    for ing in recipe.ingredients:
        data = ing.to_dict()
        data['quantity'] = scale_quantity(ing.quantity, recipe.servings, servings)
        ingredients.append(data)

    return jsonify({
        'recipeId': recipe.id,
        'originalServings': recipe.servings,
        'servings': servings,
        'ingredients': ingredients,
    })


@api.route('/recipes/import', methods=['POST'])
@login_required
def recipe_import():
    """Parse a recipe from a URL, pasted text or a photo. Returns a preview."""
    data = json_body()

    if not current_app.config.get('ANTHROPIC_API_KEY'):
        return error_response('ANTHROPIC_API_KEY is not configured.', 503)

    import_type = data.get('type')
    if import_type not in VALID_IMPORT_TYPES:
        return error_response("type must be 'url', 'text', or 'image'")

    try:
        parser = get_recipe_parser(current_app.config)

        if import_type == 'url':
            url = sanitize_url(data.get('url'), MAX_LENGTHS['source_url'])
            if not url:
                return error_response('A valid http(s) url is required')
            recipe = parser.parse_url(url)

        elif import_type == 'text':
            text = clean_text(data.get('text'), MAX_LENGTHS['import_text'])
            if not text:
                return error_response('text is required')
            recipe = parser.parse_text(text)

        else:
            image_data = data.get('imageData')
            media_type = data.get('mediaType')
            if not image_data or not isinstance(image_data, str):
                return error_response('imageData is required')
            if media_type not in ALLOWED_IMAGE_MEDIA_TYPES:
                return error_response('Unsupported image type')
            recipe = parser.parse_image(image_data, media_type)

    except SSRFError as e:
        return error_response(f'URL blocked for security: {e}')
    except ImageValidationError as e:
        return error_response(str(e))
    except requests.RequestException as e:
        logger.warning("[POST /api/recipes/import] fetch failed: %s", e)
        return error_response(f'Could not fetch URL: {e}', 502)
    except RecipeParseError as e:
        logger.warning("[POST /api/recipes/import] parse failed: %s", e)
        return error_response(str(e), 502)

    logger.info("Imported recipe preview '%s' from %s", recipe['name'], import_type)
    return jsonify(recipe)


# ============================================
# ROUTES - MEAL PLAN
# ============================================

def _week_days(week_start):
    days = (
        MealPlan.query
        .options(selectinload(MealPlan.recipe))
        .filter(MealPlan.week_start == week_start)
        .order_by(MealPlan.day_of_week)
        .all()
    )
    return [day.to_dict() for day in days]


@api.route('/week')
@login_required
def week_get():
    """Week containing ?date= (today when omitted), snapped to its Monday."""
    value = request.args.get('date')
    week_start = get_week_start(from_iso_date(value) if value is not None else None)
    return jsonify(describe_week(week_start))


@api.route('/meal-plan')
@login_required
def meal_plan_get():
    week_start = from_iso_date(request.args.get('weekStart'))
    return jsonify(_week_days(week_start))


@api.route('/meal-plan', methods=['PUT'])
@login_required
def meal_plan_upsert():
    """Create or replace the plan for a single day."""
    data = json_body()
    if data.get('weekStart') is None or data.get('dayOfWeek') is None or not data.get('status'):
        return error_response('weekStart, dayOfWeek, and status are required')

    week_start = from_iso_date(data['weekStart'])
    day_of_week = to_int(data['dayOfWeek'])
    if day_of_week is None or not 0 <= day_of_week <= 6:
        return error_response('dayOfWeek must be between 0 and 6')
    status = data['status']
    if status not in VALID_DAY_STATUSES:
        return error_response(f'Invalid status: {status}')

    recipe_id = to_int(data.get('recipeId'))
    if recipe_id is not None and db.session.get(Recipe, recipe_id) is None:
        return error_response(f'Recipe {recipe_id} does not exist')

    day = MealPlan.query.filter_by(week_start=week_start, day_of_week=day_of_week).first()
    if day is None:
        day = MealPlan(week_start=week_start, day_of_week=day_of_week)
        db.session.add(day)
    day.status = status
    day.recipe_id = recipe_id
    day.custom_meal_name = clean_optional(data.get('customMealName'), MAX_LENGTHS['recipe_name'])
    day.servings = to_int(data.get('servings'), default=2, min_val=1, max_val=100)
    db.session.commit()
    return jsonify(day.to_dict())


@api.route('/meal-plan', methods=['DELETE'])
@login_required
def meal_plan_clear_day():
    week_start = from_iso_date(request.args.get('weekStart'))
    day_of_week = to_int(request.args.get('dayOfWeek'))
    if day_of_week is None:
        return error_response('weekStart and dayOfWeek are required')

    MealPlan.query.filter_by(week_start=week_start, day_of_week=day_of_week).delete()
    db.session.commit()
    return jsonify({'success': True})


@api.route('/meal-plan', methods=['POST'])
@login_required
def meal_plan_carry_forward():
    """Copy last week's plan into this week, skipping days already planned."""
    data = json_body()
    if data.get('action') != 'carry-forward':
        return error_response('Unknown action')

    week_start = from_iso_date(data.get('weekStart'))
    previous_days = MealPlan.query.filter_by(week_start=add_weeks(week_start, -1)).all()
    if not previous_days:
        return jsonify({'message': 'No previous week to carry forward'})

    planned = {
        day_of_week for (day_of_week,) in
        db.session.query(MealPlan.day_of_week).filter(MealPlan.week_start == week_start)
    }
    for prev in previous_days:
        if prev.day_of_week in planned:
            continue
        db.session.add(MealPlan(
            week_start=week_start,
            day_of_week=prev.day_of_week,
            status=prev.status,
            recipe_id=prev.recipe_id,
            custom_meal_name=prev.custom_meal_name,
            servings=prev.servings,
        ))
    db.session.commit()
    return jsonify(_week_days(week_start))


# ============================================
# ROUTES - GROCERY LIST
# ============================================

@api.route('/grocery')
@login_required
def grocery_get():
    week_start = from_iso_date(request.args.get('weekStart'))
    grocery_list = GroceryList.query.filter_by(week_start=week_start).first()
    if grocery_list is None:
        return jsonify(None)
    return jsonify(serialize_grocery_list(grocery_list))


@api.route('/grocery/generate', methods=['POST'])
@login_required
def grocery_generate():
    week_start = from_iso_date(json_body().get('weekStart'))
    grocery_list = generate_grocery_list(week_start)
    return jsonify(serialize_grocery_list(grocery_list))


@api.route('/grocery', methods=['DELETE'])
@login_required
def grocery_delete():
    week_start = from_iso_date(request.args.get('weekStart'))
    grocery_list = GroceryList.query.filter_by(week_start=week_start).first()
    if grocery_list is not None:
        db.session.delete(grocery_list)
        db.session.commit()
        notify_grocery_change(week_start, 'deleted')
    return jsonify({'success': True})


@api.route('/grocery/items', methods=['POST'])
@login_required
def grocery_item_add():
    """Add a manual item. Manual items survive regeneration."""
    data = json_body()
    list_id = to_int(data.get('listId'))
    name = clean_name(data.get('name'), MAX_LENGTHS['grocery_name'])
    if list_id is None or not name:
        return error_response('listId and name are required')

    grocery_list = db.get_or_404(GroceryList, list_id)
    category = data.get('category') or detect_category(name)
    if category not in VALID_ITEM_CATEGORIES:
        return error_response(f'Invalid category: {category}')

    item = GroceryItem(
        list_id=grocery_list.id,
        name=name,
        quantity=clean_optional(data.get('quantity'), MAX_LENGTHS['ingredient_quantity']),
        unit=clean_optional(data.get('unit'), MAX_LENGTHS['unit']),
        category=category,
        is_pantry_check=False,
        is_manual=True,
        is_quick_trip=bool(data.get('isQuickTrip')),
        is_checked=False,
        sort_order=next_sort_order(grocery_list.id),
    )
    db.session.add(item)
    db.session.commit()
    notify_grocery_change(grocery_list.week_start, 'item_added', item_id=item.id)
    return jsonify(item.to_dict()), 201


@api.route('/grocery/items/<int:id>', methods=['PATCH'])
@login_required
def grocery_item_update(id):
    item = db.get_or_404(GroceryItem, id)
    data = json_body()

    # Only explicit, well-typed fields are applied
    changes = {}
    if isinstance(data.get('isChecked'), bool):
        changes['is_checked'] = data['isChecked']
    if isinstance(data.get('isQuickTrip'), bool):
        changes['is_quick_trip'] = data['isQuickTrip']
    if isinstance(data.get('name'), str) and clean_name(data['name'], MAX_LENGTHS['grocery_name']):
        changes['name'] = clean_name(data['name'], MAX_LENGTHS['grocery_name'])
    if 'quantity' in data:
        changes['quantity'] = clean_optional(data['quantity'], MAX_LENGTHS['ingredient_quantity'])
    if 'unit' in data:
        changes['unit'] = clean_optional(data['unit'], MAX_LENGTHS['unit'])

    if not changes:
        return error_response('No valid fields to update')

    for field, value in changes.items():
        setattr(item, field, value)
    db.session.commit()
    notify_grocery_change(item.grocery_list.week_start, 'item_updated', item_id=item.id)
    return jsonify(item.to_dict())


@api.route('/grocery/items/<int:id>', methods=['DELETE'])
@login_required
def grocery_item_delete(id):
    item = db.get_or_404(GroceryItem, id)
    week_start = item.grocery_list.week_start
    db.session.delete(item)
    db.session.commit()
    notify_grocery_change(week_start, 'item_deleted', item_id=id)
    return jsonify({'success': True})


@api.route('/grocery/clear-checked', methods=['POST'])
@login_required
def grocery_clear_checked():
    list_id = to_int(json_body().get('listId'))
    if list_id is None:
        return error_response('listId is required')

    grocery_list = db.get_or_404(GroceryList, list_id)
    deleted = (
        GroceryItem.query
        .filter(GroceryItem.list_id == grocery_list.id, GroceryItem.is_checked.is_(True))
        .delete(synchronize_session='fetch')
    )
    db.session.commit()
    notify_grocery_change(grocery_list.week_start, 'cleared_checked', deleted=deleted)
    return jsonify({'success': True, 'deleted': deleted})


# ============================================
# ROUTES - PANTRY STAPLES
# ============================================

def _all_staples():
    return [staple.to_dict() for staple in PantryStaple.query.order_by(PantryStaple.name).all()]


@api.route('/pantry')
@login_required
def pantry_list():
    return jsonify(_all_staples())


@api.route('/pantry', methods=['POST'])
@login_required
def pantry_add():
    name = normalize_staple_name(clean_name(json_body().get('name'), MAX_LENGTHS['pantry_name']))
    if not name:
        return error_response('name is required')

    # Duplicates are ignored
    staple = PantryStaple.query.filter_by(name=name).first()
    if staple is None:
        staple = PantryStaple(name=name)
        db.session.add(staple)
        db.session.commit()
    return jsonify(staple.to_dict()), 201


@api.route('/pantry/<int:id>', methods=['DELETE'])
@login_required
def pantry_delete(id):
    staple = db.get_or_404(PantryStaple, id)
    db.session.delete(staple)
    db.session.commit()
    return jsonify({'success': True})


@api.route('/pantry/seed', methods=['POST'])
@login_required
def pantry_seed():
    """Add the default starter staples. Safe to call repeatedly."""
    existing = {name for (name,) in db.session.query(PantryStaple.name)}
    missing = [name for name in DEFAULT_PANTRY_STAPLES if name not in existing]
    db.session.add_all([PantryStaple(name=name) for name in missing])
    db.session.commit()
    return jsonify({'seeded': len(missing), 'staples': _all_staples()})


# ============================================
# ROUTES - SETTINGS
# ============================================

@api.route('/settings/household')
@login_required
def household_get():
    return jsonify({'name': HouseholdSettings.get_value(HOUSEHOLD_NAME_KEY, DEFAULT_HOUSEHOLD_NAME)})


@api.route('/settings/household', methods=['PATCH'])
@login_required
def household_update():
    name = clean_name(json_body().get('name'), MAX_LENGTHS['household_name'])
    if not name:
        return error_response('Name is required')
    HouseholdSettings.set_value(HOUSEHOLD_NAME_KEY, name)
    db.session.commit()
    return jsonify({'name': name})


# ============================================
# ERROR HANDLERS
# ============================================

def register_error_handlers(app):
    @app.errorhandler(InvalidWeekStart)
    def handle_invalid_week(e):
        return error_response(str(e))

    @app.errorhandler(SQLAlchemyError)
    def handle_storage_error(e):
        db.session.rollback()
        logger.exception("[%s %s] Database error", request.method, request.path)
        return error_response('Database error', 500)

    @app.errorhandler(HTTPException)
    def handle_http_error(e):
        messages = {
            404: 'Not found',
            405: 'Method not allowed',
            413: 'Request body too large',
        }
        return error_response(messages.get(e.code, e.description), e.code)


# ============================================
# APPLICATION FACTORY
# ============================================

def create_app(config_name=None, **overrides):
    """Build the Flask app for an environment name ('development', 'testing', ...)."""
    app = Flask(__name__)
    app.config.from_object(get_config(config_name))
    app.config.update(overrides)

    logging.basicConfig(
        level=app.config['LOG_LEVEL'],
        format='%(asctime)s %(levelname)s %(name)s: %(message)s',
    )

    db.init_app(app)
    migrate.init_app(app, db)
    app.register_blueprint(api)
    register_error_handlers(app)

    if not app.config.get('HOUSEHOLD_PASSWORD_HASH') and not app.testing:
        logger.warning("HOUSEHOLD_PASSWORD_HASH is not set; login is disabled")

    return app


# ============================================
# INITIALIZE DATABASE
# ============================================

def init_db(app):
    """Create any missing tables. Schema changes go through `flask db upgrade`."""
    with app.app_context():
        db.create_all()


if __name__ == '__main__':
    app = create_app()
    init_db(app)
    # host='0.0.0.0' allows access from other devices on the network
    app.run(host='0.0.0.0', port=5000, use_reloader=False)

"""
Recipe Models

Contains the Recipe, RecipeIngredient and RecipeTag models for the
recipe library.
"""

from constants import GF_STATUS_LABELS
from .base import db, utcnow


class Recipe(db.Model):
    """Recipe with metadata, ingredients and tags."""
    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(200), nullable=False, index=True)
    source_url = db.Column(db.String(500), nullable=True)
    total_time = db.Column(db.Integer, nullable=True)  # minutes, prep + cook
    active_cook_time = db.Column(db.Integer, nullable=True)  # hands-on minutes
    pots_and_pans = db.Column(db.Integer, nullable=True)
    servings = db.Column(db.Integer, default=2, nullable=False)
    instructions = db.Column(db.Text, default='')  # newline-separated steps
    gf_status = db.Column(db.String(20), default='NEEDS_REVIEW', nullable=False, index=True)
    gf_notes = db.Column(db.Text, nullable=True)
    notes = db.Column(db.Text, nullable=True)
    favorite = db.Column(db.Boolean, default=False, nullable=False)
    created_at = db.Column(db.DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = db.Column(db.DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)
    ingredients = db.relationship(
        'RecipeIngredient', backref='recipe', lazy=True,
        cascade='all, delete-orphan', order_by='RecipeIngredient.sort_order',
    )
    tags = db.relationship(
        'RecipeTag', backref='recipe', lazy=True,
        cascade='all, delete-orphan', order_by='RecipeTag.id',
    )

    def to_dict(self, include_details=True):
        data = {
            'id': self.id,
            'name': self.name,
            'sourceUrl': self.source_url,
            'totalTime': self.total_time,
            'activeCookTime': self.active_cook_time,
            'potsAndPans': self.pots_and_pans,
            'servings': self.servings,
            'gfStatus': self.gf_status,
            'gfStatusLabel': GF_STATUS_LABELS.get(self.gf_status, self.gf_status),
            'favorite': self.favorite,
            'createdAt': self.created_at.isoformat() if self.created_at else None,
        }
        if include_details:
            data.update({
                'instructions': self.instructions,
                'gfNotes': self.gf_notes,
                'notes': self.notes,
                'ingredients': [ing.to_dict() for ing in self.ingredients],
                'tags': [tag.to_dict() for tag in self.tags],
            })
        return data


class RecipeIngredient(db.Model):
    """An ingredient line of a recipe. Quantity is kept as written."""
    id = db.Column(db.Integer, primary_key=True)
    recipe_id = db.Column(db.Integer, db.ForeignKey('recipe.id', ondelete='CASCADE'), nullable=False, index=True)
    name = db.Column(db.String(200), nullable=False)
    quantity = db.Column(db.String(50), default='', nullable=False)  # "1 1/2", "2-3", "to taste"
    unit = db.Column(db.String(50), nullable=True)
    notes = db.Column(db.String(2000), nullable=True)
    is_gluten_flag = db.Column(db.Boolean, default=False, nullable=False)
    gf_substitute = db.Column(db.String(200), nullable=True)
    sort_order = db.Column(db.Integer, default=0, nullable=False)

    def to_dict(self):
        return {
            'id': self.id,
            'recipeId': self.recipe_id,
            'name': self.name,
            'quantity': self.quantity,
            'unit': self.unit,
            'notes': self.notes,
            'isGlutenFlag': self.is_gluten_flag,
            'gfSubstitute': self.gf_substitute,
            'sortOrder': self.sort_order,
        }


class RecipeTag(db.Model):
    """Searchable tag on a recipe (PROTEIN, VEGGIE, CARB or CUISINE)."""
    id = db.Column(db.Integer, primary_key=True)
    recipe_id = db.Column(db.Integer, db.ForeignKey('recipe.id', ondelete='CASCADE'), nullable=False, index=True)
    type = db.Column(db.String(20), nullable=False)
    value = db.Column(db.String(100), nullable=False)

    def to_dict(self):
        return {'id': self.id, 'type': self.type, 'value': self.value}

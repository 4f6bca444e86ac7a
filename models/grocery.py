"""
Grocery Models

Contains the GroceryList, GroceryItem and PantryStaple models for weekly
grocery lists and pantry tracking.
"""

from constants import CATEGORY_LABELS
from .base import db, utcnow


class GroceryList(db.Model):
    """The grocery list for one week, created on first generation."""
    id = db.Column(db.Integer, primary_key=True)
    week_start = db.Column(db.Date, unique=True, nullable=False, index=True)
    created_at = db.Column(db.DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = db.Column(db.DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)
    items = db.relationship('GroceryItem', backref='grocery_list', lazy=True, cascade='all, delete-orphan')

    def to_dict(self, items=None):
        if items is None:
            items = self.items
        return {
            'id': self.id,
            'weekStart': self.week_start.isoformat(),
            'items': [item.to_dict() for item in items],
        }


class GroceryItem(db.Model):
    """Grocery line, either generated from the meal plan or added by hand."""
    id = db.Column(db.Integer, primary_key=True)
    list_id = db.Column(db.Integer, db.ForeignKey('grocery_list.id', ondelete='CASCADE'), nullable=False, index=True)
    name = db.Column(db.String(200), nullable=False)
    quantity = db.Column(db.String(200), nullable=True)  # "3", "1 ½", "to taste + a pinch"
    unit = db.Column(db.String(50), nullable=True)
    category = db.Column(db.String(20), default='OTHER', nullable=False)
    # Staple the household probably has; shown in a "check before buying" section
    is_pantry_check = db.Column(db.Boolean, default=False, nullable=False)
    # Manual items survive regeneration
    is_manual = db.Column(db.Boolean, default=False, nullable=False, index=True)
    is_quick_trip = db.Column(db.Boolean, default=False, nullable=False)
    is_checked = db.Column(db.Boolean, default=False, nullable=False)
    sort_order = db.Column(db.Integer, default=0, nullable=False)

    def to_dict(self):
        return {
            'id': self.id,
            'listId': self.list_id,
            'name': self.name,
            'quantity': self.quantity,
            'unit': self.unit,
            'category': self.category,
            'categoryLabel': CATEGORY_LABELS.get(self.category, self.category),
            'isPantryCheck': self.is_pantry_check,
            'isManual': self.is_manual,
            'isQuickTrip': self.is_quick_trip,
            'isChecked': self.is_checked,
            'sortOrder': self.sort_order,
        }


class PantryStaple(db.Model):
    """Ingredient the household always has on hand. Names are stored lowercase."""
    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(100), unique=True, nullable=False, index=True)

    def to_dict(self):
        return {'id': self.id, 'name': self.name}

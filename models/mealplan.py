"""
Meal Plan Model

Contains the MealPlan model for weekly meal planning.
"""

from .base import db


class MealPlan(db.Model):
    """One planned day within a week (0=Mon ... 6=Sun)."""
    __table_args__ = (
        db.UniqueConstraint('week_start', 'day_of_week', name='uq_meal_plan_week_day'),
    )

    id = db.Column(db.Integer, primary_key=True)
    week_start = db.Column(db.Date, nullable=False, index=True)  # Monday of the week
    day_of_week = db.Column(db.Integer, nullable=False)
    status = db.Column(db.String(20), default='PLANNED', nullable=False)  # PLANNED, EATING_OUT, LEFTOVERS, SKIP
    recipe_id = db.Column(db.Integer, db.ForeignKey('recipe.id', ondelete='SET NULL'), nullable=True, index=True)
    custom_meal_name = db.Column(db.String(200), nullable=True)
    servings = db.Column(db.Integer, default=2, nullable=False)
    recipe = db.relationship('Recipe')

    def to_dict(self):
        recipe = None
        if self.recipe is not None:
            recipe = {
                'id': self.recipe.id,
                'name': self.recipe.name,
                'totalTime': self.recipe.total_time,
                'gfStatus': self.recipe.gf_status,
            }
        return {
            'id': self.id,
            'weekStart': self.week_start.isoformat(),
            'dayOfWeek': self.day_of_week,
            'status': self.status,
            'servings': self.servings,
            'recipeId': self.recipe_id,
            'customMealName': self.custom_meal_name,
            'recipe': recipe,
        }

"""
Settings Model

Contains the HouseholdSettings model for household-wide settings storage.
"""

from .base import db

HOUSEHOLD_NAME_KEY = 'household_name'
DEFAULT_HOUSEHOLD_NAME = 'your'


class HouseholdSettings(db.Model):
    """Key-value storage for household settings."""
    id = db.Column(db.Integer, primary_key=True)
    key = db.Column(db.String(50), unique=True, nullable=False)
    value = db.Column(db.String(200))

    @classmethod
    def get_value(cls, key, default=None):
        row = cls.query.filter_by(key=key).first()
        if row is None or row.value is None:
            return default
        return row.value

    @classmethod
    def set_value(cls, key, value):
        """Upsert a setting. The caller commits."""
        row = cls.query.filter_by(key=key).first()
        if row is None:
            row = cls(key=key)
            db.session.add(row)
        row.value = value
        return row

"""
Pantry Service

Decides whether an ingredient is already stocked as a pantry staple.
"""

import re

_OR_SPLIT_RE = re.compile(r'\s+or\s+')


def normalize_staple_name(name):
    """Lowercase and trim a staple or ingredient name."""
    return (name or '').lower().strip()


def build_pantry_set(names):
    """Build the lookup set used by matches_pantry from raw staple names."""
    return frozenset(normalize_staple_name(name) for name in names if normalize_staple_name(name))


def matches_pantry(ingredient_name, pantry_set):
    """
    Return True if the ingredient is in the pantry set.

    Handles a case-insensitive exact match ("Olive Oil" matches "olive oil")
    and "X or Y" phrasing, which matches when either alternative is stocked.
    """
    lower = normalize_staple_name(ingredient_name)
    if lower in pantry_set:
        return True

    if _OR_SPLIT_RE.search(lower):
        return any(part.strip() in pantry_set for part in _OR_SPLIT_RE.split(lower))

    return False


class PantryMatcher:
    """Pantry staple lookup built once per generation run."""

    def __init__(self, names=()):
        self._pantry_set = build_pantry_set(names)

    @property
    def pantry_set(self):
        return self._pantry_set

    def matches(self, ingredient_name):
        return matches_pantry(ingredient_name, self._pantry_set)

    def __len__(self):
        return len(self._pantry_set)

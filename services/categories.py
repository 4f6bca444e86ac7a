"""
Category Service

Classifies free-text ingredient names into grocery categories by ordered
keyword matching.
"""

from types import MappingProxyType
from constants import CATEGORY_KEYWORDS, DETECTION_ORDER, OTHER


class CategoryClassifier:
    """
    Maps an ingredient name to a grocery category.

    Categories are tested in a fixed priority order and the first one with
    a keyword that appears anywhere in the lowercased name wins, so
    "coconut milk" is DAIRY (via "milk") rather than CANNED. Names that hit
    no keyword fall back to OTHER.
    """

    def __init__(self, keywords=CATEGORY_KEYWORDS, order=DETECTION_ORDER, fallback=OTHER):
        self._keywords = MappingProxyType({
            category: tuple(kw.lower() for kw in words)
            for category, words in keywords.items()
        })
        self._order = tuple(order)
        self._fallback = fallback

    @property
    def order(self):
        return self._order

    @property
    def keywords(self):
        return self._keywords

    def detect(self, name):
        lower = (name or '').lower()
        for category in self._order:
            if any(kw in lower for kw in self._keywords.get(category, ())):
                return category
        return self._fallback


default_classifier = CategoryClassifier()


def detect_category(name):
    """Detect the most likely grocery category using the default keyword table."""
    return default_classifier.detect(name)

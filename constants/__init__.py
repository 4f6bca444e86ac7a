"""
Constants Package

Immutable lookup tables shared by the services and routes.
"""

from .units import UNICODE_FRACTIONS, COMMON_FRACTIONS, FRACTION_TOLERANCE
from .categories import (
    PRODUCE, PROTEIN, DAIRY, DRY_GOODS, CANNED, OTHER,
    CATEGORY_ORDER, DETECTION_ORDER, CATEGORY_LABELS, CATEGORY_KEYWORDS,
)
from .ingredients import DEFAULT_PANTRY_STAPLES
from .validation import (
    VALID_ITEM_CATEGORIES, VALID_DAY_STATUSES, VALID_GF_STATUSES,
    VALID_TAG_TYPES, VALID_IMPORT_TYPES, ALLOWED_IMAGE_MEDIA_TYPES,
    GF_STATUS_LABELS, MAX_LENGTHS,
)

"""
Quantity Service

Functions for parsing, formatting and scaling free-text ingredient
quantities such as "1 1/2", "¾" or "2-3".
"""

import math
import re
from constants import UNICODE_FRACTIONS, COMMON_FRACTIONS, FRACTION_TOLERANCE

_MIXED_RE = re.compile(r'^([0-9]+)\s+([0-9]+)/([0-9]+)$')
_MIXED_GLYPH_RE = re.compile(r'^([0-9]+)\s*([' + ''.join(UNICODE_FRACTIONS) + r'])$')
_FRACTION_RE = re.compile(r'^([0-9]+)/([0-9]+)$')
_LEADING_NUMBER_RE = re.compile(r'^([0-9]*\.?[0-9]+)')
_STEP_NUMBER_RE = re.compile(r'^[0-9]+\.\s*')


def parse_quantity(value):
    """
    Parse a quantity string into a float.

    Handles "1", "1.5", "1/2", "1 1/2", "2-3" (takes the first number),
    unicode fraction glyphs and whole-plus-glyph forms like "1 ½". Returns None when the string has no
    numeric reading ("to taste", "a pinch", "").
    """
    if value is None:
        return None
    s = str(value).strip()
    if not s:
        return None

    if s in UNICODE_FRACTIONS:
        return UNICODE_FRACTIONS[s]

    mixed_match = _MIXED_RE.match(s)
    if mixed_match:
        whole, num, denom = (int(g) for g in mixed_match.groups())
        if denom == 0:
            return None
        return whole + num / denom

    # "1 ½" as produced by format_quantity
    glyph_match = _MIXED_GLYPH_RE.match(s)
    if glyph_match:
        return int(glyph_match.group(1)) + UNICODE_FRACTIONS[glyph_match.group(2)]

    frac_match = _FRACTION_RE.match(s)
    if frac_match:
        num, denom = (int(g) for g in frac_match.groups())
        if denom == 0:
            return None
        return num / denom

    # Ranges like "2-3" only yield their first number
    leading = _LEADING_NUMBER_RE.match(s)
    if leading:
        return float(leading.group(1))

    return None


def format_quantity(value):
    """Format a number back to a human-friendly quantity string."""
    if value == math.floor(value):
        return str(int(value))

    whole = math.floor(value)
    decimal = value - whole
    for frac, glyph in COMMON_FRACTIONS:
        if abs(decimal - frac) < FRACTION_TOLERANCE:
            if whole > 0:
                return f"{whole} {glyph}"
            return glyph

    # Fall back to 2 decimal places
    return f"{value:.2f}".rstrip('0').rstrip('.')


def scale_quantity(quantity, original_servings, desired_servings):
    """
    Scale a quantity string from one serving count to another.

    Returns the original string when it can't be parsed numerically.
    """
    parsed = parse_quantity(quantity)
    if parsed is None or not original_servings or original_servings <= 0:
        return quantity
    ratio = desired_servings / original_servings
    return format_quantity(parsed * ratio)


def parse_instructions(instructions):
    """Split instruction text into steps, dropping "1. " style numbering."""
    if not instructions:
        return []
    steps = []
    for line in instructions.split('\n'):
        step = _STEP_NUMBER_RE.sub('', line).strip()
        if step:
            steps.append(step)
    return steps

"""
Quantity Constants

Unicode fraction glyphs and the common fractions used when formatting
ingredient quantities for display.
"""

# Single-character unicode fractions recognised as whole quantities
UNICODE_FRACTIONS = {
    '¼': 0.25,
    '½': 0.5,
    '¾': 0.75,
    '⅓': 1/3,
    '⅔': 2/3,
    '⅛': 0.125,
    '⅜': 0.375,
    '⅝': 0.625,
    '⅞': 0.875,
}

# Common fractions for display (value, glyph), checked in this order
COMMON_FRACTIONS = (
    (0.25, '¼'),
    (0.5, '½'),
    (0.75, '¾'),
    (1/3, '⅓'),
    (2/3, '⅔'),
    (0.125, '⅛'),
    (0.375, '⅜'),
    (0.625, '⅝'),
    (0.875, '⅞'),
)

# How close a fractional part must be to a common fraction to render as a glyph
FRACTION_TOLERANCE = 0.02

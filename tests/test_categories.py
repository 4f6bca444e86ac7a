"""Tests for grocery category classification."""

import pytest

from constants import CATEGORY_KEYWORDS, DETECTION_ORDER
from services.categories import CategoryClassifier, detect_category


@pytest.mark.parametrize('name, expected', [
    ('coconut milk', 'DAIRY'),
    ('canned tomato sauce', 'PRODUCE'),
    ('edamame', 'PROTEIN'),
    ('mysterious ingredient xyz', 'OTHER'),
    ('Boneless Chicken Thighs', 'PROTEIN'),
    ('red onion', 'PRODUCE'),
    ('sharp cheddar', 'DAIRY'),
    ('chicken broth', 'PROTEIN'),
    ('vegetable stock', 'CANNED'),
    ('all-purpose flour', 'DRY_GOODS'),
])
def test_detect_category(name, expected):
    assert detect_category(name) == expected


def test_detect_category_blank_name():
    assert detect_category('') == 'OTHER'
    assert detect_category(None) == 'OTHER'


def test_priority_order_is_fixed():
    assert DETECTION_ORDER == ('PROTEIN', 'PRODUCE', 'DAIRY', 'CANNED', 'DRY_GOODS')
    # "pepper" is both produce and a dry good; produce is tested first
    assert detect_category('black pepper') == 'PRODUCE'


def test_custom_keyword_table():
    classifier = CategoryClassifier(
        keywords={'SNACKS': ['chip', 'pretzel'], 'PRODUCE': ['kale']},
        order=('SNACKS', 'PRODUCE'),
    )
    assert classifier.detect('Kettle Chips') == 'SNACKS'
    assert classifier.detect('baby kale') == 'PRODUCE'
    assert classifier.detect('chicken') == 'OTHER'
    # The shared default table is untouched
    assert detect_category('Kettle Chips') == 'OTHER'


def test_classifier_copies_its_tables():
    keywords = {'PRODUCE': ['kale']}
    classifier = CategoryClassifier(keywords=keywords, order=['PRODUCE'])
    keywords['PRODUCE'].append('chips')
    assert classifier.detect('chips') == 'OTHER'
    with pytest.raises(TypeError):
        classifier.keywords['PRODUCE'] = ('chips',)


def test_default_table_is_read_only():
    with pytest.raises(TypeError):
        CATEGORY_KEYWORDS['PROTEIN'] = ('tofu',)

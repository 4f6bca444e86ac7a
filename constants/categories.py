"""
Grocery Category Constants

Category names, the keyword table used to classify ingredient names, the
order categories are tested in, and the order they are displayed in.
"""

from types import MappingProxyType

PRODUCE = 'PRODUCE'
PROTEIN = 'PROTEIN'
DAIRY = 'DAIRY'
DRY_GOODS = 'DRY_GOODS'
CANNED = 'CANNED'
OTHER = 'OTHER'

# Display order for the Buy section
CATEGORY_ORDER = (PRODUCE, PROTEIN, DAIRY, DRY_GOODS, CANNED, OTHER)

# Detection order: first category with a substring hit wins
DETECTION_ORDER = (PROTEIN, PRODUCE, DAIRY, CANNED, DRY_GOODS)

CATEGORY_LABELS = MappingProxyType({
    PRODUCE: 'Produce',
    PROTEIN: 'Protein',
    DAIRY: 'Dairy & Eggs',
    DRY_GOODS: 'Dry Goods & Grains',
    CANNED: 'Canned & Packaged',
    OTHER: 'Other',
})

CATEGORY_KEYWORDS = MappingProxyType({
    PROTEIN: (
        'chicken', 'beef', 'pork', 'lamb', 'veal', 'duck', 'turkey', 'bison',
        'fish', 'salmon', 'tuna', 'cod', 'tilapia', 'halibut', 'trout', 'sardine',
        'shrimp', 'scallop', 'crab', 'lobster', 'clam', 'mussel', 'oyster', 'anchovy',
        'sausage', 'bacon', 'ham', 'pancetta', 'prosciutto', 'salami', 'pepperoni',
        'steak', 'ground', 'mince', 'egg', 'tofu', 'tempeh', 'seitan', 'edamame',
        'lentil', 'chickpea', 'black bean', 'kidney bean', 'white bean', 'cannellini',
    ),
    PRODUCE: (
        'tomato', 'lettuce', 'spinach', 'kale', 'arugula', 'chard', 'collard',
        'onion', 'shallot', 'leek', 'chive', 'scallion', 'green onion',
        'garlic', 'ginger', 'turmeric',
        'pepper', 'jalapeño', 'serrano', 'habanero', 'chili',
        'zucchini', 'squash', 'pumpkin', 'mushroom', 'portobello', 'shiitake',
        'carrot', 'parsnip', 'turnip', 'radish', 'beet',
        'potato', 'sweet potato', 'yam',
        'broccoli', 'cauliflower', 'brussels', 'cabbage', 'bok choy',
        'celery', 'fennel', 'artichoke', 'asparagus', 'eggplant', 'corn', 'peas',
        'cucumber', 'avocado', 'lime', 'lemon', 'orange', 'grapefruit',
        'apple', 'pear', 'peach', 'plum', 'mango', 'pineapple', 'papaya',
        'banana', 'berry', 'strawberry', 'blueberry', 'raspberry', 'blackberry',
        'grape', 'cherry', 'watermelon', 'melon',
        'herb', 'basil', 'parsley', 'cilantro', 'mint', 'thyme', 'rosemary',
        'sage', 'dill', 'oregano', 'tarragon', 'bay leaf',
        'watercress', 'endive', 'radicchio',
    ),
    DAIRY: (
        'milk', 'cream', 'half-and-half', 'half and half', 'buttermilk',
        'butter', 'ghee',
        'cheese', 'cheddar', 'mozzarella', 'parmesan', 'parmigiano', 'gruyère',
        'gruyere', 'ricotta', 'feta', 'brie', 'gouda', 'goat cheese', 'blue cheese',
        'cottage cheese', 'cream cheese', 'mascarpone', 'provolone', 'swiss',
        'yogurt', 'kefir', 'sour cream', 'crème fraîche', 'creme fraiche',
        'ice cream', 'whipped cream',
    ),
    DRY_GOODS: (
        'flour', 'sugar', 'brown sugar', 'powdered sugar', 'honey', 'maple syrup',
        'rice', 'brown rice', 'wild rice', 'basmati', 'jasmine',
        'pasta', 'noodle', 'spaghetti', 'penne', 'rigatoni', 'fettuccine',
        'linguine', 'farfalle', 'orzo', 'couscous', 'bulgur', 'farro',
        'quinoa', 'oat', 'granola', 'cereal',
        'bread', 'baguette', 'pita', 'tortilla', 'wrap', 'roll', 'bun',
        'cracker', 'breadcrumb', 'panko',
        'cornstarch', 'cornmeal', 'semolina', 'almond flour',
        'baking powder', 'baking soda', 'yeast',
        'cocoa', 'chocolate chip', 'vanilla extract',
        'oil', 'olive oil', 'vegetable oil', 'sesame oil', 'coconut oil',
        'vinegar', 'soy sauce', 'fish sauce', 'worcestershire', 'hot sauce',
        'salt', 'pepper', 'spice', 'seasoning', 'cumin', 'paprika', 'coriander',
        'turmeric', 'cayenne', 'chili powder', 'garlic powder', 'onion powder',
        'nutmeg', 'cinnamon', 'cardamom', 'clove', 'allspice', 'star anise',
        'mustard', 'ketchup', 'mayonnaise', 'tahini', 'peanut butter',
        'jam', 'jelly', 'syrup',
        'nuts', 'almond', 'walnut', 'pecan', 'cashew', 'pine nut', 'peanut',
        'seed', 'sunflower', 'pumpkin seed', 'sesame', 'chia', 'flax',
        'dried fruit', 'raisin', 'cranberry',
    ),
    CANNED: (
        'canned', 'can of', 'tin of',
        'tomato sauce', 'tomato paste', 'crushed tomato', 'diced tomato',
        'tomato puree', 'marinara',
        'broth', 'stock', 'bouillon',
        'coconut milk', 'coconut cream',
        'beans in can', 'canned beans', 'canned chickpea', 'canned lentil',
        'canned tuna', 'canned salmon', 'canned sardine',
        'canned corn', 'canned pea', 'canned artichoke',
        'olives', 'capers', 'roasted pepper',
        'evaporated milk', 'condensed milk',
    ),
    OTHER: (),
})

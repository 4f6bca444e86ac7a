"""
Ingredient Constants

Default pantry staples offered when a household seeds its pantry.
"""

# Common items most households always have stocked.
# Stored lowercase to match case-insensitive ingredient lookups.
DEFAULT_PANTRY_STAPLES = (
    # Oils & fats
    'olive oil', 'butter', 'vegetable oil', 'sesame oil', 'coconut oil',
    # Salt, pepper & core spices
    'salt', 'black pepper', 'garlic powder', 'onion powder',
    'paprika', 'cumin', 'oregano', 'chili powder', 'red pepper flakes',
    'cinnamon', 'bay leaves', 'thyme', 'rosemary',
    # Sweeteners
    'sugar', 'brown sugar', 'honey', 'maple syrup',
    # Acids & condiments
    'white wine vinegar', 'apple cider vinegar', 'soy sauce',
    'hot sauce', 'dijon mustard', 'fish sauce',
    # Canned & jarred
    'chicken broth', 'diced tomatoes', 'tomato paste', 'coconut milk',
    # Dry goods
    'rice', 'cornstarch', 'baking powder', 'baking soda',
    # Nuts & seeds
    'sesame seeds',
)

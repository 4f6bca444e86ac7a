"""
Recipe Import Service

Turns a web page, pasted text or a photo into a structured recipe using
the Anthropic Messages API. The result is a preview for the user to
review; nothing is saved here.
"""

import json
import logging
import re

import anthropic
from bs4 import BeautifulSoup

from constants import VALID_GF_STATUSES, VALID_TAG_TYPES, ALLOWED_IMAGE_MEDIA_TYPES
from utils.image_handler import decode_base64_image, validate_image_bytes, ImageValidationError
from utils.url_validator import safe_fetch

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = """You are a recipe parser. Extract recipes into structured JSON.

Return ONLY a valid JSON object (no markdown, no explanation) with this exact shape:
{
  "name": "string",
  "totalTime": number | null,        // total minutes (prep + cook)
  "activeCookTime": number | null,   // active hands-on minutes
  "potsAndPans": number | null,      // estimated distinct pots/pans/baking dishes
  "servings": number,
  "instructions": "string",          // newline-separated numbered steps, e.g. "1. Do this\\n2. Do that"
  "ingredients": [
    {
      "name": "string",              // ingredient name only (no quantity)
      "quantity": "string",          // numeric string, fraction, or range e.g. "1 1/2", "2"
      "unit": "string | null",       // cup, tbsp, oz, clove, etc. null if no unit
      "notes": "string | null",      // prep notes e.g. "finely chopped", "room temperature"
      "isGlutenFlag": boolean,       // true if this ingredient commonly contains gluten
      "gfSubstitute": "string | null" // suggested GF swap if flagged, else null
    }
  ],
  "tags": [
    { "type": "PROTEIN", "value": "string" },   // e.g. chicken, beef, salmon, tofu
    { "type": "VEGGIE",  "value": "string" },   // e.g. broccoli, spinach
    { "type": "CARB",    "value": "string" },   // e.g. rice, pasta, potatoes
    { "type": "CUISINE", "value": "string" }    // e.g. italian, mexican, asian
  ],
  "gfNotes": "string | null"         // summary of GF flags and substitutions, null if none
}

Gluten flag criteria. Set isGlutenFlag: true for:
wheat/all-purpose/bread/pastry flour, breadcrumbs/panko, regular pasta (not GF),
regular soy sauce, teriyaki sauce, oyster sauce (unless GF labeled),
barley, rye, malt, beer, couscous, bulgur, seitan, many broths/gravies.

GF substitute suggestions:
- All-purpose flour -> "Rice flour, almond flour, or GF flour blend"
- Breadcrumbs/panko -> "GF breadcrumbs or almond meal"
- Regular pasta -> "GF pasta (rice or chickpea-based)"
- Soy sauce -> "Tamari or coconut aminos"
- Oyster sauce -> "GF oyster sauce or hoisin"
- Beer -> "GF beer or chicken broth\""""

IMAGE_PROMPT = "Extract the recipe from this image and return the structured JSON."

_FENCE_START_RE = re.compile(r'^```(?:json)?\s*', re.IGNORECASE)
_FENCE_END_RE = re.compile(r'\s*```$')


class RecipeParseError(Exception):
    """Raised when a recipe can't be fetched or parsed."""
    pass


def extract_page_text(html, limit=8000):
    """Visible text of an HTML page, whitespace collapsed and truncated."""
    soup = BeautifulSoup(html, 'html.parser')
    for tag in soup(['script', 'style', 'noscript', 'svg']):
        tag.decompose()
    text = soup.get_text(' ')
    text = re.sub(r'\s+', ' ', text).strip()
    return text[:limit]


def parse_response_json(text):
    """Parse the model's reply, tolerating markdown code fences."""
    cleaned = _FENCE_END_RE.sub('', _FENCE_START_RE.sub('', text.strip()))
    try:
        data = json.loads(cleaned)
    except json.JSONDecodeError:
        raise RecipeParseError("The recipe parser returned invalid JSON. Please try again.") from None
    if not isinstance(data, dict):
        raise RecipeParseError("The recipe parser returned an unexpected payload.")
    return data


def _optional_int(value):
    if value is None or isinstance(value, bool):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def _optional_str(value):
    if value is None:
        return None
    value = str(value).strip()
    return value or None


def normalize_parsed_recipe(data):
    """Coerce a parsed payload into the recipe shape the API accepts."""
    ingredients = []
    for ing in data.get('ingredients') or []:
        if not isinstance(ing, dict) or not _optional_str(ing.get('name')):
            continue
        ingredients.append({
            'name': str(ing['name']).strip(),
            'quantity': '' if ing.get('quantity') is None else str(ing['quantity']).strip(),
            'unit': _optional_str(ing.get('unit')),
            'notes': _optional_str(ing.get('notes')),
            'isGlutenFlag': bool(ing.get('isGlutenFlag')),
            'gfSubstitute': _optional_str(ing.get('gfSubstitute')),
        })

    tags = []
    for tag in data.get('tags') or []:
        if not isinstance(tag, dict):
            continue
        tag_type = str(tag.get('type', '')).upper()
        value = _optional_str(tag.get('value'))
        if tag_type in VALID_TAG_TYPES and value:
            tags.append({'type': tag_type, 'value': value})

    servings = _optional_int(data.get('servings'))
    gf_status = 'CONTAINS_GLUTEN' if any(i['isGlutenFlag'] for i in ingredients) else 'NEEDS_REVIEW'
    if data.get('gfStatus') in VALID_GF_STATUSES:
        gf_status = data['gfStatus']

    return {
        'name': _optional_str(data.get('name')) or 'Imported Recipe',
        'sourceUrl': _optional_str(data.get('sourceUrl')),
        'totalTime': _optional_int(data.get('totalTime')),
        'activeCookTime': _optional_int(data.get('activeCookTime')),
        'potsAndPans': _optional_int(data.get('potsAndPans')),
        'servings': servings if servings and servings > 0 else 2,
        'instructions': str(data.get('instructions') or '').strip(),
        'gfStatus': gf_status,
        'gfNotes': _optional_str(data.get('gfNotes')),
        'ingredients': ingredients,
        'tags': tags,
    }


class RecipeParser:
    """Recipe parser backed by the Anthropic Messages API."""

    def __init__(self, api_key, model='claude-sonnet-4-5', max_tokens=4096, text_limit=8000, client=None):
        if not api_key and client is None:
            raise RecipeParseError("ANTHROPIC_API_KEY is not configured.")
        self._client = client or anthropic.Anthropic(api_key=api_key)
        self._model = model
        self._max_tokens = max_tokens
        self._text_limit = text_limit

    def _request(self, content):
        try:
            message = self._client.messages.create(
                model=self._model,
                max_tokens=self._max_tokens,
                system=SYSTEM_PROMPT,
                messages=[{'role': 'user', 'content': content}],
            )
        except anthropic.APIError as e:
            logger.warning("Recipe parser request failed: %s", e)
            raise RecipeParseError(f"Recipe parser request failed: {e}") from e

        if not message.content or getattr(message.content[0], 'type', None) != 'text':
            raise RecipeParseError("Unexpected response type from the recipe parser")
        return normalize_parsed_recipe(parse_response_json(message.content[0].text))

    def parse_text(self, text, source_url=None):
        if not text or not text.strip():
            raise RecipeParseError("text is required")
        if source_url:
            content = f"Parse this recipe content from {source_url}:\n\n{text}"
        else:
            content = f"Parse this recipe:\n\n{text}"
        recipe = self._request(content)
        if source_url:
            recipe['sourceUrl'] = source_url
        return recipe

    def parse_url(self, url):
        """Fetch a page (SSRF-checked) and parse its visible text.

        Raises SSRFError or requests.RequestException for fetch failures.
        """
        response = safe_fetch(url)
        page_text = extract_page_text(response.text, self._text_limit)
        if not page_text:
            raise RecipeParseError("The page has no readable text")
        logger.info("Fetched %d characters of recipe text from %s", len(page_text), url)
        return self.parse_text(page_text, source_url=url)

    def parse_image(self, image_data, media_type):
        """Parse a base64-encoded photo of a recipe.

        Raises ImageValidationError for unsupported or corrupt images.
        """
        if media_type not in ALLOWED_IMAGE_MEDIA_TYPES:
            raise ImageValidationError("Unsupported image type")
        if image_data.startswith('data:') and ',' in image_data:
            image_data = image_data.split(',', 1)[1]
        validate_image_bytes(decode_base64_image(image_data), media_type)
        content = [
            {
                'type': 'image',
                'source': {'type': 'base64', 'media_type': media_type, 'data': image_data},
            },
            {'type': 'text', 'text': IMAGE_PROMPT},
        ]
        return self._request(content)


def get_recipe_parser(config):
    """Build a parser from application config."""
    return RecipeParser(
        api_key=config.get('ANTHROPIC_API_KEY'),
        model=config.get('RECIPE_PARSER_MODEL', 'claude-sonnet-4-5'),
        max_tokens=config.get('RECIPE_PARSER_MAX_TOKENS', 4096),
        text_limit=config.get('IMPORT_TEXT_LIMIT', 8000),
    )

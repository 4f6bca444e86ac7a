"""Tests for recipe import, with the parser and page fetch mocked out."""

import base64
import json
from io import BytesIO
from types import SimpleNamespace
from unittest import mock

import anthropic
import httpx
import pytest
import requests
from PIL import Image

from services.recipe_import import (
    RecipeParseError, RecipeParser, SYSTEM_PROMPT, extract_page_text,
    normalize_parsed_recipe, parse_response_json,
)
from utils.image_handler import ImageValidationError

PARSED = {
    'name': 'Lemon Garlic Pasta',
    'totalTime': 25,
    'activeCookTime': 15,
    'potsAndPans': 2,
    'servings': 4,
    'instructions': '1. Boil pasta\n2. Toss with sauce',
    'ingredients': [
        {'name': 'spaghetti', 'quantity': '1', 'unit': 'lb', 'notes': None,
         'isGlutenFlag': True, 'gfSubstitute': 'GF pasta (rice or chickpea-based)'},
        {'name': 'garlic', 'quantity': 4, 'unit': 'cloves', 'notes': 'minced',
         'isGlutenFlag': False, 'gfSubstitute': None},
    ],
    'tags': [
        {'type': 'CARB', 'value': 'pasta'},
        {'type': 'CUISINE', 'value': 'italian'},
        {'type': 'DIFFICULTY', 'value': 'easy'},
    ],
    'gfNotes': 'Swap the spaghetti for GF pasta.',
}


def fake_message(text):
    return SimpleNamespace(content=[SimpleNamespace(type='text', text=text)])


def fake_client(text):
    client = mock.Mock()
    client.messages.create.return_value = fake_message(text)
    return client


def png_base64(size=(4, 4)):
    buffer = BytesIO()
    Image.new('RGB', size, color=(200, 40, 40)).save(buffer, format='PNG')
    return base64.b64encode(buffer.getvalue()).decode('ascii')


# ============================================
# RESPONSE PARSING
# ============================================

def test_parse_response_json_strips_fences():
    assert parse_response_json('```json\n{"name": "Soup"}\n```') == {'name': 'Soup'}
    assert parse_response_json('```\n{"name": "Soup"}\n```') == {'name': 'Soup'}
    assert parse_response_json('  {"name": "Soup"}  ') == {'name': 'Soup'}


@pytest.mark.parametrize('text', ['not json at all', '```json\n{"name": \n```', '["a", "b"]'])
def test_parse_response_json_rejects_garbage(text):
    with pytest.raises(RecipeParseError):
        parse_response_json(text)


def test_normalize_parsed_recipe():
    recipe = normalize_parsed_recipe(PARSED)

    assert recipe['servings'] == 4
    assert recipe['gfStatus'] == 'CONTAINS_GLUTEN'
    assert recipe['ingredients'][1]['quantity'] == '4'
    assert recipe['ingredients'][1]['gfSubstitute'] is None
    assert [t['type'] for t in recipe['tags']] == ['CARB', 'CUISINE']


def test_normalize_fills_defaults():
    recipe = normalize_parsed_recipe({
        'servings': 'lots',
        'ingredients': [{'name': 'water'}, {'quantity': '1'}, 'salt'],
        'tags': [{'type': 'protein', 'value': 'tofu'}, {'type': 'VEGGIE', 'value': ' '}],
    })

    assert recipe['name'] == 'Imported Recipe'
    assert recipe['servings'] == 2
    assert recipe['instructions'] == ''
    assert recipe['gfStatus'] == 'NEEDS_REVIEW'
    assert recipe['ingredients'] == [{
        'name': 'water', 'quantity': '', 'unit': None, 'notes': None,
        'isGlutenFlag': False, 'gfSubstitute': None,
    }]
    assert recipe['tags'] == [{'type': 'PROTEIN', 'value': 'tofu'}]


def test_extract_page_text_drops_scripts_and_truncates():
    html = """
    <html><head><style>body { color: red }</style><script>var x = 1;</script></head>
    <body><h1>Best   Chili</h1>
    <p>2 lbs beef</p><noscript>enable js</noscript></body></html>
    """
    assert extract_page_text(html) == 'Best Chili 2 lbs beef'
    assert extract_page_text(html, limit=4) == 'Best'


# ============================================
# PARSER
# ============================================

def test_parse_text_sends_system_prompt():
    client = fake_client('```json\n' + json.dumps(PARSED) + '\n```')
    parser = RecipeParser(api_key=None, model='test-model', max_tokens=100, client=client)

    recipe = parser.parse_text('Lemon garlic pasta for four...')

    assert recipe['name'] == 'Lemon Garlic Pasta'
    kwargs = client.messages.create.call_args.kwargs
    assert kwargs['model'] == 'test-model'
    assert kwargs['max_tokens'] == 100
    assert kwargs['system'] == SYSTEM_PROMPT
    assert kwargs['messages'][0]['content'].startswith('Parse this recipe:')


def test_parser_requires_api_key():
    with pytest.raises(RecipeParseError):
        RecipeParser(api_key=None)


def test_parse_text_rejects_blank():
    parser = RecipeParser(api_key=None, client=fake_client('{}'))
    with pytest.raises(RecipeParseError):
        parser.parse_text('   ')


def test_non_text_response_block():
    client = mock.Mock()
    client.messages.create.return_value = SimpleNamespace(content=[SimpleNamespace(type='tool_use')])
    parser = RecipeParser(api_key=None, client=client)
    with pytest.raises(RecipeParseError):
        parser.parse_text('soup')


def test_api_errors_become_parse_errors():
    client = mock.Mock()
    client.messages.create.side_effect = anthropic.APIConnectionError(
        request=httpx.Request('POST', 'https://api.anthropic.com/v1/messages'),
    )
    parser = RecipeParser(api_key=None, client=client)
    with pytest.raises(RecipeParseError):
        parser.parse_text('soup')


def test_parse_url_fetches_and_records_source():
    client = fake_client(json.dumps(PARSED))
    parser = RecipeParser(api_key=None, text_limit=50, client=client)
    page = SimpleNamespace(text='<html><body><h1>Lemon Garlic Pasta</h1><p>' + 'x' * 200 + '</p></body></html>')

    with mock.patch('services.recipe_import.safe_fetch', return_value=page) as fetch:
        recipe = parser.parse_url('https://example.com/pasta')

    fetch.assert_called_once_with('https://example.com/pasta')
    assert recipe['sourceUrl'] == 'https://example.com/pasta'
    content = client.messages.create.call_args.kwargs['messages'][0]['content']
    assert content.startswith('Parse this recipe content from https://example.com/pasta:')
    assert len(content.split('\n\n', 1)[1]) == 50


def test_parse_image_sends_image_block():
    client = fake_client(json.dumps(PARSED))
    parser = RecipeParser(api_key=None, client=client)
    data = png_base64()

    parser.parse_image('data:image/png;base64,' + data, 'image/png')

    content = client.messages.create.call_args.kwargs['messages'][0]['content']
    assert content[0] == {'type': 'image', 'source': {'type': 'base64', 'media_type': 'image/png', 'data': data}}
    assert content[1]['type'] == 'text'


def test_parse_image_rejects_mismatched_type():
    parser = RecipeParser(api_key=None, client=fake_client('{}'))
    with pytest.raises(ImageValidationError):
        parser.parse_image(png_base64(), 'image/jpeg')
    with pytest.raises(ImageValidationError):
        parser.parse_image(base64.b64encode(b'not an image').decode(), 'image/png')


# ============================================
# IMPORT ENDPOINT
# ============================================

@pytest.fixture
def parser_app(app):
    app.config['ANTHROPIC_API_KEY'] = 'test-key'
    return app


@pytest.fixture
def anthropic_client():
    client = fake_client(json.dumps(PARSED))
    with mock.patch('anthropic.Anthropic', return_value=client) as factory:
        yield client
    factory.assert_called_with(api_key='test-key')


def test_import_without_api_key(auth_client):
    response = auth_client.post('/api/recipes/import', json={'type': 'text', 'text': 'soup'})
    assert response.status_code == 503


def test_import_text(parser_app, auth_client, anthropic_client):
    response = auth_client.post('/api/recipes/import', json={'type': 'text', 'text': 'Lemon garlic pasta...'})

    assert response.status_code == 200
    data = response.get_json()
    assert data['name'] == 'Lemon Garlic Pasta'
    assert data['gfStatus'] == 'CONTAINS_GLUTEN'


def test_import_preview_can_be_saved(parser_app, auth_client, anthropic_client):
    preview = auth_client.post('/api/recipes/import', json={'type': 'text', 'text': 'pasta'}).get_json()
    saved = auth_client.post('/api/recipes', json=preview)
    assert saved.status_code == 201
    assert [i['name'] for i in saved.get_json()['ingredients']] == ['spaghetti', 'garlic']


def test_import_url(parser_app, auth_client, anthropic_client):
    page = SimpleNamespace(text='<p>Lemon Garlic Pasta</p>')
    with mock.patch('services.recipe_import.safe_fetch', return_value=page):
        response = auth_client.post('/api/recipes/import', json={'type': 'url', 'url': 'https://example.com/r'})
    assert response.status_code == 200
    assert response.get_json()['sourceUrl'] == 'https://example.com/r'


def test_import_url_blocks_internal_hosts(parser_app, auth_client, anthropic_client):
    response = auth_client.post('/api/recipes/import', json={'type': 'url', 'url': 'http://localhost:5000/admin'})
    assert response.status_code == 400
    assert 'blocked' in response.get_json()['error']
    anthropic_client.messages.create.assert_not_called()


def test_import_url_fetch_failure(parser_app, auth_client, anthropic_client):
    with mock.patch('services.recipe_import.safe_fetch', side_effect=requests.ConnectionError('down')):
        response = auth_client.post('/api/recipes/import', json={'type': 'url', 'url': 'https://example.com/r'})
    assert response.status_code == 502


def test_import_image(parser_app, auth_client, anthropic_client):
    response = auth_client.post('/api/recipes/import', json={
        'type': 'image', 'imageData': png_base64(), 'mediaType': 'image/png',
    })
    assert response.status_code == 200


def test_import_image_validation(parser_app, auth_client, anthropic_client):
    bad_type = auth_client.post('/api/recipes/import', json={
        'type': 'image', 'imageData': png_base64(), 'mediaType': 'image/tiff',
    })
    assert bad_type.status_code == 400
    missing = auth_client.post('/api/recipes/import', json={'type': 'image', 'mediaType': 'image/png'})
    assert missing.status_code == 400
    corrupt = auth_client.post('/api/recipes/import', json={
        'type': 'image', 'imageData': 'not base64!!', 'mediaType': 'image/png',
    })
    assert corrupt.status_code == 400


def test_import_bad_model_output(parser_app, auth_client, anthropic_client):
    anthropic_client.messages.create.return_value = fake_message('Sorry, I cannot help with that.')
    response = auth_client.post('/api/recipes/import', json={'type': 'text', 'text': 'soup'})
    assert response.status_code == 502


def test_import_input_validation(parser_app, auth_client, anthropic_client):
    assert auth_client.post('/api/recipes/import', json={'type': 'fax'}).status_code == 400
    assert auth_client.post('/api/recipes/import', json={'type': 'text'}).status_code == 400
    assert auth_client.post('/api/recipes/import', json={'type': 'url', 'url': 'ftp://x'}).status_code == 400

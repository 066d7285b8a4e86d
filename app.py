#!/usr/bin/env python3
"""
Recipe API - Flask backend for the serving-size control
"""

import logging
import os
from flask import Flask, request, jsonify
from flask_cors import CORS
from recipe_scaling import (
    COOKING_UNITS,
    Ingredient,
    Recipe,
    ServingSizeSelector,
    format_ingredient_display,
    format_ratio,
    parse_servings,
)

_LOGGER = logging.getLogger(__name__)

app = Flask(__name__)
CORS(app)  # Allow the front end to call this


@app.route('/api/health', methods=['GET'])
def health():
    return jsonify({'status': 'ok'})


@app.route('/api/units', methods=['GET'])
def list_units():
    """Units offered by the ingredient editor."""
    return jsonify({'units': COOKING_UNITS})


@app.route('/api/scale', methods=['POST'])
def scale_recipe():
    """Scale a recipe to a new serving count and return a side-by-side preview."""
    data = request.get_json(silent=True)

    if not isinstance(data, dict):
        return jsonify({'error': 'Request body must be a JSON object'}), 400
    if 'recipe' not in data:
        return jsonify({'error': 'No recipe provided'}), 400
    if 'servings' not in data:
        return jsonify({'error': 'No servings provided'}), 400

    try:
        recipe = Recipe.from_dict(data['recipe'])
        servings = parse_servings(data['servings'])
    except (ValueError, TypeError) as e:
        return jsonify({'error': str(e)}), 400

    try:
        selector = ServingSizeSelector(recipe)
        selector.set_servings(servings)
        scaled = selector.scaled_recipe

        return jsonify({
            'recipe': scaled.to_dict(),
            'original_servings': recipe.servings,
            'servings': scaled.servings,
            'ratio': selector.ratio,
            'ratio_display': format_ratio(selector.ratio),
            'is_scaled': selector.is_scaled,
            'preview': selector.preview(),
        })
    except Exception:
        _LOGGER.exception("Unexpected error scaling recipe %r", recipe.title)
        return jsonify({'error': 'Internal server error'}), 500


@app.route('/api/format', methods=['POST'])
def format_ingredients():
    """Render ingredient display lines."""
    data = request.get_json(silent=True)

    if not isinstance(data, dict):
        return jsonify({'error': 'Request body must be a JSON object'}), 400

    ingredients_data = data.get('ingredients')
    if not isinstance(ingredients_data, list):
        return jsonify({'error': 'No ingredients provided'}), 400

    try:
        ingredients = [Ingredient.from_dict(ing) for ing in ingredients_data]
    except (ValueError, TypeError) as e:
        return jsonify({'error': str(e)}), 400

    try:
        return jsonify({'lines': [format_ingredient_display(ing) for ing in ingredients]})
    except Exception:
        _LOGGER.exception("Unexpected error formatting %d ingredients", len(ingredients))
        return jsonify({'error': 'Internal server error'}), 500


if __name__ == '__main__':
    logging.basicConfig(
        level=os.environ.get('LOG_LEVEL', 'INFO').upper(),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    )
    port = int(os.environ.get('PORT', 5001))
    debug = os.environ.get('FLASK_DEBUG', '').lower() in ('1', 'true', 'yes')
    _LOGGER.info("Recipe API running at http://localhost:%d", port)
    app.run(debug=debug, port=port, host='0.0.0.0')

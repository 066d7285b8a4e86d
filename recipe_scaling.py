#!/usr/bin/env python3
"""
Recipe Scaling - Scale ingredient quantities to a new serving count and
format them for display
"""

import json
import logging
import math
import random
import time
from dataclasses import dataclass, field, replace
from typing import Callable, Optional

_LOGGER = logging.getLogger(__name__)

# The serving-size control never leaves this range
MIN_SERVINGS = 1
MAX_SERVINGS = 100

FRACTION_TOLERANCE = 1e-6

# Largest accepted ingredient amount. Keeps amounts finite at MAX_SERVINGS.
MAX_AMOUNT = 1_000_000

# Common culinary fractions and their glyphs
UNICODE_FRACTIONS = [
    (1 / 8, '⅛'),
    (1 / 4, '¼'),
    (1 / 3, '⅓'),
    (3 / 8, '⅜'),
    (1 / 2, '½'),
    (5 / 8, '⅝'),
    (2 / 3, '⅔'),
    (3 / 4, '¾'),
    (7 / 8, '⅞'),
]

# Singular -> plural. Abbreviations don't inflect.
UNIT_PLURALS = {
    "cup": "cups",
    "tablespoon": "tablespoons",
    "tbsp": "tbsp",
    "teaspoon": "teaspoons",
    "tsp": "tsp",
    "pound": "pounds",
    "lb": "lbs",
    "ounce": "ounces",
    "oz": "oz",
    "gram": "grams",
    "g": "g",
    "kilogram": "kilograms",
    "kg": "kg",
    "liter": "liters",
    "l": "l",
    "milliliter": "milliliters",
    "ml": "ml",
    "piece": "pieces",
    "slice": "slices",
    "clove": "cloves",
    "can": "cans",
    "package": "packages",
    "bag": "bags",
}

UNIT_SINGULARS = {plural: singular for singular, plural in UNIT_PLURALS.items()}

# Units offered by the ingredient editor
COOKING_UNITS = [
    "cup", "cups",
    "tablespoon", "tablespoons", "tbsp",
    "teaspoon", "teaspoons", "tsp",
    "pound", "pounds", "lb", "lbs",
    "ounce", "ounces", "oz",
    "gram", "grams", "g",
    "kilogram", "kilograms", "kg",
    "liter", "liters", "l",
    "milliliter", "milliliters", "ml",
    "piece", "pieces",
    "slice", "slices",
    "clove", "cloves",
    "can", "cans",
    "package", "packages",
    "bag", "bags",
    "pinch", "dash", "to taste",
]


def generate_ingredient_id() -> str:
    """Create a new ingredient id, unique within a recipe."""
    return f"ingredient-{int(time.time() * 1000)}-{random.random()}"


@dataclass
class Ingredient:
    """A single ingredient line. amount=None means "to taste"."""
    name: str
    amount: Optional[float] = None
    unit: Optional[str] = None
    notes: Optional[str] = None
    id: str = field(default_factory=generate_ingredient_id)

    @classmethod
    def from_dict(cls, data: dict) -> "Ingredient":
        """Build an ingredient from request/file data, rejecting invalid values."""
        if not isinstance(data, dict):
            raise ValueError("Ingredient must be an object")

        name = data.get('name')
        if not isinstance(name, str) or not name.strip():
            raise ValueError("Ingredient name is required")

        amount = _parse_amount(data.get('amount'))

        unit = data.get('unit') or None
        if unit is not None and not isinstance(unit, str):
            raise ValueError(f"Invalid unit for {name!r}")

        notes = data.get('notes') or None
        if notes is not None and not isinstance(notes, str):
            raise ValueError(f"Invalid notes for {name!r}")

        ingredient_id = data.get('id') or generate_ingredient_id()

        return cls(
            name=name.strip(),
            amount=amount,
            unit=unit,
            notes=notes,
            id=str(ingredient_id),
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "amount": self.amount,
            "unit": self.unit,
            "notes": self.notes,
        }

    def __str__(self) -> str:
        return format_ingredient_display(self)


def _parse_amount(value) -> Optional[float]:
    """Parse an amount field. Empty means "to taste"; otherwise must be positive."""
    if value is None or value == "":
        return None
    if isinstance(value, bool):
        raise ValueError(f"Invalid amount: {value!r}")

    try:
        amount = float(value)
    except (TypeError, ValueError):
        raise ValueError(f"Invalid amount: {value!r}") from None

    if not math.isfinite(amount) or amount <= 0:
        raise ValueError(f"Amount must be a positive number, got {value!r}")
    if amount > MAX_AMOUNT:
        raise ValueError(f"Amount must be at most {MAX_AMOUNT}, got {value!r}")
    return amount


@dataclass
class Recipe:
    """A recipe. Ingredient amounts are correct for `servings` people."""
    title: str
    servings: int
    ingredients: list[Ingredient] = field(default_factory=list)
    description: Optional[str] = None
    category: Optional[str] = None
    tags: list[str] = field(default_factory=list)
    season: Optional[str] = None
    id: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict) -> "Recipe":
        """Build a recipe from request/file data, rejecting invalid values."""
        if not isinstance(data, dict):
            raise ValueError("Recipe must be an object")

        servings = parse_servings(data.get('servings'))

        ingredients_data = data.get('ingredients', [])
        if not isinstance(ingredients_data, list):
            raise ValueError("Ingredients must be a list")
        ingredients = [Ingredient.from_dict(ing) for ing in ingredients_data]

        tags = data.get('tags') or []
        if not isinstance(tags, list):
            raise ValueError("Tags must be a list")

        recipe_id = data.get('id')

        return cls(
            title=_optional_str(data, 'title') or "Untitled Recipe",
            servings=servings,
            ingredients=ingredients,
            description=_optional_str(data, 'description'),
            category=_optional_str(data, 'category'),
            tags=[str(tag) for tag in tags],
            season=_optional_str(data, 'season'),
            id=str(recipe_id) if recipe_id is not None else None,
        )

    def scale_to(self, servings: int) -> "Recipe":
        """Return a new recipe scaled to the given serving count."""
        return scale_recipe(self, servings)

    def to_dict(self) -> dict:
        """Convert recipe to dictionary."""
        return {
            "id": self.id,
            "title": self.title,
            "servings": self.servings,
            "description": self.description,
            "category": self.category,
            "tags": list(self.tags),
            "season": self.season,
            "ingredients": [ing.to_dict() for ing in self.ingredients],
        }

    def to_json(self, indent: int = 2) -> str:
        """Convert recipe to JSON string."""
        return json.dumps(self.to_dict(), indent=indent, ensure_ascii=False)

    def __str__(self) -> str:
        lines = [f"{'=' * 50}", f"{self.title}", f"{'=' * 50}"]

        lines.append(f"Servings: {self.servings}")
        if self.category:
            lines.append(f"Category: {self.category}")
        if self.season:
            lines.append(f"Season: {self.season}")
        if self.tags:
            lines.append(f"Tags: {', '.join(self.tags)}")
        if self.description:
            lines.append(f"\n{self.description}")

        lines.append(f"\n{'─' * 30}")
        lines.append("INGREDIENTS")
        lines.append(f"{'─' * 30}")
        for ing in self.ingredients:
            lines.append(f"  • {format_ingredient_display(ing)}")

        return "\n".join(lines)


def _optional_str(data: dict, key: str) -> Optional[str]:
    value = data.get(key)
    if value is not None and not isinstance(value, str):
        raise ValueError(f"Invalid {key}: {value!r}")
    return value


def parse_servings(value) -> int:
    """Parse a serving count, enforcing MIN_SERVINGS..MAX_SERVINGS."""
    if isinstance(value, bool):
        raise ValueError(f"Invalid servings: {value!r}")
    if isinstance(value, float) and not value.is_integer():
        raise ValueError(f"Servings must be a whole number, got {value!r}")

    try:
        servings = int(value)
    except (TypeError, ValueError):
        raise ValueError(f"Invalid servings: {value!r}") from None

    if not MIN_SERVINGS <= servings <= MAX_SERVINGS:
        raise ValueError(
            f"Servings must be between {MIN_SERVINGS} and {MAX_SERVINGS}, got {servings}")
    return servings


def format_quantity(amount: float) -> str:
    """
    Format an amount for display, using culinary fraction glyphs when close.

    Examples:
        >>> format_quantity(2)
        '2'
        >>> format_quantity(1.5)
        '1 ½'
        >>> format_quantity(0.25)
        '¼'
        >>> format_quantity(2.1)
        '2.1'
    """
    whole = math.floor(amount)
    fraction = amount - whole

    if abs(fraction) < FRACTION_TOLERANCE:
        return str(int(whole))

    for value, glyph in UNICODE_FRACTIONS:
        if abs(fraction - value) < FRACTION_TOLERANCE:
            if whole > 0:
                return f"{int(whole)} {glyph}"
            return glyph

    return f"{amount:.2f}".rstrip('0').rstrip('.')


def pluralize_unit(unit: Optional[str], amount: float,
                   tolerance: float = 0.0) -> Optional[str]:
    """
    Return the singular or plural form of a unit for the given amount.

    Unknown units pass through unchanged. `amount` counts as one only on exact
    equality unless a tolerance is given.
    """
    if not unit:
        return unit

    if abs(amount - 1) <= tolerance:
        return UNIT_SINGULARS.get(unit, unit)

    return UNIT_PLURALS.get(unit, unit)


def scale_ingredient(ingredient: Ingredient, ratio: float) -> Ingredient:
    """Return a new ingredient with its amount multiplied by ratio."""
    if ingredient.amount is None:
        return replace(ingredient)

    scaled_amount = ingredient.amount * ratio
    return replace(
        ingredient,
        amount=scaled_amount,
        unit=pluralize_unit(ingredient.unit, scaled_amount),
    )


def scaling_ratio(base_servings: int, target_servings: int) -> float:
    return target_servings / base_servings


def format_ratio(ratio: float) -> str:
    return f"×{ratio:.2f}"


def scale_recipe(recipe: Recipe, new_servings: int) -> Recipe:
    """
    Return a new recipe scaled to new_servings.

    The caller is responsible for keeping new_servings within
    MIN_SERVINGS..MAX_SERVINGS; it is not checked here. The input recipe is
    never modified.
    """
    ratio = scaling_ratio(recipe.servings, new_servings)
    _LOGGER.debug("Scaling %r from %d to %d servings (factor: %.2f)",
                  recipe.title, recipe.servings, new_servings, ratio)

    return replace(
        recipe,
        servings=new_servings,
        ingredients=[scale_ingredient(ing, ratio) for ing in recipe.ingredients],
        tags=list(recipe.tags),
    )


def format_ingredient_display(ingredient: Ingredient) -> str:
    """
    Render an ingredient as e.g. "1 ½ cups flour (sifted)". The unit is
    pluralized to agree with the amount.

    Ingredients without a usable amount (None, NaN, infinite or negative) are
    rendered as name and notes only.
    """
    notes = f" ({ingredient.notes})" if ingredient.notes and ingredient.notes.strip() else ""
    amount = ingredient.amount

    if amount is None or not _is_displayable_amount(amount):
        return f"{ingredient.name}{notes}"

    unit = pluralize_unit(ingredient.unit, amount)
    unit = f" {unit}" if unit else ""
    return f"{format_quantity(amount)}{unit} {ingredient.name}{notes}"


def _is_displayable_amount(amount) -> bool:
    if isinstance(amount, bool) or not isinstance(amount, (int, float)):
        return False
    return math.isfinite(amount) and amount >= 0


class ServingSizeSelector:
    """
    Serving-size control state: the base recipe, the selected serving count
    and the scaled copy derived from it.

    on_change(new_servings, scaled_recipe) is called after every accepted
    change; use it to persist a new base serving count.
    """

    def __init__(self, recipe: Recipe,
                 on_change: Optional[Callable[[int, Recipe], None]] = None):
        self.recipe = recipe
        self.current_servings = recipe.servings
        self.on_change = on_change

    @property
    def ratio(self) -> float:
        return scaling_ratio(self.recipe.servings, self.current_servings)

    @property
    def is_scaled(self) -> bool:
        return self.current_servings != self.recipe.servings

    @property
    def scaled_recipe(self) -> Recipe:
        return scale_recipe(self.recipe, self.current_servings)

    def set_servings(self, servings: int) -> bool:
        """Select a new serving count. Out-of-range values are ignored."""
        if servings < MIN_SERVINGS or servings > MAX_SERVINGS:
            _LOGGER.debug("Ignoring out-of-range servings: %s", servings)
            return False

        self.current_servings = servings
        if self.on_change:
            self.on_change(servings, self.scaled_recipe)
        return True

    def increment(self) -> bool:
        return self.set_servings(self.current_servings + 1)

    def decrement(self) -> bool:
        return self.set_servings(self.current_servings - 1)

    def reset(self) -> bool:
        return self.set_servings(self.recipe.servings)

    def preview(self) -> dict:
        """Original and scaled ingredient lines, side by side."""
        return {
            "original": [format_ingredient_display(ing) for ing in self.recipe.ingredients],
            "scaled": [format_ingredient_display(ing) for ing in self.scaled_recipe.ingredients],
        }


def demo():
    """Demonstrate scaling a recipe."""
    recipe = Recipe(
        title="Classic Chocolate Chip Cookies",
        servings=4,
        category="dessert",
        ingredients=[
            Ingredient("all-purpose flour", 2.25, "cups"),
            Ingredient("baking soda", 1, "tsp"),
            Ingredient("butter", 1, "cup", "softened"),
            Ingredient("granulated sugar", 0.75, "cup"),
            Ingredient("large eggs", 2),
            Ingredient("vanilla extract", 1, "teaspoon"),
            Ingredient("salt", None, None, "to taste"),
        ],
    )

    print("ORIGINAL RECIPE:")
    print(recipe)

    print("\n\n" + "=" * 50)
    print("SCALED TO 6 SERVINGS:")
    print("=" * 50)
    print(recipe.scale_to(6))

    print("\n\n" + "=" * 50)
    print("JSON OUTPUT:")
    print("=" * 50)
    print(recipe.to_json())


if __name__ == "__main__":
    demo()

import math

import pytest

from recipe_scaling import (
    Ingredient,
    Recipe,
    ServingSizeSelector,
    format_ingredient_display,
    format_quantity,
    format_ratio,
    parse_servings,
    pluralize_unit,
    scale_ingredient,
    scale_recipe,
)


def make_recipe():
    return Recipe(
        title="Pilaf",
        servings=4,
        category="dinner",
        tags=["rice"],
        ingredients=[
            Ingredient("rice", 2, "cups", id="a"),
            Ingredient("butter", 1, "tablespoon", "melted", id="b"),
            Ingredient("garlic", 3, "cloves", id="c"),
            Ingredient("salt", None, None, "to taste", id="d"),
        ],
    )


@pytest.mark.parametrize("amount, expected", [
    (2, "2"),
    (2.0, "2"),
    (1.5, "1 ½"),
    (0.25, "¼"),
    (0.333333, "⅓"),
    (2 / 3, "⅔"),
    (0.125, "⅛"),
    (3.875, "3 ⅞"),
    (2.1, "2.1"),
    (0.2, "0.2"),
    (1.456, "1.46"),
    (0, "0"),
])
def test_format_quantity(amount, expected):
    assert format_quantity(amount) == expected


@pytest.mark.parametrize("unit, amount, expected", [
    ("cup", 1, "cup"),
    ("cup", 2, "cups"),
    ("cups", 1, "cup"),
    ("cups", 3, "cups"),
    ("tbsp", 3, "tbsp"),
    ("lb", 2, "lbs"),
    ("lbs", 1, "lb"),
    ("cup", 0.5, "cups"),
    ("bizarre-unit", 5, "bizarre-unit"),
    ("bizarre-unit", 1, "bizarre-unit"),
    ("pinch", 2, "pinch"),
    (None, 2, None),
])
def test_pluralize_unit(unit, amount, expected):
    assert pluralize_unit(unit, amount) == expected


def test_pluralize_unit_exact_equality_by_default():
    assert pluralize_unit("cups", 0.9999999999) == "cups"
    assert pluralize_unit("cups", 0.9999999999, tolerance=1e-6) == "cup"


def test_scale_ingredient_keeps_identity_and_notes():
    ingredient = Ingredient("butter", 1, "tablespoon", "melted", id="b")

    scaled = scale_ingredient(ingredient, 2)

    assert scaled.amount == 2
    assert scaled.unit == "tablespoons"
    assert scaled.id == "b"
    assert scaled.name == "butter"
    assert scaled.notes == "melted"
    assert ingredient.amount == 1
    assert ingredient.unit == "tablespoon"


def test_scale_ingredient_leaves_to_taste_untouched():
    ingredient = Ingredient("salt", None, "pinch", "to taste", id="d")

    scaled = scale_ingredient(ingredient, 3)

    assert scaled == ingredient
    assert scaled is not ingredient


def test_scale_ingredient_propagates_bad_amounts():
    scaled = scale_ingredient(Ingredient("sugar", float("nan"), "cup"), 2)
    assert math.isnan(scaled.amount)


def test_scale_recipe_4_to_6_servings():
    recipe = Recipe(title="Rice", servings=4, ingredients=[Ingredient("rice", 2, "cup")])

    scaled = scale_recipe(recipe, 6)

    assert scaled.servings == 6
    assert scaled.ingredients[0].amount == 3
    assert scaled.ingredients[0].unit == "cups"
    assert format_ingredient_display(scaled.ingredients[0]) == "3 cups rice"


def test_scale_recipe_is_linear_and_preserves_order():
    recipe = make_recipe()

    scaled = scale_recipe(recipe, 7)

    ratio = 7 / 4
    assert [ing.id for ing in scaled.ingredients] == ["a", "b", "c", "d"]
    for original, new in zip(recipe.ingredients, scaled.ingredients):
        if original.amount is None:
            assert new.amount is None
        else:
            assert new.amount == original.amount * ratio


def test_scale_recipe_to_own_servings_is_identity():
    recipe = make_recipe()

    scaled = scale_recipe(recipe, recipe.servings)

    assert scaled.ingredients == recipe.ingredients


def test_scale_recipe_does_not_mutate_input():
    recipe = make_recipe()

    scaled = scale_recipe(recipe, 2)

    assert recipe.servings == 4
    assert recipe.ingredients[0].amount == 2
    assert scaled.title == "Pilaf"
    assert scaled.category == "dinner"
    assert scaled.tags == ["rice"]
    assert scaled.tags is not recipe.tags


def test_scale_down_singularizes():
    recipe = make_recipe()

    scaled = recipe.scale_to(2)

    assert scaled.ingredients[0].amount == 1
    assert scaled.ingredients[0].unit == "cup"
    assert str(scaled.ingredients[1]) == "½ tablespoons butter (melted)"


@pytest.mark.parametrize("ingredient, expected", [
    (Ingredient("flour", 1.5, "cup", "sifted"), "1 ½ cups flour (sifted)"),
    (Ingredient("salt", None, None, "to taste"), "salt (to taste)"),
    (Ingredient("salt", None, "pinch"), "salt"),
    (Ingredient("eggs", 2), "2 eggs"),
    (Ingredient("sugar", float("nan")), "sugar"),
    (Ingredient("sugar", float("inf"), "cup"), "sugar"),
    (Ingredient("sugar", -1, "cup", "oops"), "sugar (oops)"),
    (Ingredient("milk", 0.75, "cup", ""), "¾ cups milk"),
    (Ingredient("milk", 1, "cups"), "1 cup milk"),
    (Ingredient("garlic", 2, "clove"), "2 cloves garlic"),
    (Ingredient("paprika", 2, "pinch"), "2 pinch paprika"),
])
def test_format_ingredient_display(ingredient, expected):
    assert format_ingredient_display(ingredient) == expected


def test_format_ingredient_display_keeps_scaled_units():
    scaled = scale_ingredient(Ingredient("flour", 1, "cup", "sifted"), 1.5)

    assert format_ingredient_display(scaled) == "1 ½ cups flour (sifted)"


def test_format_ratio():
    assert format_ratio(1.5) == "×1.50"
    assert format_ratio(1 / 3) == "×0.33"


def test_ingredient_from_dict():
    ingredient = Ingredient.from_dict({
        "id": "x1", "name": " flour ", "amount": "2.5", "unit": "cups", "notes": "",
    })

    assert ingredient.id == "x1"
    assert ingredient.name == "flour"
    assert ingredient.amount == 2.5
    assert ingredient.unit == "cups"
    assert ingredient.notes is None


def test_ingredient_from_dict_generates_id():
    first = Ingredient.from_dict({"name": "salt"})
    second = Ingredient.from_dict({"name": "pepper"})

    assert first.id.startswith("ingredient-")
    assert first.id != second.id
    assert first.amount is None


@pytest.mark.parametrize("data", [
    {"name": ""},
    {"name": "   "},
    {"amount": 1},
    {"name": "flour", "amount": 0},
    {"name": "flour", "amount": -2},
    {"name": "flour", "amount": "lots"},
    {"name": "flour", "amount": float("nan")},
    {"name": "flour", "amount": True},
    {"name": "flour", "unit": 5},
    {"name": "flour", "amount": 1e308},
    {"name": "flour", "amount": 1_000_001},
    "flour",
])
def test_ingredient_from_dict_rejects_invalid(data):
    with pytest.raises(ValueError):
        Ingredient.from_dict(data)


def test_recipe_round_trips_through_dict():
    recipe = make_recipe()

    restored = Recipe.from_dict(recipe.to_dict())

    assert restored == recipe


def test_largest_amount_stays_finite_at_max_servings():
    recipe = Recipe.from_dict({
        "servings": 1,
        "ingredients": [{"name": "water", "amount": 1_000_000, "unit": "ml"}],
    })

    scaled = recipe.scale_to(100)

    assert math.isfinite(scaled.ingredients[0].amount)
    assert scaled.ingredients[0].amount == 100_000_000


@pytest.mark.parametrize("field_name", ["title", "description", "category", "season"])
@pytest.mark.parametrize("value", [5, ["soup"], {"name": "soup"}, True])
def test_recipe_from_dict_rejects_non_string_fields(field_name, value):
    with pytest.raises(ValueError):
        Recipe.from_dict({"servings": 2, field_name: value})


def test_recipe_from_dict_defaults_title():
    recipe = Recipe.from_dict({"servings": 2, "title": None, "season": "winter"})

    assert recipe.title == "Untitled Recipe"
    assert recipe.season == "winter"


@pytest.mark.parametrize("value, expected", [(1, 1), ("6", 6), (100, 100), (4.0, 4)])
def test_parse_servings(value, expected):
    assert parse_servings(value) == expected


@pytest.mark.parametrize("value", [0, 101, -3, 2.5, "many", None, True])
def test_parse_servings_rejects_invalid(value):
    with pytest.raises(ValueError):
        parse_servings(value)


def test_recipe_str_lists_ingredients():
    text = str(make_recipe())

    assert "Pilaf" in text
    assert "Servings: 4" in text
    assert "• 2 cups rice" in text
    assert "• salt (to taste)" in text


class TestServingSizeSelector:

    def test_starts_unscaled(self):
        selector = ServingSizeSelector(make_recipe())

        assert selector.current_servings == 4
        assert not selector.is_scaled
        assert selector.ratio == 1

    def test_increment_and_decrement(self):
        selector = ServingSizeSelector(make_recipe())

        assert selector.increment()
        assert selector.increment()
        assert selector.current_servings == 6
        assert selector.ratio == 1.5
        assert selector.decrement()
        assert selector.current_servings == 5

    def test_ignores_out_of_range(self):
        recipe = Recipe(title="Toast", servings=1, ingredients=[])
        selector = ServingSizeSelector(recipe)

        assert not selector.decrement()
        assert not selector.set_servings(101)
        assert selector.current_servings == 1
        assert selector.set_servings(100)
        assert not selector.increment()

    def test_reset(self):
        selector = ServingSizeSelector(make_recipe())
        selector.set_servings(10)

        selector.reset()

        assert selector.current_servings == 4
        assert not selector.is_scaled

    def test_on_change_receives_scaled_recipe(self):
        changes = []
        selector = ServingSizeSelector(
            make_recipe(), on_change=lambda servings, scaled: changes.append((servings, scaled)))

        selector.set_servings(8)
        selector.set_servings(0)

        assert len(changes) == 1
        servings, scaled = changes[0]
        assert servings == 8
        assert scaled.servings == 8
        assert scaled.ingredients[0].amount == 4

    def test_preview(self):
        selector = ServingSizeSelector(make_recipe())
        selector.set_servings(6)

        preview = selector.preview()

        assert preview["original"] == [
            "2 cups rice",
            "1 tablespoon butter (melted)",
            "3 cloves garlic",
            "salt (to taste)",
        ]
        assert preview["scaled"] == [
            "3 cups rice",
            "1 ½ tablespoons butter (melted)",
            "4 ½ cloves garlic",
            "salt (to taste)",
        ]

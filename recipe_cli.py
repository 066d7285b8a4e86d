#!/usr/bin/env python3
"""
Recipe Scaling CLI - Interactive serving-size adjustment
"""

import json
import logging
import os
import sys
from typing import Optional
from recipe_scaling import (
    MAX_SERVINGS,
    MIN_SERVINGS,
    Recipe,
    ServingSizeSelector,
    format_ratio,
)

_LOGGER = logging.getLogger(__name__)


def load_recipe(path: str) -> Recipe:
    """Load a recipe from a JSON file."""
    _LOGGER.debug("Loading recipe from %s", path)
    with open(path, encoding='utf-8') as f:
        return Recipe.from_dict(json.load(f))


def print_menu():
    """Print the main menu."""
    print("\n" + "─" * 40)
    print("SERVING SIZE - OPTIONS")
    print("─" * 40)
    print("  1. Increase servings (+1)")
    print("  2. Decrease servings (-1)")
    print("  3. Set servings")
    print("  4. Reset to original")
    print("  5. Show side-by-side preview")
    print("  6. Show scaled recipe")
    print("  7. Export scaled recipe to JSON")
    print("  8. Load another recipe")
    print("  0. Exit")
    print("─" * 40)


def print_status(selector: ServingSizeSelector):
    """Print the current serving count and scaling factor."""
    print(f"\nRecipe serves: {selector.current_servings} people")
    if selector.is_scaled:
        print(f"Scaling from {selector.recipe.servings} to {selector.current_servings} people "
              f"({format_ratio(selector.ratio)})")


def print_preview(selector: ServingSizeSelector):
    """Print original and scaled ingredients side by side."""
    preview = selector.preview()
    original_header = f"Original ({selector.recipe.servings} people)"
    scaled_header = f"Scaled ({selector.current_servings} people)"

    width = max([len(original_header)] + [len(line) for line in preview['original']]) + 4
    print(f"\n{original_header:<{width}}{scaled_header}")
    print(f"{'─' * (width - 2):<{width}}{'─' * len(scaled_header)}")
    for original, scaled in zip(preview['original'], preview['scaled']):
        print(f"{original:<{width}}{scaled}")


def prompt_for_recipe() -> Optional[Recipe]:
    """Ask for a recipe file until one loads. Returns None to quit."""
    while True:
        path = input("\nEnter recipe JSON file (or 'quit' to exit): ").strip()
        if path.lower() in ('quit', 'exit', 'q'):
            return None
        if not path:
            continue

        try:
            recipe = load_recipe(path)
        except OSError as e:
            print(f"\n❌ Could not read {path}: {e}")
            continue
        except json.JSONDecodeError as e:
            print(f"\n❌ {path} is not valid JSON: {e}")
            continue
        except ValueError as e:
            print(f"\n❌ Invalid recipe: {e}")
            continue

        print("\n✅ Recipe loaded\n")
        print(recipe)
        return recipe


def main(argv=None):
    argv = sys.argv[1:] if argv is None else argv
    logging.basicConfig(level=os.environ.get('LOG_LEVEL', 'WARNING').upper())

    print("=" * 50)
    print("🍳 RECIPE SCALER")
    print("=" * 50)

    recipe = None
    if argv:
        try:
            recipe = load_recipe(argv[0])
            print(recipe)
        except (OSError, ValueError) as e:
            print(f"\n❌ Could not load {argv[0]}: {e}")

    if recipe is None:
        recipe = prompt_for_recipe()
        if recipe is None:
            print("Goodbye!")
            return

    selector = ServingSizeSelector(recipe)

    while True:
        print_status(selector)
        print_menu()
        choice = input("Choose option: ").strip()

        if choice == '0':
            print("Goodbye!")
            break
        elif choice == '1':
            if not selector.increment():
                print(f"Servings can't go above {MAX_SERVINGS}")
        elif choice == '2':
            if not selector.decrement():
                print(f"Servings can't go below {MIN_SERVINGS}")
        elif choice == '3':
            try:
                servings = int(input(f"Enter servings ({MIN_SERVINGS}-{MAX_SERVINGS}): "))
            except ValueError:
                print("Invalid number. Please enter a whole number like 2 or 6")
                continue
            if not selector.set_servings(servings):
                print(f"Servings must be between {MIN_SERVINGS} and {MAX_SERVINGS}")
        elif choice == '4':
            selector.reset()
            print("\n✅ Reset to original servings")
        elif choice == '5':
            if selector.is_scaled:
                print_preview(selector)
            else:
                print("\nRecipe is not scaled. Change the servings first.")
        elif choice == '6':
            print("\n" + str(selector.scaled_recipe))
        elif choice == '7':
            filename = input("Enter filename (default: recipe_scaled.json): ").strip()
            if not filename:
                filename = "recipe_scaled.json"
            if not filename.endswith('.json'):
                filename += '.json'
            try:
                with open(filename, 'w', encoding='utf-8') as f:
                    f.write(selector.scaled_recipe.to_json())
            except OSError as e:
                print(f"\n❌ Could not write {filename}: {e}")
                continue
            print(f"\n✅ Saved to {filename}")
        elif choice == '8':
            new_recipe = prompt_for_recipe()
            if new_recipe is None:
                print("Goodbye!")
                break
            selector = ServingSizeSelector(new_recipe)
        else:
            print("Invalid option. Please choose 0-8.")


if __name__ == "__main__":
    main()

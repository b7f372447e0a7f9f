from recipe_flattener import (
    flatten_ingredients,
    flatten_instructions,
    recipe_json_to_plain_text,
    render_plain_text,
)
from recipe_models import HowToSection, HowToStep, PlainStep, Recipe


def test_only_recipe_instructions_section_contributes_steps():
    steps = [HowToStep(text="a"), HowToStep(text="b")]
    instructions = [
        HowToSection(name="Prep", items=steps),
        HowToSection(items=steps),
        HowToSection(name="recipe instructions", items=steps),
        HowToSection(name="Recipe Instructions", items=steps),
    ]

    assert flatten_instructions(instructions) == ["a", "b"]


def test_flatten_instructions_counts_follow_variants():
    instructions = [
        PlainStep("<b>Heat</b> the pan"),
        HowToSection(name="Recipe Instructions", items=[HowToStep(text="One"), HowToStep(), HowToStep(text="Three")]),
        HowToStep(),
        HowToSection(name="Notes", items=[HowToStep(text="Ignored")]),
        HowToStep(text="Serve &amp; enjoy"),
    ]

    assert flatten_instructions(instructions) == [
        "Heat the pan", "One", "", "Three", "", "Serve & enjoy"
    ]


def test_flatten_handles_absent_lists():
    assert flatten_instructions(None) == []
    assert flatten_ingredients(None) == []


def test_flatten_ingredients_keeps_order_and_duplicates():
    items = ["1 egg", "Salt &amp; pepper", "1 egg"]
    assert flatten_ingredients(items) == ["1 egg", "Salt & pepper", "1 egg"]


def test_manual_entry_drops_blank_lines():
    recipe = Recipe.from_manual_entry(
        "  Toast ",
        ["Bread ", "", "   ", " Butter"],
        ["Toast the bread", "  ", " Spread butter "],
    )

    assert recipe.name == "Toast"
    assert recipe.ingredients == ["Bread", "Butter"]
    assert recipe.instructions == [PlainStep("Toast the bread"), PlainStep("Spread butter")]
    assert recipe.images is None


def test_render_plain_text_skips_empty_sections():
    assert render_plain_text(Recipe()) == "Untitled Recipe\n"
    assert render_plain_text(Recipe(name="Tea", instructions=[PlainStep("Steep")])) == (
        "Tea\n\nInstructions:\n1. Steep\n"
    )


def test_recipe_json_to_plain_text_returns_empty_on_bad_payload():
    assert recipe_json_to_plain_text("not json") == ""
    assert recipe_json_to_plain_text('{"name": "Tea", "recipeIngredient": ["Leaves"]}') == (
        "Tea\n\nIngredients:\n1. Leaves\n"
    )

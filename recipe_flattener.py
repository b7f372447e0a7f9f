from typing import Iterable, List, Optional, Union

from constants import RECIPE_INSTRUCTIONS_SECTION, UNTITLED_RECIPE
from errors import MalformedRecipeError
from recipe_models import HowToSection, HowToStep, Instruction, PlainStep, Recipe
from recipe_schema import decode_recipe
from text_sanitizer import sanitize


def flatten_instructions(steps: Optional[Iterable[Instruction]]) -> List[str]:
    """Turn instructions into display strings, in source order.

    Only the section named exactly "Recipe Instructions" contributes its
    steps; every other section is dropped.
    """
    flattened: List[str] = []
    for instruction in steps or []:
        if isinstance(instruction, PlainStep):
            flattened.append(sanitize(instruction.text))
        elif isinstance(instruction, HowToSection):
            if instruction.name == RECIPE_INSTRUCTIONS_SECTION:
                flattened.extend(sanitize(s.text) if s.text else "" for s in instruction.items)
        elif isinstance(instruction, HowToStep):
            flattened.append(sanitize(instruction.text) if instruction.text else "")
    return flattened


def flatten_ingredients(items: Optional[Iterable[str]]) -> List[str]:
    return [sanitize(item) for item in items or []]


def _numbered(heading: str, lines: List[str]) -> List[str]:
    out = [f"{heading}:"]
    out.extend(f"{i}. {line}" for i, line in enumerate(lines, 1))
    return out


def render_plain_text(recipe: Recipe) -> str:
    """Render a recipe as numbered plain text, the voice assistant's context."""
    ingredients = flatten_ingredients(recipe.ingredients)
    instructions = flatten_instructions(recipe.instructions)

    text = [recipe.name or UNTITLED_RECIPE, ""]
    if ingredients:
        text.extend(_numbered("Ingredients", ingredients))
        text.append("")
    if instructions:
        text.extend(_numbered("Instructions", instructions))
    return "\n".join(text).strip() + "\n"


def recipe_json_to_plain_text(payload: Union[str, bytes]) -> str:
    try:
        recipe = decode_recipe(payload)
    except MalformedRecipeError:
        return ""
    return render_plain_text(recipe)

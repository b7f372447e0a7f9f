"""Tolerant decoding of schema.org style recipe JSON into Recipe."""
import json
import logging
from typing import Any, Callable, Dict, List, Optional, Sequence, Union

from errors import MalformedRecipeError
from recipe_models import HowToSection, HowToStep, Instruction, PlainStep, Recipe, ServiceReply

logger = logging.getLogger(__name__)

# Returned by a shape parser when the value does not have its shape.
_NO_MATCH = object()


def _optional_str(value: Any) -> Optional[str]:
    return value if isinstance(value, str) else None


def _is_optional_str(value: Any) -> bool:
    return value is None or isinstance(value, str)


def _image_object_url(value: Any) -> Any:
    if not isinstance(value, dict):
        return _NO_MATCH
    url, content_url = value.get("url"), value.get("contentUrl")
    if not (_is_optional_str(url) and _is_optional_str(content_url)):
        return _NO_MATCH
    return url if url is not None else content_url


def _image_url_list(value: Any) -> Any:
    if isinstance(value, list) and all(isinstance(v, str) for v in value):
        return list(value)
    return _NO_MATCH


def _image_object_list(value: Any) -> Any:
    if not isinstance(value, list):
        return _NO_MATCH
    urls = [_image_object_url(v) for v in value]
    if any(u is _NO_MATCH for u in urls):
        return _NO_MATCH
    return [u for u in urls if u is not None]


def _single_image_url(value: Any) -> Any:
    return [value] if isinstance(value, str) else _NO_MATCH


def _single_image_object(value: Any) -> Any:
    url = _image_object_url(value)
    if url is _NO_MATCH:
        return _NO_MATCH
    return [url] if url is not None else None


IMAGE_PARSERS: Sequence[Callable[[Any], Any]] = (
    _image_url_list,
    _image_object_list,
    _single_image_url,
    _single_image_object,
)


def decode_images(value: Any) -> Optional[List[str]]:
    if value is None:
        return None
    for parser in IMAGE_PARSERS:
        images = parser(value)
        if images is not _NO_MATCH:
            return images
    logger.debug("Dropping image field of unknown shape: %r", value)
    return None


def _plain_step(value: Any) -> Any:
    return PlainStep(value) if isinstance(value, str) else _NO_MATCH


def _how_to_step(value: Any) -> Any:
    if not isinstance(value, dict):
        return _NO_MATCH
    step_type, text = value.get("@type"), value.get("text")
    if not (_is_optional_str(step_type) and _is_optional_str(text)):
        return _NO_MATCH
    return HowToStep(type=step_type, text=text)


def _how_to_section(value: Any) -> Any:
    if not isinstance(value, dict):
        return _NO_MATCH
    section_type, name = value.get("@type"), value.get("name")
    elements = value.get("itemListElement")
    if not (_is_optional_str(section_type) and _is_optional_str(name)):
        return _NO_MATCH
    if not isinstance(elements, list):
        return _NO_MATCH
    steps = [_how_to_step(e) for e in elements]
    if any(s is _NO_MATCH for s in steps):
        return _NO_MATCH
    return HowToSection(type=section_type, name=name, items=steps)


INSTRUCTION_PARSERS: Sequence[Callable[[Any], Any]] = (
    _plain_step,
    _how_to_section,
    _how_to_step,
)


def decode_instruction(value: Any) -> Instruction:
    for parser in INSTRUCTION_PARSERS:
        instruction = parser(value)
        if instruction is not _NO_MATCH:
            return instruction
    raise MalformedRecipeError(f"Unrecognised instruction: {value!r}")


def decode_instructions(value: Any) -> Optional[List[Instruction]]:
    if not isinstance(value, list):
        if value is not None:
            logger.debug("Dropping recipeInstructions that is not a list: %r", value)
        return None
    try:
        return [decode_instruction(v) for v in value]
    except MalformedRecipeError as exc:
        logger.debug("Dropping recipeInstructions: %s", exc)
        return None


def decode_ingredients(value: Any) -> Optional[List[str]]:
    if isinstance(value, list) and all(isinstance(v, str) for v in value):
        return list(value)
    if value is not None:
        logger.debug("Dropping recipeIngredient of unknown shape: %r", value)
    return None


def recipe_from_dict(data: Any) -> Recipe:
    if not isinstance(data, dict):
        raise MalformedRecipeError(f"Expected a JSON object, got {type(data).__name__}")
    return Recipe(
        name=_optional_str(data.get("name")),
        thumbnail_url=_optional_str(data.get("thumbnailUrl")),
        images=decode_images(data.get("image")),
        ingredients=decode_ingredients(data.get("recipeIngredient")),
        instructions=decode_instructions(data.get("recipeInstructions")),
    )


def _load_json(payload: Union[str, bytes]) -> Any:
    try:
        return json.loads(payload)
    except (ValueError, TypeError, RecursionError) as exc:
        raise MalformedRecipeError(f"Invalid JSON: {exc}") from exc


def decode_recipe(payload: Union[str, bytes]) -> Recipe:
    """Decode a JSON document into a Recipe."""
    return recipe_from_dict(_load_json(payload))


def decode_service_reply(data: Any) -> ServiceReply:
    """Decode the extraction service reply: a recipe plus ``recipeFound``."""
    recipe = recipe_from_dict(data)
    found = data.get("recipeFound")
    if found is None:
        found = True
    elif not isinstance(found, bool):
        raise MalformedRecipeError(f"recipeFound must be a boolean, got {found!r}")
    return ServiceReply(recipe=recipe, recipe_found=found)


def _drop_none(data: Dict[str, Any]) -> Dict[str, Any]:
    return {k: v for k, v in data.items() if v is not None}


def _encode_step(step: HowToStep) -> Dict[str, Any]:
    return _drop_none({"@type": step.type, "text": step.text})


def encode_instruction(instruction: Instruction) -> Any:
    if isinstance(instruction, PlainStep):
        return instruction.text
    if isinstance(instruction, HowToSection):
        data = _drop_none({"@type": instruction.type, "name": instruction.name})
        data["itemListElement"] = [_encode_step(s) for s in instruction.items]
        return data
    return _encode_step(instruction)


def encode_recipe(recipe: Recipe) -> Dict[str, Any]:
    instructions = None
    if recipe.instructions is not None:
        instructions = [encode_instruction(i) for i in recipe.instructions]
    return _drop_none({
        "name": recipe.name,
        "thumbnailUrl": recipe.thumbnail_url,
        "image": recipe.images,
        "recipeIngredient": recipe.ingredients,
        "recipeInstructions": instructions,
    })


def dumps_recipe(recipe: Recipe, indent: Optional[int] = None) -> str:
    return json.dumps(encode_recipe(recipe), indent=indent, ensure_ascii=False)

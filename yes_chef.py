import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from errors import MalformedRecipeError, ScaleError
from page_content import extract_page_content
from recipe_extractor import RecipeExtractor
from recipe_flattener import render_plain_text
from recipe_models import ExtractionResult, Recipe
from recipe_scaler import IngredientScaler
from recipe_schema import decode_recipe, dumps_recipe
from recipe_service import RecipeServiceClient
from settings import load_settings


def recipe_filename(recipe: Recipe) -> str:
    stem = (recipe.name or "recipe").replace("/", "-").strip()[:80]
    return f"{stem or 'recipe'}.json"


def save_recipe(recipe: Recipe, out_dir: Path) -> Path:
    out_dir.mkdir(parents=True, exist_ok=True)
    path = out_dir / recipe_filename(recipe)
    with open(path, "w", encoding="utf-8") as f:
        f.write(dumps_recipe(recipe, indent=2))
        f.write("\n")
    return path


def _report(result: ExtractionResult, out_dir: Path) -> int:
    if not result.ok:
        print(f"No recipe: {result.failure.value}" + (f" ({result.detail})" if result.detail else ""),
              file=sys.stderr)
        return 1
    path = save_recipe(result.recipe, out_dir)
    print(render_plain_text(result.recipe))
    print("Saved:", path)
    return 0


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description="Capture a recipe from a saved web page or a photo.")
    ap.add_argument("--out-dir", default="./recipes", help="Directory for extracted recipe JSON files")
    ap.add_argument("-v", "--verbose", action="store_true", help="Log debug output")
    sub = ap.add_subparsers(dest="command", required=True)

    page = sub.add_parser("page", help="Extract a recipe from a saved HTML page")
    page.add_argument("html", type=Path, help="HTML file")

    image = sub.add_parser("image", help="Extract a recipe from a photo")
    image.add_argument("image", type=Path, help="Image file")
    image.add_argument("--mime-type", default=None, help="Image MIME type (default from settings)")

    scale = sub.add_parser("scale", help="Rescale the ingredients of a recipe JSON file")
    scale.add_argument("recipe", type=Path, help="Recipe JSON file")
    scale.add_argument("--factor", type=float, required=True, help="Multiplier, e.g. 2 or 0.5")
    return ap


async def _run(args: argparse.Namespace) -> int:
    settings = load_settings()
    service = RecipeServiceClient(settings)
    out_dir = Path(args.out_dir)

    if args.command == "page":
        page = extract_page_content(args.html.read_text(encoding="utf-8", errors="replace"))
        extractor = RecipeExtractor(service, deadline=settings.extraction_timeout)
        return _report(await extractor.extract_from_page(page), out_dir)

    if args.command == "image":
        extractor = RecipeExtractor(service, deadline=settings.extraction_timeout)
        result = await extractor.extract_from_image(args.image.read_bytes(), args.mime_type)
        return _report(result, out_dir)

    try:
        recipe = decode_recipe(args.recipe.read_bytes())
    except MalformedRecipeError as exc:
        raise SystemExit(f"Cannot read {args.recipe}: {exc}")
    try:
        scaled = await IngredientScaler(service).scale(recipe.ingredients or [], args.factor)
    except ScaleError as exc:
        raise SystemExit(f"Scaling failed: {exc}")
    print(json.dumps(scaled, indent=2, ensure_ascii=False))
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s"
    )
    return asyncio.run(_run(args))


if __name__ == "__main__":
    sys.exit(main())

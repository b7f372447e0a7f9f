from typing import List

DEFAULT_API_BASE = "https://yes-chef.ai/api/recipe"
EXTRACT_PATH = "/extract"
SCALE_PATH = "/scale"

DEFAULT_REQUEST_TIMEOUT = 30.0
DEFAULT_EXTRACTION_TIMEOUT = 15.0
DEFAULT_IMAGE_MIME_TYPE = "image/jpeg"

RECIPE_TYPE = "Recipe"
RECIPE_INSTRUCTIONS_SECTION = "Recipe Instructions"
UNTITLED_RECIPE = "Untitled Recipe"

# Recipe card containers of the common WordPress recipe plugins.
RECIPE_CONTENT_SELECTORS: List[str] = [
    ".recipe-callout",
    ".tasty-recipes",
    ".easyrecipe",
    ".innerrecipe",
    ".recipe-summary.wide",
    ".wprm-recipe-container",
    ".recipe-content",
    ".simple-recipe-pro",
    ".mv-recipe-card",
    'div[itemtype="http://schema.org/Recipe"]',
    'div[itemtype="https://schema.org/Recipe"]',
    "div.recipediv",
]

NON_CONTENT_TAGS = ["script", "style", "noscript"]

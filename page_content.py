import json
import logging
import re
from dataclasses import dataclass
from typing import Any, Iterable, Optional

from bs4 import BeautifulSoup

from constants import NON_CONTENT_TAGS, RECIPE_CONTENT_SELECTORS, RECIPE_TYPE

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PageContent:
    """What a loaded page yields: a structured recipe candidate and visible text."""

    structured_candidate: Optional[str] = None
    visible_text: Optional[str] = None

    @classmethod
    def from_evaluation(cls, result: Any) -> "PageContent":
        """Adapt the dictionary returned by a page-evaluation script."""
        if not isinstance(result, dict):
            return cls()
        candidate = result.get("structuredCandidate", result.get("recipe"))
        text = result.get("visibleText", result.get("textContent"))
        return cls(
            structured_candidate=candidate if isinstance(candidate, str) else None,
            visible_text=text if isinstance(text, str) else None,
        )


def _is_recipe(item: Any) -> bool:
    if not isinstance(item, dict):
        return False
    item_type = item.get("@type")
    types = [item_type] if isinstance(item_type, str) else (item_type or [])
    return isinstance(types, list) and RECIPE_TYPE in types


def find_recipe_node(data: Any) -> Optional[dict]:
    """Locate a Recipe object in a JSON-LD document, including @graph containers."""
    items = data if isinstance(data, list) else [data]
    for item in items:
        if _is_recipe(item):
            return item
        graph = item.get("@graph") if isinstance(item, dict) else None
        if isinstance(graph, list):
            for node in graph:
                if _is_recipe(node):
                    return node
    return None


def find_structured_candidate(soup: BeautifulSoup) -> Optional[str]:
    for script in soup.find_all("script", type="application/ld+json"):
        script_text = script.string or script.get_text()
        if not script_text:
            continue
        try:
            data = json.loads(script_text)
        except (json.JSONDecodeError, RecursionError):
            logger.debug("Skipping unparseable JSON-LD block")
            continue
        recipe = find_recipe_node(data)
        if recipe is not None:
            return json.dumps(recipe, ensure_ascii=False)
    return None


def _clean_text(chunks: Iterable[str]) -> str:
    return re.sub(r"\s\s+", " ", "\n\n".join(chunks)).strip()


def find_visible_text(soup: BeautifulSoup) -> Optional[str]:
    for tag in soup(NON_CONTENT_TAGS):
        tag.decompose()

    matched = soup.select(", ".join(RECIPE_CONTENT_SELECTORS))
    if matched:
        return _clean_text(el.get_text(" ") for el in matched)

    root = soup.body or soup
    text = root.get_text("\n")
    lines = [line.strip() for line in text.splitlines() if line.strip()]
    return "\n".join(lines) or None


def extract_page_content(html: str) -> PageContent:
    """Compute the structured candidate and visible text of an HTML page."""
    soup = BeautifulSoup(html, "html.parser")
    candidate = find_structured_candidate(soup)
    return PageContent(structured_candidate=candidate, visible_text=find_visible_text(soup))

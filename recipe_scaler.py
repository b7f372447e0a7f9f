import asyncio
import logging
import math
from typing import List

from errors import RemoteServiceError, ScaleError
from recipe_service import RecipeServiceClient

logger = logging.getLogger(__name__)


class IngredientScaler:
    """Rewrites ingredient quantities through the remote scaling service.

    Quantities are never parsed locally. On failure a ScaleError is raised
    and the caller keeps its current list.
    """

    def __init__(self, service: RecipeServiceClient):
        self.service = service

    async def scale(self, ingredients: List[str], factor: float) -> List[str]:
        if not math.isfinite(factor) or factor <= 0:
            raise ScaleError(f"Scale factor must be a positive number, got {factor}")
        if factor == 1.0 or not ingredients:
            return list(ingredients)
        try:
            return await asyncio.to_thread(self.service.scale_ingredients, list(ingredients), factor)
        except RemoteServiceError as exc:
            logger.warning("Scaling by %s failed: %s", factor, exc)
            raise ScaleError(str(exc)) from exc

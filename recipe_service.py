import base64
import logging
from typing import Any, Dict, List, Optional

import requests

from constants import EXTRACT_PATH, SCALE_PATH
from errors import MalformedRecipeError, RemoteServiceError
from recipe_models import ServiceReply
from recipe_schema import decode_service_reply
from settings import Settings

logger = logging.getLogger(__name__)

JSON_HEADERS = {"Content-Type": "application/json"}


def image_payload(image: bytes, mime_type: str, inline: bool = True) -> Any:
    """Encode image bytes for the extraction service.

    The inline-data envelope is the current format; ``inline=False`` yields
    the older data-URL string.
    """
    data = base64.b64encode(image).decode("ascii")
    if not inline:
        return f"data:{mime_type};base64,{data}"
    return {"inlineData": {"data": data, "mimeType": mime_type}}


class RecipeServiceClient:
    """Client for the remote recipe extraction and scaling endpoints."""

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or Settings()

    def _post(self, path: str, payload: Dict[str, Any]) -> Any:
        url = f"{self.settings.api_base}{path}"
        try:
            resp = requests.post(
                url,
                headers=JSON_HEADERS,
                json=payload,
                timeout=self.settings.request_timeout
            )
        except requests.RequestException as exc:
            raise RemoteServiceError(f"Request to {url} failed: {exc}") from exc
        if not resp.ok:
            raise RemoteServiceError(f"Recipe API error {resp.status_code}: {resp.text}")
        try:
            return resp.json()
        except (ValueError, RecursionError) as exc:
            raise RemoteServiceError(f"Recipe API returned invalid JSON: {resp.text[:200]}") from exc

    def _extract(self, payload: Dict[str, Any]) -> ServiceReply:
        data = self._post(EXTRACT_PATH, payload)
        try:
            reply = decode_service_reply(data)
        except MalformedRecipeError as exc:
            raise RemoteServiceError(f"Unexpected extraction reply: {exc}") from exc
        if not reply.recipe_found:
            logger.info("Extraction API returned no recipe found")
        return reply

    def extract_from_text(self, text: str) -> ServiceReply:
        return self._extract({"textContent": text})

    def extract_from_image(self, image: bytes, mime_type: Optional[str] = None) -> ServiceReply:
        content = image_payload(image, mime_type or self.settings.image_mime_type)
        return self._extract({"imageContent": content})

    def scale_ingredients(self, ingredients: List[str], factor: float) -> List[str]:
        data = self._post(SCALE_PATH, {"ingredients": ingredients, "scaleFactor": factor})
        scaled = data.get("scaledIngredients") if isinstance(data, dict) else None
        if not isinstance(scaled, list) or not all(isinstance(s, str) for s in scaled):
            raise RemoteServiceError(f"Unexpected scaling reply: {data!r}")
        return scaled

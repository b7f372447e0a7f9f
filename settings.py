import os
from dataclasses import dataclass

from dotenv import load_dotenv

from constants import (
    DEFAULT_API_BASE,
    DEFAULT_EXTRACTION_TIMEOUT,
    DEFAULT_IMAGE_MIME_TYPE,
    DEFAULT_REQUEST_TIMEOUT,
)


@dataclass(frozen=True)
class Settings:
    """Runtime configuration of the recipe service clients."""

    api_base: str = DEFAULT_API_BASE
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT
    extraction_timeout: float = DEFAULT_EXTRACTION_TIMEOUT
    image_mime_type: str = DEFAULT_IMAGE_MIME_TYPE


def _float_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number of seconds, got {raw!r}") from None


def load_settings() -> Settings:
    """Read settings from the environment, after loading a .env file if present."""
    load_dotenv()
    return Settings(
        api_base=(os.getenv("YES_CHEF_API_BASE") or DEFAULT_API_BASE).rstrip("/"),
        request_timeout=_float_env("YES_CHEF_REQUEST_TIMEOUT", DEFAULT_REQUEST_TIMEOUT),
        extraction_timeout=_float_env("YES_CHEF_EXTRACTION_TIMEOUT", DEFAULT_EXTRACTION_TIMEOUT),
        image_mime_type=os.getenv("YES_CHEF_IMAGE_MIME_TYPE") or DEFAULT_IMAGE_MIME_TYPE,
    )

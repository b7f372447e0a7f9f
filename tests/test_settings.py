import pytest

from constants import DEFAULT_API_BASE
from settings import load_settings

ENV_VARS = [
    "YES_CHEF_API_BASE",
    "YES_CHEF_REQUEST_TIMEOUT",
    "YES_CHEF_EXTRACTION_TIMEOUT",
    "YES_CHEF_IMAGE_MIME_TYPE",
]


@pytest.fixture
def clean_env(monkeypatch):
    monkeypatch.setattr("settings.load_dotenv", lambda: False)
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


def test_load_settings_defaults(clean_env):
    settings = load_settings()

    assert settings.api_base == DEFAULT_API_BASE
    assert settings.request_timeout == 30.0
    assert settings.extraction_timeout == 15.0
    assert settings.image_mime_type == "image/jpeg"


def test_load_settings_reads_environment(clean_env):
    clean_env.setenv("YES_CHEF_API_BASE", "http://localhost:8080/api/recipe/")
    clean_env.setenv("YES_CHEF_REQUEST_TIMEOUT", "5")
    clean_env.setenv("YES_CHEF_EXTRACTION_TIMEOUT", "2.5")

    settings = load_settings()

    assert settings.api_base == "http://localhost:8080/api/recipe"
    assert settings.request_timeout == 5.0
    assert settings.extraction_timeout == 2.5


def test_load_settings_rejects_bad_timeout(clean_env):
    clean_env.setenv("YES_CHEF_EXTRACTION_TIMEOUT", "soon")

    with pytest.raises(ValueError, match="YES_CHEF_EXTRACTION_TIMEOUT"):
        load_settings()

"""Tests for settings loading."""

from pathlib import Path

import pytest

from imagestudio.config import DEFAULT_MODEL_ID, Settings


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    for name in [
        "GEMINI_API_KEY",
        "GEMINI_MODEL_ID",
        "IMAGESTUDIO_IMAGE_DIR",
        "IMAGESTUDIO_IMAGE_URL_PREFIX",
        "IMAGESTUDIO_RECORDS_PATH",
        "IMAGESTUDIO_MAX_ATTEMPTS",
        "IMAGESTUDIO_TIMEOUT_SECONDS",
        "IMAGESTUDIO_CORS_ORIGINS",
    ]:
        # setenv first so teardown also removes values loaded from .env files
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    # Keep any developer .env out of the picture
    monkeypatch.chdir(tmp_path)


def test_from_env_requires_api_key():
    with pytest.raises(ValueError, match="GEMINI_API_KEY"):
        Settings.from_env()


def test_from_env_defaults(monkeypatch, tmp_path):
    monkeypatch.setenv("GEMINI_API_KEY", "env-key")

    settings = Settings.from_env()

    assert settings.gemini_api_key == "env-key"
    assert settings.model_id == DEFAULT_MODEL_ID
    assert settings.image_dir == tmp_path / "public" / "generated-images"
    assert settings.records_path == tmp_path / "data" / "generatedImages.json"
    assert settings.image_url_prefix == "/generated-images"
    assert settings.max_attempts == 1
    assert settings.request_timeout_seconds is None


def test_explicit_api_key_wins(monkeypatch):
    monkeypatch.setenv("GEMINI_API_KEY", "env-key")

    assert Settings.from_env(api_key="explicit").gemini_api_key == "explicit"


def test_from_env_overrides(monkeypatch, tmp_path):
    monkeypatch.setenv("GEMINI_API_KEY", "env-key")
    monkeypatch.setenv("GEMINI_MODEL_ID", "gemini-other")
    monkeypatch.setenv("IMAGESTUDIO_IMAGE_DIR", "images")
    monkeypatch.setenv("IMAGESTUDIO_IMAGE_URL_PREFIX", "/img/")
    monkeypatch.setenv("IMAGESTUDIO_MAX_ATTEMPTS", "3")
    monkeypatch.setenv("IMAGESTUDIO_TIMEOUT_SECONDS", "30")
    monkeypatch.setenv("IMAGESTUDIO_CORS_ORIGINS", "http://localhost:3000, https://example.com")

    settings = Settings.from_env()

    assert settings.model_id == "gemini-other"
    assert settings.image_dir == (tmp_path / "images").resolve()
    assert settings.image_url_prefix == "/img"
    assert settings.max_attempts == 3
    assert settings.request_timeout_seconds == 30.0
    assert settings.cors_origins == ["http://localhost:3000", "https://example.com"]


def test_from_env_reads_dotenv(tmp_path):
    (tmp_path / ".env").write_text("GEMINI_API_KEY=dotenv-key\n")

    settings = Settings.from_env()

    assert settings.gemini_api_key == "dotenv-key"


def test_settings_validation():
    with pytest.raises(Exception):  # Pydantic ValidationError
        Settings(gemini_api_key="")

    with pytest.raises(Exception):  # Pydantic ValidationError
        Settings(gemini_api_key="key", max_attempts=0)

    assert isinstance(Settings(gemini_api_key="key").image_dir, Path)

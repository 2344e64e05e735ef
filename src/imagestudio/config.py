"""Runtime configuration for imagestudio.

Settings are built once at startup and passed explicitly into the handler
and the API. ``Settings.from_env()`` reads the process environment after
loading a ``.env`` file from the working directory, if present.
"""

import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

DEFAULT_MODEL_ID = "gemini-2.0-flash-exp"
DEFAULT_IMAGE_DIR = Path("public") / "generated-images"
DEFAULT_IMAGE_URL_PREFIX = "/generated-images"
DEFAULT_RECORDS_PATH = Path("data") / "generatedImages.json"


class Settings(BaseModel):
    """Explicit configuration for the generation handler and HTTP app."""

    gemini_api_key: str = Field(..., min_length=1, description="Gemini API key")
    model_id: str = Field(DEFAULT_MODEL_ID, description="Gemini model identifier")
    temperature: float = Field(1.0, ge=0.0, le=2.0, description="Sampling temperature")
    top_p: float = Field(0.95, ge=0.0, le=1.0, description="Nucleus sampling probability")
    top_k: int = Field(40, ge=1, description="Top-k sampling")
    response_modalities: list[str] = Field(
        default_factory=lambda: ["TEXT", "IMAGE"],
        description="Output modalities requested from the model",
    )
    image_dir: Path = Field(default_factory=lambda: Path.cwd() / DEFAULT_IMAGE_DIR)
    image_url_prefix: str = Field(DEFAULT_IMAGE_URL_PREFIX, description="Public URL prefix for stored images")
    records_path: Path = Field(default_factory=lambda: Path.cwd() / DEFAULT_RECORDS_PATH)
    max_attempts: int = Field(1, ge=1, le=5, description="Provider call attempts (1 = no retries)")
    request_timeout_seconds: Optional[float] = Field(
        None, gt=0, description="Per-attempt provider timeout (None = rely on the network client)"
    )
    cors_origins: list[str] = Field(default_factory=lambda: ["*"])

    @field_validator("image_url_prefix")
    @classmethod
    def strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    @classmethod
    def from_env(cls, api_key: str | None = None) -> "Settings":
        """
        Build settings from environment variables.

        Args:
            api_key: Gemini API key (defaults to GEMINI_API_KEY environment variable)

        Raises:
            ValueError: If no API key is available
        """
        load_dotenv(dotenv_path=Path.cwd() / ".env")

        api_key = api_key or os.getenv("GEMINI_API_KEY")
        if not api_key:
            raise ValueError("GEMINI_API_KEY environment variable or api_key parameter is required")

        values: dict = {"gemini_api_key": api_key}
        if os.getenv("GEMINI_MODEL_ID"):
            values["model_id"] = os.environ["GEMINI_MODEL_ID"]
        if os.getenv("IMAGESTUDIO_IMAGE_DIR"):
            values["image_dir"] = Path(os.environ["IMAGESTUDIO_IMAGE_DIR"]).resolve()
        if os.getenv("IMAGESTUDIO_IMAGE_URL_PREFIX"):
            values["image_url_prefix"] = os.environ["IMAGESTUDIO_IMAGE_URL_PREFIX"]
        if os.getenv("IMAGESTUDIO_RECORDS_PATH"):
            values["records_path"] = Path(os.environ["IMAGESTUDIO_RECORDS_PATH"]).resolve()
        if os.getenv("IMAGESTUDIO_MAX_ATTEMPTS"):
            values["max_attempts"] = int(os.environ["IMAGESTUDIO_MAX_ATTEMPTS"])
        if os.getenv("IMAGESTUDIO_TIMEOUT_SECONDS"):
            values["request_timeout_seconds"] = float(os.environ["IMAGESTUDIO_TIMEOUT_SECONDS"])
        if os.getenv("IMAGESTUDIO_CORS_ORIGINS"):
            values["cors_origins"] = [
                origin.strip() for origin in os.environ["IMAGESTUDIO_CORS_ORIGINS"].split(",") if origin.strip()
            ]

        return cls(**values)

"""Request models for imagestudio."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class Role(str, Enum):
    """Chat roles understood by the generation provider."""

    USER = "user"
    MODEL = "model"


class HistoryPart(BaseModel):
    """One part of a prior chat turn. Only one of text/image is expected."""

    model_config = ConfigDict(extra="ignore")

    text: Optional[str] = Field(None, description="Plain text content")
    image: Optional[str] = Field(None, description="Image as a data URL (data:<mime>;base64,<payload>)")


class HistoryItem(BaseModel):
    """A prior chat turn."""

    model_config = ConfigDict(extra="ignore")

    role: Role = Field(..., description="Who produced the turn")
    parts: list[HistoryPart] = Field(default_factory=list, description="Ordered parts of the turn")


class GenerationRequest(BaseModel):
    """Request model for image generation/editing.

    ``prompt`` is optional at the model level so the handler can reject a
    missing prompt itself and report it as ``INVALID_INPUT``.
    """

    model_config = ConfigDict(extra="ignore")

    prompt: Optional[str] = Field(None, description="Generation prompt")
    image: Optional[str] = Field(
        None,
        description="Input image as a data URL. When provided, the model edits this image instead of generating from scratch.",
    )
    history: Optional[list[HistoryItem]] = Field(None, description="Prior chat turns, oldest first")

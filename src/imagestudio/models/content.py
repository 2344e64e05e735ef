"""Provider-neutral chat content models."""

from typing import Optional

from pydantic import BaseModel, Field, model_validator

from imagestudio.models.requests import Role


class InlineData(BaseModel):
    """Binary payload carried inline in a chat message."""

    data: bytes = Field(..., description="Decoded binary content")
    mime_type: str = Field("image/png", description="MIME type of the payload")


class ContentPart(BaseModel):
    """A single unit of chat content: either text or inline binary data."""

    text: Optional[str] = None
    inline_data: Optional[InlineData] = None

    @model_validator(mode="after")
    def validate_single_payload(self):
        """Ensure exactly one payload is set."""
        if (self.text is None) == (self.inline_data is None):
            raise ValueError("exactly one of text or inline_data must be set")
        return self

    @classmethod
    def from_text(cls, text: str) -> "ContentPart":
        return cls(text=text)

    @classmethod
    def from_bytes(cls, data: bytes, mime_type: str) -> "ContentPart":
        return cls(inline_data=InlineData(data=data, mime_type=mime_type))


class ChatTurn(BaseModel):
    """A translated chat turn ready to be sent to a provider."""

    role: Role
    parts: list[ContentPart] = Field(..., min_length=1)

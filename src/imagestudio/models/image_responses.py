"""Image generation output models."""

from typing import Optional

from pydantic import BaseModel, Field

from imagestudio.models.responses import GenerationError


class GenerationOutput(BaseModel):
    """Successful output of a generation request."""

    image: Optional[str] = Field(None, description="Generated image as a data URL")
    description: Optional[str] = Field(None, description="Text returned alongside the image")
    image_path: Optional[str] = Field(None, description="Public path of the stored image file")
    mime_type: Optional[str] = Field(None, description="MIME type of the generated image")
    persistence_errors: list[GenerationError] = Field(
        default_factory=list,
        description="Storage failures that were logged but did not fail the request",
    )

    def to_http_body(self) -> dict:
        return {"image": self.image, "description": self.description}

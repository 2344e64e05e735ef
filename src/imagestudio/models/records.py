"""Persisted generation record model."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class GenerationRecord(BaseModel):
    """Metadata describing one completed generation request.

    Serialized with camelCase keys (``imagePath``, ``createdAt``) to keep the
    JSON store format stable.
    """

    model_config = ConfigDict(populate_by_name=True)

    prompt: str = Field(..., description="Prompt that produced the generation")
    image_path: Optional[str] = Field(None, alias="imagePath", description="Public path of the stored image")
    created_at: datetime = Field(..., alias="createdAt", description="When the record was created (UTC)")

    def to_json_dict(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)

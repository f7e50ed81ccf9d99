"""Pydantic models for get image request."""

from pydantic import BaseModel, ConfigDict, Field


class GetImageRequest(BaseModel):
    """Validation model for get image request."""

    model_config = ConfigDict(str_strip_whitespace=True)

    image_id: str = Field(..., min_length=1, description="Image ID to fetch")

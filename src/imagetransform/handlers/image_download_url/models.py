"""Pydantic models for original image download URL request."""

from pydantic import BaseModel, ConfigDict, Field


class ImageDownloadUrlRequest(BaseModel):
    """Validation model for image download URL request."""

    model_config = ConfigDict(str_strip_whitespace=True)

    image_id: str = Field(..., min_length=1, description="Image ID to download")
